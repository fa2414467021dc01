"""
Kaleido - Front End for a Minimal Expression Language
=====================================================

Kaleido is a tiny language of numeric literals, variables, function
calls, the binary operators + - *, function definitions and extern
declarations:

    extern sin(x)
    def f(x y) x * y + sin(x)
    f(1, 2)

This package provides the front end: a pull-based lexer, a recursive
descent parser producing an immutable AST, and a command-line tool.

Main Components
---------------
- **frontend**: lexer, AST, parser, diagnostics and the top-level driver
- **cli**: the kaleido-parse command

Quick Start
-----------
    >>> from kaleido import parse_source
    >>> for result in parse_source("def id(x) x"):
    ...     print(result.node.prototype.name)
    id

Or from the shell:
    $ kaleido-parse program.kal
    $ echo "1 - 2 * 3" | kaleido-parse --ast
"""

__version__ = "1.0.0"

from kaleido.errors import (
    KaleidoError,
    KaleidoSyntaxError,
    TooManyErrors,
    ConfigError,
)
from kaleido.frontend import (
    Lexer,
    Token,
    TokenType,
    Parser,
    ParserOptions,
    ParseResult,
    ParseFailure,
    DiagnosticReporter,
    TopLevelDriver,
    FunctionDef,
    Prototype,
    parse_source,
    parse_expression_source,
)

__all__ = [
    "__version__",
    # Errors
    "KaleidoError",
    "KaleidoSyntaxError",
    "TooManyErrors",
    "ConfigError",
    # Front end
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "ParserOptions",
    "ParseResult",
    "ParseFailure",
    "DiagnosticReporter",
    "TopLevelDriver",
    "FunctionDef",
    "Prototype",
    "parse_source",
    "parse_expression_source",
]
