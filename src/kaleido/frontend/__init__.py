"""
Kaleido Front End
=================

Lexer and parser for the Kaleido expression language.

Pipeline
--------
    Characters → Lexer → Tokens → Parser → AST (top-level FunctionDefs)

The parser pulls one token at a time from the lexer. The top-level
driver asks the parser for one form at a time and skips a single token
after every failure.

Usage
-----
>>> from kaleido.frontend import parse_source
>>> results = parse_source("def twice(x) x+x; twice(4)")
>>> [r.ok for r in results]
[True, True]
"""

from kaleido.frontend.lexer import Lexer, Token, TokenType, tokenize
from kaleido.frontend.ast import (
    ASTNode,
    ASTPrinter,
    ASTVisitor,
    BinaryOp,
    BinaryOperator,
    Call,
    Expr,
    FunctionDef,
    NumberLiteral,
    Prototype,
    VariableRef,
    format_expr,
    format_form,
)
from kaleido.frontend.result import ParseFailure, ParseResult
from kaleido.frontend.diagnostics import DiagnosticReporter
from kaleido.frontend.options import ParserOptions
from kaleido.frontend.parser import Parser, parse_expression_source
from kaleido.frontend.driver import TopLevelDriver, parse_source

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # AST
    "ASTNode",
    "ASTPrinter",
    "ASTVisitor",
    "BinaryOp",
    "BinaryOperator",
    "Call",
    "Expr",
    "FunctionDef",
    "NumberLiteral",
    "Prototype",
    "VariableRef",
    "format_expr",
    "format_form",
    # Results and diagnostics
    "ParseFailure",
    "ParseResult",
    "DiagnosticReporter",
    # Parser
    "ParserOptions",
    "Parser",
    "TopLevelDriver",
    "parse_expression_source",
    "parse_source",
]
