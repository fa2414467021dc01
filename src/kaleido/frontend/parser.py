"""
Kaleido Recursive Descent Parser
================================

This module implements the parser for the Kaleido expression language.
It pulls tokens from the lexer one at a time (single-token lookahead, no
backtracking) and builds AST nodes through mutually recursive grammar
rules.

Grammar (EBNF)
--------------
toplevel        ::= definition | external | expression
definition      ::= 'def' prototype expression
external        ::= 'extern' prototype
prototype       ::= IDENTIFIER '(' (IDENTIFIER (','? IDENTIFIER)*)? ')'
expression      ::= primary (binop primary)*
binop           ::= '+' | '-' | '*'
primary         ::= identifier_expr | NUMBER
identifier_expr ::= IDENTIFIER
                  | IDENTIFIER '(' (expression (',' expression)*)? ')'

Binary Operators
----------------
All operators share a single precedence level and associate to the
left, so `1 - 2 * 3` parses as `(1 - 2) * 3`. '/' is not an operator:
an expression stops in front of it.

Failure Handling
----------------
Every rule returns a ParseResult. A rule that finds an unexpected token
reports it through the DiagnosticReporter (one diagnostic line) and
returns the failure; enclosing rules return that same failure at once.
No rule attempts recovery, and no partially built node is ever returned.
Resynchronization is the driver's job (see kaleido.frontend.driver).

Example Usage
-------------
>>> from kaleido.frontend.lexer import Lexer
>>> from kaleido.frontend.parser import Parser
>>> parser = Parser(Lexer("def add(a b) a+b"))
>>> parser.next_token()
Token(DEF, 'def')
>>> result = parser.parse_definition()
>>> result.node.prototype
Prototype(name='add', params=('a', 'b'))
"""

import logging
import sys
from typing import Optional

from kaleido.frontend.ast import (
    BINARY_OPERATORS,
    BinaryOp,
    BinaryOperator,
    Call,
    Expr,
    FunctionDef,
    NumberLiteral,
    Prototype,
    VariableRef,
)
from kaleido.frontend.diagnostics import DiagnosticReporter
from kaleido.frontend.lexer import Lexer, Token, TokenType
from kaleido.frontend.options import ParserOptions
from kaleido.frontend.result import ParseResult

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser for Kaleido.

    The parser owns the token cursor: the current token, which for
    identifiers and numbers carries its text or value. Call next_token()
    once to load the first token before invoking a grammar rule; each
    rule leaves the cursor on the first token after what it consumed.

    Attributes:
        lexer: Token source
        reporter: Receives parse failures (defaults to one echoing to
                  stderr unless options.echo_diagnostics is off)
        options: Parser configuration
        current: The current token (None until next_token() is called)
    """

    def __init__(
        self,
        lexer: Lexer,
        reporter: Optional[DiagnosticReporter] = None,
        options: Optional[ParserOptions] = None,
    ):
        self.lexer = lexer
        self.options = options or ParserOptions()
        if reporter is None:
            reporter = DiagnosticReporter(sys.stderr if self.options.echo_diagnostics else None)
        self.reporter = reporter
        self.current: Optional[Token] = None

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def next_token(self) -> Token:
        """Advance the cursor to the next token and return it."""
        self.current = self.lexer.next_token()
        return self.current

    def _is_binary_operator(self) -> bool:
        return (
            self.current.type == TokenType.SYMBOL
            and self.current.value in BINARY_OPERATORS
        )

    def _fail(self, reason: str) -> ParseResult:
        """Report a failure at the current token."""
        return self.reporter.fail(reason, self.current)

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def parse_expression(self) -> ParseResult[Expr]:
        """
        Parse a primary followed by any number of binary operations.

        expression ::= primary (binop primary)*
        """
        lhs = self.parse_primary()
        if not lhs.ok:
            return lhs
        return self.parse_binop_rhs(lhs.node)

    def parse_binop_rhs(self, lhs: Expr) -> ParseResult[Expr]:
        """
        Extend `lhs` with trailing binary operations, left-associatively.

        Each right-hand side is a single primary; there is no precedence
        climbing.
        """
        while self._is_binary_operator():
            operator = BinaryOperator(self.current.value)
            self.next_token()  # eat the operator

            rhs = self.parse_primary()
            if not rhs.ok:
                return rhs

            lhs = BinaryOp(operator, lhs, rhs.node)

        return ParseResult.success(lhs)

    def parse_primary(self) -> ParseResult[Expr]:
        """Parse an identifier expression or a number literal."""
        if self.current.type == TokenType.IDENTIFIER:
            return self.parse_identifier_expr()
        if self.current.type == TokenType.NUMBER:
            return self.parse_number_expr()
        return self._fail("unknown token when expecting an expression")

    def parse_number_expr(self) -> ParseResult[NumberLiteral]:
        """Parse a number literal."""
        node = NumberLiteral(self.current.value)
        self.next_token()  # eat the number
        return ParseResult.success(node)

    def parse_identifier_expr(self) -> ParseResult[Expr]:
        """
        Parse a variable reference or a function call.

        identifier_expr ::= IDENTIFIER
                          | IDENTIFIER '(' (expression (',' expression)*)? ')'
        """
        name = self.current.value
        self.next_token()  # eat the identifier

        if not self.current.is_symbol("("):
            return ParseResult.success(VariableRef(name))

        self.next_token()  # eat '('
        args = []
        if not self.current.is_symbol(")"):
            while True:
                arg = self.parse_expression()
                if not arg.ok:
                    return arg
                args.append(arg.node)

                if self.current.is_symbol(")"):
                    break
                if not self.current.is_symbol(","):
                    return self._fail("expected ')' or ',' in argument list")
                self.next_token()  # eat ','

        self.next_token()  # eat ')'
        return ParseResult.success(Call(name, tuple(args)))

    # =========================================================================
    # Top-Level Forms
    # =========================================================================

    def parse_prototype(self) -> ParseResult[Prototype]:
        """
        Parse a function name and its parameter list.

        Parameters are bare identifiers separated by whitespace and/or
        commas. A number, a call shape or any other token in a parameter
        position fails the whole prototype.
        """
        if self.current.type != TokenType.IDENTIFIER:
            return self._fail("expected function name in prototype")

        name = self.current.value
        self.next_token()  # eat the name

        if not self.current.is_symbol("("):
            return self._fail("expected '(' in prototype")
        self.next_token()  # eat '('

        params = []
        while self.current.type == TokenType.IDENTIFIER:
            params.append(self.current.value)
            self.next_token()

            if self.current.is_symbol(","):
                self.next_token()  # eat ','
                if self.current.type != TokenType.IDENTIFIER:
                    return self._fail("expected parameter name after ',' in prototype")

        if not self.current.is_symbol(")"):
            return self._fail("expected parameter name or ')' in prototype")
        self.next_token()  # eat ')'

        return ParseResult.success(Prototype(name, tuple(params)))

    def parse_definition(self) -> ParseResult[FunctionDef]:
        """
        Parse a function definition.

        definition ::= 'def' prototype expression
        """
        self.next_token()  # eat 'def'

        proto = self.parse_prototype()
        if not proto.ok:
            return proto

        body = self.parse_expression()
        if not body.ok:
            return body

        logger.debug(f"Parsed definition '{proto.node.name}'")
        return ParseResult.success(FunctionDef(proto.node, body.node))

    def parse_extern(self) -> ParseResult[Prototype]:
        """
        Parse an extern declaration.

        external ::= 'extern' prototype
        """
        self.next_token()  # eat 'extern'

        proto = self.parse_prototype()
        if proto.ok:
            logger.debug(f"Parsed extern '{proto.node.name}'")
        return proto

    def parse_top_level_expr(self) -> ParseResult[FunctionDef]:
        """
        Parse a bare expression as an anonymous zero-parameter function.
        """
        body = self.parse_expression()
        if not body.ok:
            return body

        proto = Prototype(self.options.anonymous_name, ())
        logger.debug("Parsed top-level expression")
        return ParseResult.success(FunctionDef(proto, body.node))


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_expression_source(
    source: str,
    reporter: Optional[DiagnosticReporter] = None,
) -> ParseResult[Expr]:
    """
    Parse one expression from the start of `source`.

    Parsing stops at the first token that cannot extend the expression;
    any remaining input is left unread.

    Args:
        source: Kaleido source text
        reporter: Receives failures (if None, diagnostics go to stderr)

    Returns:
        ParseResult holding the expression or the failure
    """
    parser = Parser(Lexer(source), reporter)
    parser.next_token()
    return parser.parse_expression()
