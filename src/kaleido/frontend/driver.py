"""
Top-Level Driver
================

The driver turns a whole source into a sequence of top-level forms. It
dispatches on the current token:

| Current token | Action                                         |
|---------------|------------------------------------------------|
| end of input  | stop                                           |
| ';'           | skip it                                        |
| 'def'         | parse a definition                             |
| 'extern'      | parse an extern, wrap it in a body-less def    |
| anything else | parse a top-level expression                   |

Every successful form is a FunctionDef, so consumers see one shape.

Resynchronization
-----------------
After a failed form the driver skips exactly one token and carries on.
This is crude: it may restart in the middle of a construct and report
follow-on errors, e.g. `def 1 x` reports the '1' and then parses `x` as
a top-level expression.

Usage
-----
>>> from kaleido.frontend.driver import parse_source
>>> [r.node.prototype.name for r in parse_source("extern sin(x); sin(1)")]
['sin', '__anon_expr']
"""

import logging
from typing import Iterator, Optional, TextIO, Union

from kaleido.errors import TooManyErrors
from kaleido.frontend.ast import FunctionDef
from kaleido.frontend.diagnostics import DiagnosticReporter
from kaleido.frontend.lexer import Lexer, TokenType
from kaleido.frontend.options import ParserOptions
from kaleido.frontend.parser import Parser
from kaleido.frontend.result import ParseResult

logger = logging.getLogger(__name__)


class TopLevelDriver:
    """
    Dispatch loop over top-level forms.

    Example:
        parser = Parser(Lexer(source))
        driver = TopLevelDriver(parser)
        for result in driver.forms():
            if result.ok:
                handle(result.node)

    Attributes:
        parser: The parser whose cursor the driver advances
        options: Driver configuration (max_errors)
    """

    def __init__(self, parser: Parser, options: Optional[ParserOptions] = None):
        self.parser = parser
        self.options = options or parser.options
        self.failure_count = 0

    def forms(self) -> Iterator[ParseResult[FunctionDef]]:
        """
        Yield one ParseResult per top-level form until end of input.

        Raises:
            TooManyErrors: When options.max_errors failures have been seen
                           and input remains
        """
        parser = self.parser
        parser.next_token()

        while True:
            token = parser.current

            if token.type == TokenType.EOF:
                return
            if token.is_symbol(";"):
                parser.next_token()
                continue

            result = self._parse_form(token.type)
            if not result.ok:
                self.failure_count += 1
                logger.debug(f"Skipping {parser.current.describe()} after failed form")
                parser.next_token()

            yield result

            # An exhausted source ends normally even at the limit
            max_errors = self.options.max_errors
            if (
                max_errors is not None
                and self.failure_count >= max_errors
                and parser.current.type != TokenType.EOF
            ):
                raise TooManyErrors(self.failure_count)

    def parse_all(self) -> list[FunctionDef]:
        """Return the successfully parsed forms, dropping failures."""
        return [result.node for result in self.forms() if result.ok]

    def _parse_form(self, token_type: TokenType) -> ParseResult[FunctionDef]:
        if token_type == TokenType.DEF:
            return self.parser.parse_definition()
        if token_type == TokenType.EXTERN:
            proto = self.parser.parse_extern()
            if not proto.ok:
                return proto
            return ParseResult.success(FunctionDef(proto.node, None))
        return self.parser.parse_top_level_expr()


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: Union[str, TextIO],
    options: Optional[ParserOptions] = None,
    reporter: Optional[DiagnosticReporter] = None,
) -> list[ParseResult[FunctionDef]]:
    """
    Parse every top-level form in `source`.

    Args:
        source: Source text or a readable text stream
        options: Parser configuration (defaults if None)
        reporter: Receives failures; if None, a reporter is created that
                  echoes diagnostics to stderr when
                  options.echo_diagnostics is set

    Returns:
        One ParseResult per top-level form, successes and failures in
        source order
    """
    options = options or ParserOptions()
    parser = Parser(Lexer(source), reporter, options)
    return list(TopLevelDriver(parser, options).forms())
