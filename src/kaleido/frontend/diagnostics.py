"""
Parse Diagnostics
=================

The DiagnosticReporter is where parse failures are recorded. A grammar
rule that detects a problem calls reporter.fail(reason, token), which:

1. records a ParseFailure,
2. writes one diagnostic line to the configured stream (if any),
3. returns a failed ParseResult for the rule to hand back to its caller.

Diagnostic Format
-----------------
One line per failure, naming the expected construct and the offending
token. There is no line or column information.

    error: expected function name in prototype (found number 42)
    error: expected ')' or ',' in argument list (found identifier 'b')
    error: unknown token when expecting an expression (found end of input)
"""

import logging
from typing import Optional, TextIO

from kaleido.frontend.lexer import Token
from kaleido.frontend.result import ParseFailure, ParseResult

logger = logging.getLogger(__name__)


class DiagnosticReporter:
    """
    Records parse failures and yields the "no value" result.

    Example:
        reporter = DiagnosticReporter(stream=sys.stderr)
        parser = Parser(Lexer(source), reporter)
        ...
        if reporter.has_errors():
            print(reporter.report())

    Attributes:
        stream: Where diagnostic lines are written (None to stay silent)
        failures: Failures recorded so far, in order
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.failures: list[ParseFailure] = []

    def fail(self, reason: str, token: Token) -> ParseResult:
        """Record a failure at `token` and return it as a failed result."""
        failure = ParseFailure(reason, token)
        self.failures.append(failure)

        line = self.format(failure)
        logger.debug(line)
        if self.stream is not None:
            self.stream.write(line + "\n")

        return ParseResult.failed(failure)

    @staticmethod
    def format(failure: ParseFailure) -> str:
        """Format a failure as a single diagnostic line."""
        return f"error: {failure}"

    def has_errors(self) -> bool:
        """Return True if any failures have been recorded."""
        return len(self.failures) > 0

    def error_count(self) -> int:
        """Return the number of recorded failures."""
        return len(self.failures)

    def report(self) -> str:
        """Format all recorded failures followed by a summary line."""
        lines = [self.format(f) for f in self.failures]
        word = "error" if len(self.failures) == 1 else "errors"
        lines.append(f"{len(self.failures)} {word}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Forget all recorded failures."""
        self.failures.clear()
