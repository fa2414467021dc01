"""
Kaleido Error Hierarchy
=======================

This module defines the exception hierarchy for the Kaleido front end.

The parser itself never raises: every grammar rule returns a ParseResult
value (see kaleido.frontend.result). Exceptions exist for the surfaces
around the parser, where a caller explicitly asks to turn a failure into
an exception (ParseResult.unwrap), where the driver gives up after too
many errors, or where configuration cannot be read.

Exception Hierarchy
-------------------
KaleidoError (base)
├── KaleidoSyntaxError - a parse failure converted to an exception
├── TooManyErrors - driver stopped after max_errors failures
└── ConfigError - invalid configuration value

Error Message Format
--------------------
    error: description
    hint: suggestion for fixing (when available)

No line or column information is reported: diagnostics name the
offending token only.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class KaleidoError(Exception):
    """
    Base exception for all Kaleido errors.

    Allows callers to catch everything the package raises with a single
    except clause:

        try:
            node = parse_expression_source(text).unwrap()
        except KaleidoError as e:
            print(e)

    Attributes:
        message: The error description
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format as 'error: message' with an optional hint line."""
        parts = [f"error: {self.message}"]
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


# =============================================================================
# Parse Errors
# =============================================================================

class KaleidoSyntaxError(KaleidoError):
    """
    A syntax failure raised on request.

    Produced by ParseResult.unwrap() when the result is a failure. The
    original failure (reason and offending token) is kept for callers
    that want to inspect it.
    """

    def __init__(self, failure, hint: Optional[str] = None):
        self.failure = failure
        super().__init__(str(failure), hint=hint)


class TooManyErrors(KaleidoError):
    """
    Raised by the top-level driver when max_errors failures were seen.

    Prevents a long stream of garbage input from producing an unbounded
    number of diagnostics.
    """

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"too many errors ({count}), stopping",
            hint="fix the reported errors and parse again",
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigError(KaleidoError):
    """Invalid configuration value (for example a bad environment variable)."""

    def __init__(self, name: str, value: str, expected: str):
        self.name = name
        self.value = value
        super().__init__(
            f"invalid value {value!r} for {name}",
            hint=f"expected {expected}",
        )
