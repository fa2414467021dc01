"""
Parser Configuration
====================

Options for the parser and the top-level driver. Configuration can come
from:
- Default values (defined here)
- Environment variables (ParserOptions.from_env)
- Command-line flags (the CLI overrides individual fields)

Environment Variables
---------------------
KALEIDO_ANON_NAME:   name given to wrapped top-level expressions
KALEIDO_MAX_ERRORS:  stop after this many parse failures (integer >= 1)
KALEIDO_QUIET:       if set to 1/true/yes, do not echo diagnostics
"""

import os
from dataclasses import dataclass
from typing import Optional

from kaleido.errors import ConfigError

ANONYMOUS_FUNCTION_NAME = "__anon_expr"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class ParserOptions:
    """
    Parser and driver configuration.

    Attributes:
        anonymous_name: Prototype name used to wrap bare top-level
                        expressions
        max_errors: Driver raises TooManyErrors after this many failures.
                    None means no limit.
        echo_diagnostics: Write diagnostic lines to stderr as failures
                          occur. Applies whenever no reporter is passed
    """
    anonymous_name: str = ANONYMOUS_FUNCTION_NAME
    max_errors: Optional[int] = None
    echo_diagnostics: bool = True

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ParserOptions":
        """
        Create options from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ConfigError: If KALEIDO_MAX_ERRORS is not a positive integer
        """
        environ = os.environ if environ is None else environ
        options = cls()

        if name := environ.get("KALEIDO_ANON_NAME"):
            options.anonymous_name = name

        if limit := environ.get("KALEIDO_MAX_ERRORS"):
            try:
                options.max_errors = int(limit)
            except ValueError:
                raise ConfigError("KALEIDO_MAX_ERRORS", limit, "a positive integer")
            if options.max_errors < 1:
                raise ConfigError("KALEIDO_MAX_ERRORS", limit, "a positive integer")

        if quiet := environ.get("KALEIDO_QUIET"):
            options.echo_diagnostics = quiet.strip().lower() not in _TRUTHY

        return options
