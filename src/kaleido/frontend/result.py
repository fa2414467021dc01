"""
Parse Results
=============

Every grammar rule in the parser returns a ParseResult: either a fully
built node, or a ParseFailure describing why no node could be built.
Failures are ordinary values; the parser never raises for bad input.

Usage
-----
>>> result = parser.parse_expression()
>>> if not result.ok:
...     return result            # propagate unchanged
>>> expr = result.node

Callers outside the parser that prefer exceptions can use unwrap(),
which raises KaleidoSyntaxError on failure.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from kaleido.errors import KaleidoSyntaxError
from kaleido.frontend.lexer import Token

T = TypeVar("T")


@dataclass(frozen=True)
class ParseFailure:
    """
    Why a grammar rule produced no node.

    Attributes:
        reason: Description of the expected construct
        token: The current token when the failure was detected
    """
    reason: str
    token: Token

    def __str__(self) -> str:
        return f"{self.reason} (found {self.token.describe()})"


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    Outcome of a grammar rule: a node or a failure, never both.

    Attributes:
        node: The parsed node (None on failure)
        failure: The failure (None on success)
    """
    node: Optional[T] = None
    failure: Optional[ParseFailure] = None

    def __post_init__(self):
        if (self.node is None) == (self.failure is None):
            raise ValueError("ParseResult needs exactly one of node or failure")

    @classmethod
    def success(cls, node: T) -> "ParseResult[T]":
        return cls(node=node)

    @classmethod
    def failed(cls, failure: ParseFailure) -> "ParseResult[T]":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        """True if a node was produced."""
        return self.failure is None

    def unwrap(self) -> T:
        """
        Return the node, or raise KaleidoSyntaxError on failure.

        Raises:
            KaleidoSyntaxError: If this result is a failure
        """
        if self.failure is not None:
            raise KaleidoSyntaxError(self.failure)
        return self.node
