"""
Kaleido Lexer (Tokenizer)
=========================

This module implements the pull-based lexer for the Kaleido expression
language. It converts a character source into classified tokens, one
token per call to next_token().

Token Categories
----------------
- Keywords: def, extern
- Identifiers: a letter followed by letters and digits
- Numbers: digits and decimal points, converted to float
- Symbols: any other single character, passed through unchanged
  (operators + - * and punctuation ( ) , ; surface this way)
- End of input

Rules (in priority order)
-------------------------
1. Skip whitespace.
2. Letter: identifier or keyword.
3. Digit or '.': number literal.
4. End of input: EOF token.
5. Anything else: single-character symbol.

Comments are not recognised; '#' lexes as a symbol like any other
unrecognised character.

Number Literals
---------------
A number literal is the longest run of digits and '.' characters. Its
value is the longest valid decimal prefix of that run, the way C's strtod
reads it:

| Literal | Value |
|---------|-------|
| 42      | 42.0  |
| 3.14    | 3.14  |
| .5      | 0.5   |
| 1.2.3   | 1.2   |
| .       | 0.0   |

Example Usage
-------------
>>> from kaleido.frontend.lexer import Lexer
>>> lexer = Lexer("def f(x) x+1")
>>> for token in lexer.tokenize():
...     print(token)
Token(DEF, 'def')
Token(IDENTIFIER, 'f')
Token(SYMBOL, '(')
Token(IDENTIFIER, 'x')
Token(SYMBOL, ')')
Token(IDENTIFIER, 'x')
Token(SYMBOL, '+')
Token(NUMBER, 1.0)
Token(EOF)
"""

import io
import logging
import re
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, TextIO, Union

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token kinds produced by the lexer.

    Keywords are distinguished from identifiers so the driver can
    dispatch on them directly.
    """

    EOF = auto()            # End of input
    DEF = auto()            # def
    EXTERN = auto()         # extern
    IDENTIFIER = auto()     # Function and variable names
    NUMBER = auto()         # Numeric literals (float value)
    SYMBOL = auto()         # Any other single character


# Map reserved words to their token types
KEYWORDS: dict[str, TokenType] = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexical unit.

    Attributes:
        type: The TokenType classification
        value: Identifier or keyword text, float value for numbers,
               the character for symbols, None for EOF
    """
    type: TokenType
    value: Union[str, float, None] = None

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is None:
            return f"Token({self.type.name})"
        return f"Token({self.type.name}, {self.value!r})"

    def is_symbol(self, char: str) -> bool:
        """Return True if this is the single-character symbol `char`."""
        return self.type == TokenType.SYMBOL and self.value == char

    def describe(self) -> str:
        """
        Describe the token for diagnostics.

        Identifiers include their text, numbers their value and symbols
        their character.
        """
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type in (TokenType.DEF, TokenType.EXTERN):
            return f"keyword '{self.value}'"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.type == TokenType.NUMBER:
            return f"number {format_number(self.value)}"
        return f"'{self.value}'"


# =============================================================================
# Lexer Implementation
# =============================================================================

# Longest valid decimal prefix of a digits-and-dots run
_DECIMAL_PREFIX = re.compile(r"\d*\.?\d*")


def parse_decimal(literal: str) -> float:
    """
    Convert a digits-and-dots literal to a float.

    Reads the longest valid decimal prefix and ignores the rest, so
    '1.2.3' is 1.2. A literal with no digits before the first invalid
    point ('.', '..') is 0.0.
    """
    prefix = _DECIMAL_PREFIX.match(literal).group()
    if prefix != literal:
        logger.debug(f"Number literal {literal!r} truncated to {prefix!r}")
    if prefix in ("", "."):
        return 0.0
    return float(prefix)


def format_number(value: float) -> str:
    """
    Render a number value exactly, without a trailing '.0'.

    >>> format_number(1234567.0), format_number(0.1234567)
    ('1234567', '0.1234567')
    """
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


class Lexer:
    """
    Pull-based tokenizer for Kaleido source.

    The lexer reads its source one character at a time and keeps exactly
    one buffered look-ahead character between calls. It has no other
    state, so lexing the same input from the same start always yields
    the same token sequence.

    Usage:
        lexer = Lexer("extern sin(x)")
        token = lexer.next_token()     # Token(EXTERN, 'extern')

        # Or for a whole source:
        tokens = list(Lexer(text).tokenize())

    Attributes:
        source: The readable character stream being tokenized
    """

    WHITESPACE = " \t\n\r\f\v"
    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    NUMBER_CHARS = string.digits + "."

    def __init__(self, source: Union[str, TextIO]):
        """
        Initialize the lexer.

        Args:
            source: Source text, or any text stream with read(1)
        """
        if isinstance(source, str):
            source = io.StringIO(source)
        self.source = source

        # One character of look-ahead; "" once the source is exhausted
        self._last_char = " "

    def next_token(self) -> Token:
        """
        Read and return the next token, consuming input.

        After the source is exhausted every call returns an EOF token.
        """
        while self._last_char and self._last_char in self.WHITESPACE:
            self._read()

        char = self._last_char

        if char and char in self.IDENT_START:
            return self._scan_identifier()

        if char and char in self.NUMBER_CHARS:
            return self._scan_number()

        if not char:
            return Token(TokenType.EOF)

        self._read()
        return Token(TokenType.SYMBOL, char)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate all remaining tokens.

        Yields:
            Tokens in source order, ending with exactly one EOF token
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    # =========================================================================
    # Scanning
    # =========================================================================

    def _read(self) -> str:
        """Advance the look-ahead character and return it."""
        self._last_char = self.source.read(1)
        return self._last_char

    def _scan_identifier(self) -> Token:
        """Scan an identifier and classify reserved words."""
        chars = [self._last_char]
        while self._read() and self._last_char in self.IDENT_CHARS:
            chars.append(self._last_char)

        name = "".join(chars)
        if name in KEYWORDS:
            return Token(KEYWORDS[name], name)
        return Token(TokenType.IDENTIFIER, name)

    def _scan_number(self) -> Token:
        """Scan a run of digits and decimal points."""
        chars = [self._last_char]
        while self._read() and self._last_char in self.NUMBER_CHARS:
            chars.append(self._last_char)

        return Token(TokenType.NUMBER, parse_decimal("".join(chars)))


def tokenize(source: Union[str, TextIO]) -> list[Token]:
    """Tokenize a whole source into a list ending with EOF."""
    return list(Lexer(source).tokenize())
