# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the Kaleido pull-based lexer.
#
# Test coverage includes:
#   - Whitespace skipping and end of input
#   - Identifiers and the def/extern keywords
#   - Number literals, including the multiple-decimal-point rule
#   - Single-character symbols (operators, punctuation, unknown chars)
#   - Stream sources and re-lexing determinism
# =============================================================================

import io

import pytest
from kaleido.frontend.lexer import (
    Lexer,
    Token,
    TokenType,
    format_number,
    parse_decimal,
    tokenize,
)


# =============================================================================
# Helper Function
# =============================================================================

def lex(source: str) -> list:
    """Tokenize and drop the trailing EOF token."""
    tokens = tokenize(source)
    assert tokens[-1].type == TokenType.EOF
    return tokens[:-1]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        assert tokenize("") == [Token(TokenType.EOF)]

    def test_whitespace_only(self):
        """Whitespace of every kind is skipped."""
        assert tokenize(" \t\n\r\f\v  ") == [Token(TokenType.EOF)]

    def test_identifier(self):
        tokens = lex("foo")
        assert tokens == [Token(TokenType.IDENTIFIER, "foo")]

    def test_identifier_with_digits(self):
        """Identifiers continue with letters and digits."""
        assert lex("x1y2") == [Token(TokenType.IDENTIFIER, "x1y2")]

    def test_multiple_identifiers(self):
        tokens = lex("alpha  beta\ngamma")
        assert [t.value for t in tokens] == ["alpha", "beta", "gamma"]

    def test_underscore_is_a_symbol(self):
        """Identifiers start with a letter; '_' is not a letter."""
        tokens = lex("_a")
        assert tokens == [
            Token(TokenType.SYMBOL, "_"),
            Token(TokenType.IDENTIFIER, "a"),
        ]


# =============================================================================
# Keyword Tests
# =============================================================================

class TestKeywords:
    """Test classification of reserved words."""

    def test_def_keyword(self):
        assert lex("def") == [Token(TokenType.DEF, "def")]

    def test_extern_keyword(self):
        assert lex("extern") == [Token(TokenType.EXTERN, "extern")]

    def test_keyword_prefix_is_identifier(self):
        """Only an exact match is a keyword."""
        assert lex("define") == [Token(TokenType.IDENTIFIER, "define")]
        assert lex("externs") == [Token(TokenType.IDENTIFIER, "externs")]

    def test_keywords_are_case_sensitive(self):
        assert lex("Def EXTERN") == [
            Token(TokenType.IDENTIFIER, "Def"),
            Token(TokenType.IDENTIFIER, "EXTERN"),
        ]


# =============================================================================
# Number Literal Tests
# =============================================================================

class TestNumbers:
    """Test number literal scanning and conversion."""

    def test_integer(self):
        tokens = lex("42")
        assert tokens == [Token(TokenType.NUMBER, 42.0)]
        assert isinstance(tokens[0].value, float)

    def test_decimal(self):
        assert lex("3.14") == [Token(TokenType.NUMBER, 3.14)]

    def test_leading_point(self):
        """A literal may start with the decimal point."""
        assert lex(".5") == [Token(TokenType.NUMBER, 0.5)]

    def test_trailing_point(self):
        assert lex("7.") == [Token(TokenType.NUMBER, 7.0)]

    def test_multiple_points_use_valid_prefix(self):
        """'1.2.3' is one token whose value is the valid prefix 1.2."""
        assert lex("1.2.3") == [Token(TokenType.NUMBER, 1.2)]

    def test_lone_point_is_zero(self):
        assert lex(".") == [Token(TokenType.NUMBER, 0.0)]

    def test_number_then_identifier(self):
        """A number stops at the first non-digit, non-point character."""
        assert lex("2x") == [
            Token(TokenType.NUMBER, 2.0),
            Token(TokenType.IDENTIFIER, "x"),
        ]

    @pytest.mark.parametrize(
        "literal, expected",
        [("0", 0.0), ("10", 10.0), ("1.5", 1.5), ("..", 0.0), ("1..2", 1.0), (".5.5", 0.5)],
    )
    def test_parse_decimal(self, literal, expected):
        assert parse_decimal(literal) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(42.0, "42"), (1.5, "1.5"), (1234567.0, "1234567"), (0.1234567, "0.1234567"), (1e16, "1e+16")],
    )
    def test_format_number(self, value, expected):
        """Values render with every significant digit."""
        assert format_number(value) == expected


# =============================================================================
# Symbol Tests
# =============================================================================

class TestSymbols:
    """Test single-character symbol tokens."""

    def test_operators(self):
        tokens = lex("+ - * /")
        assert [t.type for t in tokens] == [TokenType.SYMBOL] * 4
        assert [t.value for t in tokens] == ["+", "-", "*", "/"]

    def test_punctuation(self):
        assert [t.value for t in lex("(),;")] == ["(", ")", ",", ";"]

    def test_comments_are_not_skipped(self):
        """'#' has no special meaning and lexes as a symbol."""
        tokens = lex("# note")
        assert tokens == [
            Token(TokenType.SYMBOL, "#"),
            Token(TokenType.IDENTIFIER, "note"),
        ]

    def test_unknown_character_passes_through(self):
        assert lex("@") == [Token(TokenType.SYMBOL, "@")]

    def test_is_symbol(self):
        token = Token(TokenType.SYMBOL, "(")
        assert token.is_symbol("(")
        assert not token.is_symbol(")")
        assert not Token(TokenType.IDENTIFIER, "(").is_symbol("(")


# =============================================================================
# Lexer Behaviour Tests
# =============================================================================

class TestLexerBehaviour:
    """Test the pull interface, stream sources and determinism."""

    def test_full_definition(self):
        tokens = tokenize("def foo(x y) x+y")
        assert tokens == [
            Token(TokenType.DEF, "def"),
            Token(TokenType.IDENTIFIER, "foo"),
            Token(TokenType.SYMBOL, "("),
            Token(TokenType.IDENTIFIER, "x"),
            Token(TokenType.IDENTIFIER, "y"),
            Token(TokenType.SYMBOL, ")"),
            Token(TokenType.IDENTIFIER, "x"),
            Token(TokenType.SYMBOL, "+"),
            Token(TokenType.IDENTIFIER, "y"),
            Token(TokenType.EOF),
        ]

    def test_eof_is_repeated(self):
        """Calls after end of input keep returning EOF."""
        lexer = Lexer("x")
        assert lexer.next_token().type == TokenType.IDENTIFIER
        assert lexer.next_token().type == TokenType.EOF
        assert lexer.next_token().type == TokenType.EOF

    def test_stream_source(self):
        """Any text stream with read(1) can be lexed."""
        stream = io.StringIO("extern sin(x)")
        tokens = list(Lexer(stream).tokenize())
        assert tokens[0] == Token(TokenType.EXTERN, "extern")
        assert len(tokens) == 6

    def test_relexing_is_deterministic(self):
        source = "def f(a, b) a*b - 1.5.2 # @ extern g()"
        assert tokenize(source) == tokenize(source)

    def test_token_repr(self):
        assert repr(Token(TokenType.IDENTIFIER, "x")) == "Token(IDENTIFIER, 'x')"
        assert repr(Token(TokenType.NUMBER, 1.0)) == "Token(NUMBER, 1.0)"
        assert repr(Token(TokenType.EOF)) == "Token(EOF)"
