# =============================================================================
# test_diagnostics.py - Diagnostics, Results and Error Tests
# =============================================================================
# Tests for token descriptions, the DiagnosticReporter, the ParseResult
# value type and the exception hierarchy.
# =============================================================================

import io

import pytest
from kaleido.errors import ConfigError, KaleidoError, KaleidoSyntaxError, TooManyErrors
from kaleido.frontend.ast import NumberLiteral
from kaleido.frontend.diagnostics import DiagnosticReporter
from kaleido.frontend.lexer import Token, TokenType
from kaleido.frontend.result import ParseFailure, ParseResult


EOF = Token(TokenType.EOF)


# =============================================================================
# Token Descriptions
# =============================================================================

class TestTokenDescriptions:
    """Offending tokens are named by kind and content."""

    @pytest.mark.parametrize(
        "token, expected",
        [
            (Token(TokenType.EOF), "end of input"),
            (Token(TokenType.DEF, "def"), "keyword 'def'"),
            (Token(TokenType.EXTERN, "extern"), "keyword 'extern'"),
            (Token(TokenType.IDENTIFIER, "foo"), "identifier 'foo'"),
            (Token(TokenType.NUMBER, 42.0), "number 42"),
            (Token(TokenType.NUMBER, 1.5), "number 1.5"),
            (Token(TokenType.NUMBER, 1234567.0), "number 1234567"),
            (Token(TokenType.NUMBER, 0.1234567), "number 0.1234567"),
            (Token(TokenType.SYMBOL, "/"), "'/'"),
        ],
    )
    def test_describe(self, token, expected):
        assert token.describe() == expected

    def test_failure_str(self):
        failure = ParseFailure("expected '(' in prototype", Token(TokenType.IDENTIFIER, "x"))
        assert str(failure) == "expected '(' in prototype (found identifier 'x')"


# =============================================================================
# Reporter Tests
# =============================================================================

class TestDiagnosticReporter:
    """Tests for recording and echoing failures."""

    def test_fail_returns_failed_result(self):
        reporter = DiagnosticReporter()
        result = reporter.fail("unknown token when expecting an expression", EOF)
        assert not result.ok
        assert result.node is None
        assert result.failure.token == EOF

    def test_fail_records(self):
        reporter = DiagnosticReporter()
        assert not reporter.has_errors()
        reporter.fail("first", EOF)
        reporter.fail("second", EOF)
        assert reporter.has_errors()
        assert reporter.error_count() == 2
        assert [f.reason for f in reporter.failures] == ["first", "second"]

    def test_fail_writes_one_line(self):
        stream = io.StringIO()
        reporter = DiagnosticReporter(stream)
        reporter.fail("expected function name in prototype", Token(TokenType.NUMBER, 3.0))
        assert stream.getvalue() == "error: expected function name in prototype (found number 3)\n"

    def test_silent_without_stream(self, capsys):
        DiagnosticReporter().fail("quiet", EOF)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_report(self):
        reporter = DiagnosticReporter()
        reporter.fail("bad", EOF)
        assert reporter.report() == "error: bad (found end of input)\n1 error"
        reporter.fail("worse", Token(TokenType.SYMBOL, ")"))
        assert reporter.report().splitlines()[-1] == "2 errors"

    def test_clear(self):
        reporter = DiagnosticReporter()
        reporter.fail("bad", EOF)
        reporter.clear()
        assert not reporter.has_errors()
        assert reporter.report() == "0 errors"


# =============================================================================
# ParseResult Tests
# =============================================================================

class TestParseResult:
    """A result holds a node or a failure, never both."""

    def test_success(self):
        result = ParseResult.success(NumberLiteral(1.0))
        assert result.ok
        assert result.failure is None
        assert result.unwrap() == NumberLiteral(1.0)

    def test_failed_unwrap_raises(self):
        failure = ParseFailure("bad", EOF)
        result = ParseResult.failed(failure)
        with pytest.raises(KaleidoSyntaxError) as exc_info:
            result.unwrap()
        assert exc_info.value.failure is failure
        assert str(exc_info.value) == "error: bad (found end of input)"

    def test_needs_exactly_one(self):
        with pytest.raises(ValueError):
            ParseResult()
        with pytest.raises(ValueError):
            ParseResult(NumberLiteral(1.0), ParseFailure("bad", EOF))


# =============================================================================
# Exception Hierarchy Tests
# =============================================================================

class TestErrors:
    """Tests for the exception hierarchy and message format."""

    def test_hierarchy(self):
        assert issubclass(KaleidoSyntaxError, KaleidoError)
        assert issubclass(TooManyErrors, KaleidoError)
        assert issubclass(ConfigError, KaleidoError)

    def test_message_with_hint(self):
        error = KaleidoError("something broke", hint="try again")
        assert str(error) == "error: something broke\nhint: try again"

    def test_message_without_hint(self):
        assert str(KaleidoError("plain")) == "error: plain"

    def test_too_many_errors(self):
        error = TooManyErrors(5)
        assert error.count == 5
        assert str(error).startswith("error: too many errors (5), stopping")

    def test_config_error(self):
        error = ConfigError("KALEIDO_MAX_ERRORS", "abc", "a positive integer")
        assert "invalid value 'abc' for KALEIDO_MAX_ERRORS" in str(error)
        assert "hint: expected a positive integer" in str(error)
