"""Unit tests for cairo_lint.lexer: tokenization of Cairo source text."""
from __future__ import annotations

import pytest

from cairo_lint.grammar.tokens import Token, TokenType
from cairo_lint.lexer.lexer import LexError, Lexer, tokenize


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def types_of(tokens: list[Token]) -> list[TokenType]:
    """Return just the token types, excluding EOF."""
    return [t.type for t in tokens if t.type != TokenType.EOF]


def rebuild(tokens: list[Token]) -> str:
    """Concatenate every token with its trivia."""
    return "".join(t.leading_trivia + t.value + t.trailing_trivia for t in tokens)


# ---------------------------------------------------------------------------
# Empty and whitespace-only inputs
# ---------------------------------------------------------------------------


class TestEmptyInputs:
    def test_empty_string_produces_only_eof(self) -> None:
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type is TokenType.EOF

    def test_whitespace_only_is_eof_trivia(self) -> None:
        tokens = tokenize("  \n\t")
        assert len(tokens) == 1
        assert tokens[0].leading_trivia == "  \n\t"

    def test_raw_lexer_keeps_trivia_tokens(self) -> None:
        tokens = Lexer(" \n// c").tokenize()
        assert types_of(tokens) == [TokenType.WHITESPACE, TokenType.NEWLINE, TokenType.COMMENT]


# ---------------------------------------------------------------------------
# Keywords, identifiers and literals
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("source, expected_type", [
    ("use", TokenType.USE),
    ("fn", TokenType.FN),
    ("mod", TokenType.MOD),
    ("enum", TokenType.ENUM),
    ("impl", TokenType.IMPL),
    ("of", TokenType.OF),
    ("let", TokenType.LET),
    ("break", TokenType.BREAK),
    ("while", TokenType.WHILE),
    ("match", TokenType.MATCH),
    ("true", TokenType.TRUE),
    ("false", TokenType.FALSE),
    ("_", TokenType.UNDERSCORE),
    ("_a", TokenType.IDENT),
    ("u128_safe_divmod", TokenType.IDENT),
    ("42", TokenType.NUMBER),
    ("10_u128", TokenType.NUMBER),
    ("0xff", TokenType.NUMBER),
    ('"text"', TokenType.STRING),
    ("'short'", TokenType.SHORT_STRING),
])
def test_single_token(source: str, expected_type: TokenType) -> None:
    tokens = tokenize(source)
    assert types_of(tokens) == [expected_type]
    assert tokens[0].value == source


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("source, expected_type", [
    ("==", TokenType.EQ_EQ),
    ("!=", TokenType.NEQ),
    ("<=", TokenType.LE),
    (">=", TokenType.GE),
    ("&&", TokenType.AND_AND),
    ("||", TokenType.OR_OR),
    ("::", TokenType.COLON_COLON),
    ("->", TokenType.ARROW),
    ("=>", TokenType.MATCH_ARROW),
    ("..", TokenType.DOT_DOT),
    ("+=", TokenType.PLUS_EQ),
    ("&", TokenType.AND),
    ("|", TokenType.OR),
    ("^", TokenType.XOR),
    ("@", TokenType.AT),
    ("#", TokenType.HASH),
])
def test_operator(source: str, expected_type: TokenType) -> None:
    assert types_of(tokenize(source)) == [expected_type]


def test_negative_number_is_minus_then_literal() -> None:
    assert types_of(tokenize("-1")) == [TokenType.MINUS, TokenType.NUMBER]


# ---------------------------------------------------------------------------
# Trivia attachment
# ---------------------------------------------------------------------------


class TestTrivia:
    def test_trailing_trivia_runs_to_end_of_line(self) -> None:
        tokens = tokenize("a; // note\nb")
        semicolon = tokens[1]
        assert semicolon.value == ";"
        assert semicolon.trailing_trivia == " // note\n"
        assert tokens[2].leading_trivia == ""

    def test_blank_lines_lead_the_next_token(self) -> None:
        tokens = tokenize("a\n\n    b")
        assert tokens[0].trailing_trivia == "\n"
        assert tokens[1].leading_trivia == "\n    "

    def test_comment_line_leads_the_next_token(self) -> None:
        tokens = tokenize("a\n// doc\nb")
        assert tokens[1].leading_trivia == "// doc\n"

    @pytest.mark.parametrize("source", [
        "fn main() {\n    let x = 1; // one\n}\n",
        "use a::{b, c};\r\n",
        "\n\n// header\nfn f() {}\n\n",
    ])
    def test_trivia_reproduces_source(self, source: str) -> None:
        assert rebuild(tokenize(source)) == source

    def test_offsets_and_positions(self) -> None:
        tokens = tokenize("fn\n  main")
        main = tokens[1]
        assert main.offset == 5
        assert (main.line, main.col) == (2, 3)
        assert main.end == 9


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestLexErrors:
    def test_unexpected_character(self) -> None:
        with pytest.raises(LexError) as exc_info:
            tokenize("let a = $;")
        assert exc_info.value.offset == 8
        assert (exc_info.value.line, exc_info.value.col) == (1, 9)

    def test_unterminated_string_at_eof(self) -> None:
        with pytest.raises(LexError, match="Unterminated"):
            tokenize('"abc')

    def test_newline_in_string(self) -> None:
        with pytest.raises(LexError, match="newline"):
            tokenize('"ab\nc"')
