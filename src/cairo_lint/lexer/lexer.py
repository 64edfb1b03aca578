"""Cairo Lexer: converts raw source text into a flat list of tokens.

The lexer is a single-pass character scanner that produces a
``list[Token]`` from a Cairo source string.  It tracks line and column
numbers for every token so diagnostics can point at precise locations.

Two views of the token stream are available:

* ``Lexer.tokenize`` returns the raw stream, trivia included
  (``WHITESPACE``, ``NEWLINE`` and ``COMMENT`` tokens).
* ``tokenize`` folds the trivia into the neighbouring significant
  tokens (see ``attach_trivia``) so that every character of the source
  belongs to exactly one token.  This is the stream the parser consumes.

Comments are ``//`` line comments.  String literals are double-quoted,
short strings are single-quoted; both are kept verbatim (quotes and
escapes included) because fixes are computed on the raw text.

Numbers are decimal or hexadecimal integers and may carry ``_``
separators and a type suffix (``10_u128``).  A leading ``-`` is a unary
operator, not part of the literal.
"""
from __future__ import annotations

import re
from dataclasses import replace
from typing import Final

from cairo_lint.grammar.tokens import KEYWORDS, Token, TokenType

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_IDENT_START: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_]")
_IDENT_CONT: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_]")
_DIGIT: Final[re.Pattern[str]] = re.compile(r"[0-9]")

_TWO_CHAR_OPS: Final[dict[str, TokenType]] = {
    "==": TokenType.EQ_EQ,
    "!=": TokenType.NEQ,
    "<=": TokenType.LE,
    ">=": TokenType.GE,
    "&&": TokenType.AND_AND,
    "||": TokenType.OR_OR,
    "+=": TokenType.PLUS_EQ,
    "-=": TokenType.MINUS_EQ,
    "*=": TokenType.STAR_EQ,
    "/=": TokenType.SLASH_EQ,
    "%=": TokenType.PERCENT_EQ,
    "::": TokenType.COLON_COLON,
    "..": TokenType.DOT_DOT,
    "->": TokenType.ARROW,
    "=>": TokenType.MATCH_ARROW,
}

_SINGLE_CHAR_OPS: Final[dict[str, TokenType]] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "&": TokenType.AND,
    "|": TokenType.OR,
    "^": TokenType.XOR,
    "!": TokenType.NOT,
    "@": TokenType.AT,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "=": TokenType.EQ,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "#": TokenType.HASH,
    "?": TokenType.QUESTION,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


class LexError(Exception):
    """Raised when the lexer encounters invalid input.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    line:
        1-based line number where the error occurred.
    col:
        1-based column number where the error occurred.
    offset:
        0-based offset in the source where the error occurred.
    """

    def __init__(self, message: str, line: int, col: int, offset: int) -> None:
        super().__init__(f"LexError at {line}:{col}: {message}")
        self.lex_message = message
        self.line = line
        self.col = col
        self.offset = offset


class Lexer:
    """Single-pass Cairo lexer.

    Parameters
    ----------
    source:
        The complete source text to tokenize.
    """

    __slots__ = ("_source", "_pos", "_line", "_col", "_tokens", "_token_line", "_token_col")

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._pos: int = 0
        self._line: int = 1
        self._col: int = 1
        self._tokens: list[Token] = []
        self._token_line: int = 1
        self._token_col: int = 1

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return the raw token list.

        The list always ends with an ``EOF`` token.

        Returns
        -------
        list[Token]
            Ordered list of tokens, trivia tokens included.

        Raises
        ------
        LexError
            On any character that cannot begin a valid token.
        """
        while self._pos < len(self._source):
            self._scan_one()
        self._token_line = self._line
        self._token_col = self._col
        self._emit(TokenType.EOF, "", self._pos)
        return self._tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position without advancing."""
        return self._source[self._pos] if self._pos < len(self._source) else ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character at ``pos + offset`` without advancing."""
        idx = self._pos + offset
        return self._source[idx] if idx < len(self._source) else ""

    def _advance(self) -> str:
        """Consume and return the current character, updating line/col."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(self, token_type: TokenType, value: str, start_offset: int) -> None:
        """Append a token using the recorded start position."""
        self._tokens.append(
            Token(
                type=token_type,
                value=value,
                line=self._token_line,
                col=self._token_col,
                offset=start_offset,
            )
        )

    def _scan_one(self) -> None:
        """Scan exactly one token (trivia included)."""
        self._token_line = self._line
        self._token_col = self._col
        start = self._pos
        ch = self._current()

        if ch in (" ", "\t", "\r"):
            while self._current() in (" ", "\t", "\r") and self._pos < len(self._source):
                self._advance()
            self._emit(TokenType.WHITESPACE, self._source[start:self._pos], start)
            return

        if ch == "\n":
            self._advance()
            self._emit(TokenType.NEWLINE, "\n", start)
            return

        if ch == "/" and self._peek() == "/":
            self._scan_line_comment(start)
            return

        if ch == '"':
            self._scan_quoted(start, '"', TokenType.STRING)
            return
        if ch == "'":
            self._scan_quoted(start, "'", TokenType.SHORT_STRING)
            return

        if _DIGIT.match(ch):
            self._scan_number(start)
            return

        if _IDENT_START.match(ch):
            self._scan_ident_or_keyword(start)
            return

        pair = ch + self._peek()
        if pair in _TWO_CHAR_OPS:
            self._advance()
            self._advance()
            self._emit(_TWO_CHAR_OPS[pair], pair, start)
            return

        if ch in _SINGLE_CHAR_OPS:
            self._advance()
            self._emit(_SINGLE_CHAR_OPS[ch], ch, start)
            return

        raise LexError(
            f"Unexpected character {ch!r}",
            self._token_line,
            self._token_col,
            start,
        )

    # ------------------------------------------------------------------
    # Token-specific scanners
    # ------------------------------------------------------------------

    def _scan_line_comment(self, start: int) -> None:
        """Consume a ``//`` comment up to (not including) the end of the line."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()
        self._emit(TokenType.COMMENT, self._source[start:self._pos], start)

    def _scan_quoted(self, start: int, quote: str, token_type: TokenType) -> None:
        """Consume a quoted literal verbatim, honouring backslash escapes."""
        self._advance()  # opening quote
        while self._pos < len(self._source):
            ch = self._current()
            if ch == quote:
                self._advance()
                self._emit(token_type, self._source[start:self._pos], start)
                return
            if ch == "\\":
                self._advance()
                if self._pos < len(self._source):
                    self._advance()
            elif ch == "\n":
                raise LexError(
                    "Unterminated string literal (newline in string)",
                    self._token_line,
                    self._token_col,
                    start,
                )
            else:
                self._advance()
        raise LexError(
            "Unterminated string literal (EOF)",
            self._token_line,
            self._token_col,
            start,
        )

    def _scan_number(self, start: int) -> None:
        """Consume an integer literal with optional separators and suffix."""
        while self._pos < len(self._source) and _IDENT_CONT.match(self._current()):
            self._advance()
        self._emit(TokenType.NUMBER, self._source[start:self._pos], start)

    def _scan_ident_or_keyword(self, start: int) -> None:
        """Consume an identifier, then classify it as keyword or IDENT."""
        while self._pos < len(self._source) and _IDENT_CONT.match(self._current()):
            self._advance()
        word = self._source[start:self._pos]
        if word == "_":
            token_type = TokenType.UNDERSCORE
        else:
            token_type = KEYWORDS.get(word, TokenType.IDENT)
        self._emit(token_type, word, start)


# ---------------------------------------------------------------------------
# Trivia attachment
# ---------------------------------------------------------------------------


def attach_trivia(raw_tokens: list[Token]) -> list[Token]:
    """Fold trivia tokens into the significant tokens around them.

    A significant token owns as trailing trivia the spaces, tabs and
    comments that follow it on its own line, plus the terminating
    newline.  Everything else between two significant tokens becomes the
    leading trivia of the second one.  The final ``EOF`` token collects
    whatever trivia remains at the end of the file.
    """
    result: list[Token] = []
    leading: list[str] = []
    i = 0
    while i < len(raw_tokens):
        tok = raw_tokens[i]
        if tok.is_trivia:
            leading.append(tok.value)
            i += 1
            continue
        i += 1
        trailing: list[str] = []
        if tok.type is not TokenType.EOF:
            while i < len(raw_tokens) and raw_tokens[i].type in (
                TokenType.WHITESPACE,
                TokenType.COMMENT,
            ):
                trailing.append(raw_tokens[i].value)
                i += 1
            if i < len(raw_tokens) and raw_tokens[i].type is TokenType.NEWLINE:
                trailing.append("\n")
                i += 1
        result.append(
            replace(tok, leading_trivia="".join(leading), trailing_trivia="".join(trailing))
        )
        leading = []
    return result


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def tokenize(source: str) -> list[Token]:
    """Tokenize a Cairo source string into significant tokens with trivia.

    Parameters
    ----------
    source:
        Cairo source text.

    Returns
    -------
    list[Token]
        Significant tokens terminated by ``EOF``; concatenating every
        token's leading trivia, value and trailing trivia reproduces
        ``source`` exactly.

    Raises
    ------
    LexError
        If the source contains invalid characters or unterminated literals.

    Example
    -------
    ::

        from cairo_lint.lexer import tokenize
        tokens = tokenize("fn main() {}")
    """
    return attach_trivia(Lexer(source).tokenize())
