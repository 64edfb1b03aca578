"""Token definitions for the Cairo subset understood by cairo-lint.

Defines the complete token vocabulary used by the lexer.  Every
keyword, punctuation mark, and literal kind is represented as a member
of the ``TokenType`` enum, and every scanned token is represented by
a ``Token`` dataclass that carries its type, raw text, source position
and the trivia (whitespace and comments) attached to it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Exhaustive enumeration of all token types."""

    # -----------------------------------------------------------------
    # Keywords: items
    # -----------------------------------------------------------------
    USE = auto()
    FN = auto()
    MOD = auto()
    ENUM = auto()
    STRUCT = auto()
    CONST = auto()
    IMPL = auto()
    TRAIT = auto()
    OF = auto()
    PUB = auto()
    AS = auto()

    # -----------------------------------------------------------------
    # Keywords: statements and control flow
    # -----------------------------------------------------------------
    LET = auto()
    MUT = auto()
    REF = auto()
    RETURN = auto()
    BREAK = auto()
    CONTINUE = auto()
    IF = auto()
    ELSE = auto()
    LOOP = auto()
    WHILE = auto()
    FOR = auto()
    IN = auto()
    MATCH = auto()

    # -----------------------------------------------------------------
    # Keywords: literals
    # -----------------------------------------------------------------
    TRUE = auto()
    FALSE = auto()

    # -----------------------------------------------------------------
    # Arithmetic and bitwise operators
    # -----------------------------------------------------------------
    PLUS = auto()       # +
    MINUS = auto()      # -
    STAR = auto()       # *
    SLASH = auto()      # /
    PERCENT = auto()    # %
    AND = auto()        # &
    OR = auto()         # |
    XOR = auto()        # ^
    NOT = auto()        # !
    AT = auto()         # @

    # -----------------------------------------------------------------
    # Comparison and logical operators
    # -----------------------------------------------------------------
    EQ_EQ = auto()      # ==
    NEQ = auto()        # !=
    LT = auto()         # <
    GT = auto()         # >
    LE = auto()         # <=
    GE = auto()         # >=
    AND_AND = auto()    # &&
    OR_OR = auto()      # ||

    # -----------------------------------------------------------------
    # Assignment operators
    # -----------------------------------------------------------------
    EQ = auto()         # =
    PLUS_EQ = auto()    # +=
    MINUS_EQ = auto()   # -=
    STAR_EQ = auto()    # *=
    SLASH_EQ = auto()   # /=
    PERCENT_EQ = auto() # %=

    # -----------------------------------------------------------------
    # Punctuation
    # -----------------------------------------------------------------
    COLON = auto()
    COLON_COLON = auto()
    SEMICOLON = auto()
    COMMA = auto()
    DOT = auto()
    DOT_DOT = auto()
    ARROW = auto()        # ->
    MATCH_ARROW = auto()  # =>
    HASH = auto()
    QUESTION = auto()
    UNDERSCORE = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LPAREN = auto()
    RPAREN = auto()

    # -----------------------------------------------------------------
    # Literals
    # -----------------------------------------------------------------
    NUMBER = auto()
    STRING = auto()
    SHORT_STRING = auto()

    # -----------------------------------------------------------------
    # Identifiers
    # -----------------------------------------------------------------
    IDENT = auto()

    # -----------------------------------------------------------------
    # Trivia / structure
    # -----------------------------------------------------------------
    WHITESPACE = auto()
    NEWLINE = auto()
    COMMENT = auto()
    EOF = auto()


# Mapping from literal keyword text to its TokenType.
KEYWORDS: dict[str, TokenType] = {
    "use": TokenType.USE,
    "fn": TokenType.FN,
    "mod": TokenType.MOD,
    "enum": TokenType.ENUM,
    "struct": TokenType.STRUCT,
    "const": TokenType.CONST,
    "impl": TokenType.IMPL,
    "trait": TokenType.TRAIT,
    "of": TokenType.OF,
    "pub": TokenType.PUB,
    "as": TokenType.AS,
    "let": TokenType.LET,
    "mut": TokenType.MUT,
    "ref": TokenType.REF,
    "return": TokenType.RETURN,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "loop": TokenType.LOOP,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "in": TokenType.IN,
    "match": TokenType.MATCH,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

TRIVIA_TYPES: frozenset[TokenType] = frozenset(
    {TokenType.WHITESPACE, TokenType.NEWLINE, TokenType.COMMENT}
)


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with source-location metadata.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    value:
        The raw text exactly as it appeared in the source.
    line:
        1-based line number in the source file.
    col:
        1-based column number of the first character of the token.
    offset:
        0-based character offset from the start of the source string.
    leading_trivia:
        Whitespace and comments preceding the token that are not the
        trailing trivia of the previous token.
    trailing_trivia:
        Spaces, tabs and comments following the token up to and
        including the first newline.
    """

    type: TokenType
    value: str
    line: int
    col: int
    offset: int
    leading_trivia: str = ""
    trailing_trivia: str = ""

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.col})"

    @property
    def end(self) -> int:
        """Offset one past the last character of the token text."""
        return self.offset + len(self.value)

    @property
    def is_trivia(self) -> bool:
        """Return True for whitespace, newline and comment tokens."""
        return self.type in TRIVIA_TYPES

    @property
    def is_keyword(self) -> bool:
        """Return True if this token is a keyword."""
        return self.type in _KEYWORD_TYPES


_KEYWORD_TYPES: frozenset[TokenType] = frozenset(KEYWORDS.values())
