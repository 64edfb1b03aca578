"""Cairo grammar module.

Exports token definitions.
"""
from __future__ import annotations

from cairo_lint.grammar.tokens import KEYWORDS, TRIVIA_TYPES, Token, TokenType

__all__ = [
    "TokenType",
    "Token",
    "KEYWORDS",
    "TRIVIA_TYPES",
]
