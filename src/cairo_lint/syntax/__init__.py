"""Cairo syntax tree module.

Exports the arena ``SyntaxTree``, node handles, spans and node kinds.
"""
from __future__ import annotations

from cairo_lint.syntax.kinds import (
    BLOCK_LIKE_KINDS,
    ITEM_KINDS,
    STATEMENT_KINDS,
    SyntaxKind,
)
from cairo_lint.syntax.tree import SyntaxNode, SyntaxTree, TextSpan

__all__ = [
    "SyntaxKind",
    "SyntaxNode",
    "SyntaxTree",
    "TextSpan",
    "ITEM_KINDS",
    "STATEMENT_KINDS",
    "BLOCK_LIKE_KINDS",
]
