"""Cairo lexer module.

Exports the ``Lexer`` class, the trivia-attaching ``tokenize``
convenience function, and ``LexError``.
"""
from __future__ import annotations

from cairo_lint.lexer.lexer import LexError, Lexer, attach_trivia, tokenize

__all__ = ["Lexer", "tokenize", "attach_trivia", "LexError"]
