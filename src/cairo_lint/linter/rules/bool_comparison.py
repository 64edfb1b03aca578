"""Comparison of a value with a boolean literal.

``x == true`` is ``x``; ``x == false`` is ``!x``.  The fix rewrites the
comparison to the operand itself, negated when the literal and the
operator disagree.
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import (
    binary_parts,
    bool_literal_value,
    is_simple_operand,
    nodes_of_kind,
)
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode


def _split(node: SyntaxNode) -> tuple[SyntaxNode, bool, bool] | None:
    """Return ``(operand, literal, is_eq)`` for ``x ==/!= true/false``."""
    parts = binary_parts(node)
    if parts is None or parts.op not in (TokenType.EQ_EQ, TokenType.NEQ):
        return None
    is_eq = parts.op is TokenType.EQ_EQ
    literal = bool_literal_value(parts.rhs)
    if literal is not None:
        return parts.lhs, literal, is_eq
    literal = bool_literal_value(parts.lhs)
    if literal is not None:
        return parts.rhs, literal, is_eq
    return None


def check_bool_comparison(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report ``==`` and ``!=`` with ``true`` or ``false`` on either side."""
    return [
        BOOL_COMPARISON.diagnostic(node)
        for node in nodes_of_kind(item, SyntaxKind.EXPR_BINARY)
        if _split(node) is not None
    ]


def fix_bool_comparison(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Rewrite the comparison to the operand, negated where needed.

    Raises
    ------
    ValueError
        If ``node`` is not a comparison with a boolean literal.
    """
    split = _split(node)
    if split is None:
        raise ValueError(f"Expected a comparison with a boolean literal, got {node!r}")
    operand, literal, is_eq = split
    text = operand.text_without_trivia
    if literal == is_eq:
        return node, text
    if not is_simple_operand(operand):
        text = f"({text})"
    return node, f"!{text}"


BOOL_COMPARISON = RuleDescriptor(
    kind=LintKind.BOOL_COMPARISON,
    allowed_name="bool_comparison",
    message="Unnecessary comparison with a boolean value. Use the variable directly.",
    fixer=fix_bool_comparison,
)

BOOL_COMPARISON_GROUP = RuleGroup(
    name="bool_comparison",
    rules=(BOOL_COMPARISON,),
    check=check_bool_comparison,
)
