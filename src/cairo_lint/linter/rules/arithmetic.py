"""Arithmetic with an identity or an absorbing operand.

Rule groups:
    redundant_op  ``x + 0``, ``0 + x``, ``x - 0``, ``x * 1``, ``1 * x``, ``x / 1``
    erasing_op    ``x * 0``, ``0 * x``, ``x & 0``, ``0 & x``, ``0 / x``

Neither rule ships a fix.
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import binary_parts, is_int_literal, nodes_of_kind
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode


# ---------------------------------------------------------------------------
# redundant_op
# ---------------------------------------------------------------------------


def _is_redundant(node: SyntaxNode) -> bool:
    parts = binary_parts(node)
    if parts is None:
        return False
    if parts.op is TokenType.PLUS:
        return is_int_literal(parts.lhs, 0) or is_int_literal(parts.rhs, 0)
    if parts.op is TokenType.MINUS:
        return is_int_literal(parts.rhs, 0)
    if parts.op is TokenType.STAR:
        return is_int_literal(parts.lhs, 1) or is_int_literal(parts.rhs, 1)
    if parts.op is TokenType.SLASH:
        return is_int_literal(parts.rhs, 1)
    return False


def check_redundant_operation(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report operations that leave their other operand unchanged."""
    return [
        REDUNDANT_OPERATION.diagnostic(node)
        for node in nodes_of_kind(item, SyntaxKind.EXPR_BINARY)
        if _is_redundant(node)
    ]


REDUNDANT_OPERATION = RuleDescriptor(
    kind=LintKind.REDUNDANT_OPERATION,
    allowed_name="redundant_op",
    message="This operation doesn't change the value and can be simplified.",
)

REDUNDANT_OPERATION_GROUP = RuleGroup(
    name="redundant_op",
    rules=(REDUNDANT_OPERATION,),
    check=check_redundant_operation,
)


# ---------------------------------------------------------------------------
# erasing_op
# ---------------------------------------------------------------------------


def _is_erasing(node: SyntaxNode) -> bool:
    parts = binary_parts(node)
    if parts is None:
        return False
    if parts.op in (TokenType.STAR, TokenType.AND):
        return is_int_literal(parts.lhs, 0) or is_int_literal(parts.rhs, 0)
    if parts.op is TokenType.SLASH:
        return is_int_literal(parts.lhs, 0)
    return False


def check_erasing_operation(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report operations whose result is always zero."""
    return [
        ERASING_OPERATION.diagnostic(node)
        for node in nodes_of_kind(item, SyntaxKind.EXPR_BINARY)
        if _is_erasing(node)
    ]


ERASING_OPERATION = RuleDescriptor(
    kind=LintKind.ERASING_OPERATION,
    allowed_name="erasing_op",
    message=(
        "This operation results in the value being erased (e.g., multiplication by 0). "
        "Consider replacing the entire expression with 0."
    ),
)

ERASING_OPERATION_GROUP = RuleGroup(
    name="erasing_op",
    rules=(ERASING_OPERATION,),
    check=check_erasing_operation,
)
