"""Performance lints.

Rule groups:
    bitwise_for_parity_check  ``x & 1`` used as a parity test
    inefficient_while_comp    ``while i < n`` and friends
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

_ORDERING_OPS = frozenset({TokenType.LT, TokenType.LE, TokenType.GT, TokenType.GE})


# ---------------------------------------------------------------------------
# bitwise_for_parity_check
# ---------------------------------------------------------------------------


def check_bitwise_for_parity(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report ``x & 1``."""
    diagnostics: list[Diagnostic] = []
    for node in nodes_of_kind(item, SyntaxKind.EXPR_BINARY):
        parts = binary_parts(node)
        assert parts is not None
        if parts.op is TokenType.AND and is_int_literal(parts.rhs, 1):
            diagnostics.append(BITWISE_FOR_PARITY.diagnostic(node))
    return diagnostics


BITWISE_FOR_PARITY = RuleDescriptor(
    kind=LintKind.BITWISE_FOR_PARITY_CHECK,
    allowed_name="bitwise_for_parity_check",
    message=(
        "You seem to be trying to use `&` for parity check. "
        "Consider using `DivRem::div_rem()` instead."
    ),
)

BITWISE_FOR_PARITY_GROUP = RuleGroup(
    name="bitwise_for_parity_check",
    rules=(BITWISE_FOR_PARITY,),
    check=check_bitwise_for_parity,
)


# ---------------------------------------------------------------------------
# inefficient_while_comp
# ---------------------------------------------------------------------------


def _ordering_comparisons(condition: SyntaxNode) -> list[SyntaxNode]:
    """Return the ``<``/``<=``/``>``/``>=`` operands of an ``&&``/``||`` tree."""
    parts = binary_parts(condition)
    if parts is None:
        return []
    if parts.op in _ORDERING_OPS:
        return [condition]
    if parts.op in (TokenType.AND_AND, TokenType.OR_OR):
        return _ordering_comparisons(parts.lhs) + _ordering_comparisons(parts.rhs)
    return []


def check_inefficient_while_comp(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report ordering comparisons in ``while`` conditions."""
    diagnostics: list[Diagnostic] = []
    for node in nodes_of_kind(item, SyntaxKind.EXPR_WHILE):
        condition = node.children[1]
        if condition.kind is SyntaxKind.CONDITION_LET:
            continue
        diagnostics.extend(
            INEFFICIENT_WHILE_COMPARISON.diagnostic(comparison)
            for comparison in _ordering_comparisons(condition)
        )
    return diagnostics


INEFFICIENT_WHILE_COMPARISON = RuleDescriptor(
    kind=LintKind.INEFFICIENT_WHILE_COMP,
    allowed_name="inefficient_while_comp",
    message=(
        "using [`<`, `<=`, `>=`, `>`] exit conditions is inefficient. "
        "Consider switching to `!=` or using ArrayTrait::multi_pop_front."
    ),
)

INEFFICIENT_WHILE_COMPARISON_GROUP = RuleGroup(
    name="performance",
    rules=(INEFFICIENT_WHILE_COMPARISON,),
    check=check_inefficient_while_comp,
)
