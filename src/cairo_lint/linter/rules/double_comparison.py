"""Two comparisons joined by ``&&`` or ``||``.

When both comparisons relate the same two variables the pair is
either expressible as one comparison, redundant, or never true:

    simplifiable_comparison   ``a <= b && a >= b``  →  ``a == b``
                              ``a < b || a == b``   →  ``a <= b``
    redundant_comparison      ``a < b || a > b``    →  ``a != b``
                              ``a <= b || a >= b``  (always true, no fix)
    contradictory_comparison  ``a == b && a < b``, ``a < b && a > b`` ...

When both comparisons test the same variable against integer literals
the bounds may exclude every value:

    impossible_comparison     ``x > 5 && x < 3``

The second comparison is normalized to the operand order of the first
(``b > a`` reads as ``a < b``) before it is classified.
"""
from __future__ import annotations

from typing import NamedTuple

from cairo_lint.diagnostics.diagnostic import Diagnostic, Severity
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import (
    binary_parts,
    int_literal_value,
    is_comparison,
    is_variable_or_snapshot,
    nodes_of_kind,
    token_texts,
)
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode

_FLIPPED: dict[TokenType, TokenType] = {
    TokenType.LT: TokenType.GT,
    TokenType.GT: TokenType.LT,
    TokenType.LE: TokenType.GE,
    TokenType.GE: TokenType.LE,
    TokenType.EQ_EQ: TokenType.EQ_EQ,
    TokenType.NEQ: TokenType.NEQ,
}

_OPERATOR_TEXT: dict[TokenType, str] = {
    TokenType.LT: "<",
    TokenType.GT: ">",
    TokenType.LE: "<=",
    TokenType.GE: ">=",
    TokenType.EQ_EQ: "==",
    TokenType.NEQ: "!=",
}

_AND = TokenType.AND_AND
_OR = TokenType.OR_OR
_EQ, _LT, _GT, _LE, _GE = (
    TokenType.EQ_EQ,
    TokenType.LT,
    TokenType.GT,
    TokenType.LE,
    TokenType.GE,
)

# (first operator, joining operator, second operator) -> simplified operator
_SIMPLIFIABLE: dict[tuple[TokenType, TokenType, TokenType], TokenType] = {
    (_LE, _AND, _GE): _EQ,
    (_GE, _AND, _LE): _EQ,
    (_LT, _OR, _EQ): _LE,
    (_EQ, _OR, _LT): _LE,
    (_GT, _OR, _EQ): _GE,
    (_EQ, _OR, _GT): _GE,
}

# None marks a pair that is always true and has no single-operator form.
_REDUNDANT: dict[tuple[TokenType, TokenType, TokenType], TokenType | None] = {
    (_LE, _OR, _GE): None,
    (_GE, _OR, _LE): None,
    (_LT, _OR, _GT): TokenType.NEQ,
    (_GT, _OR, _LT): TokenType.NEQ,
}

_CONTRADICTORY: frozenset[tuple[TokenType, TokenType, TokenType]] = frozenset(
    {
        (_EQ, _AND, _LT),
        (_LT, _AND, _EQ),
        (_EQ, _AND, _GT),
        (_GT, _AND, _EQ),
        (_LT, _AND, _GT),
        (_GT, _AND, _LT),
        (_LT, _AND, _GE),
        (_GE, _AND, _LT),
        (_GT, _AND, _LE),
        (_LE, _AND, _GT),
    }
)


class _Comparison(NamedTuple):
    node: SyntaxNode
    lhs: SyntaxNode
    op: TokenType
    rhs: SyntaxNode


class _Pair(NamedTuple):
    first: _Comparison
    joiner: TokenType
    second_op: TokenType


def _comparison(node: SyntaxNode) -> _Comparison | None:
    if not is_comparison(node):
        return None
    parts = binary_parts(node)
    assert parts is not None
    return _Comparison(node, parts.lhs, parts.op, parts.rhs)


def _same_operands(first: _Comparison, second: _Comparison) -> TokenType | None:
    """Return ``second.op`` in the operand order of ``first``, or None."""
    first_lhs, first_rhs = token_texts(first.lhs), token_texts(first.rhs)
    second_lhs, second_rhs = token_texts(second.lhs), token_texts(second.rhs)
    if first_lhs == second_lhs and first_rhs == second_rhs:
        return second.op
    if first_lhs == second_rhs and first_rhs == second_lhs:
        return _FLIPPED[second.op]
    return None


def _variable_pair(node: SyntaxNode) -> _Pair | None:
    """Return the pair when both comparisons relate the same two variables."""
    parts = binary_parts(node)
    if parts is None or parts.op not in (_AND, _OR):
        return None
    first, second = _comparison(parts.lhs), _comparison(parts.rhs)
    if first is None or second is None:
        return None
    operands = (first.lhs, first.rhs, second.lhs, second.rhs)
    if not all(is_variable_or_snapshot(operand) for operand in operands):
        return None
    second_op = _same_operands(first, second)
    if second_op is None:
        return None
    return _Pair(first, parts.op, second_op)


def _bound(comparison: _Comparison) -> tuple[list[str], TokenType, int] | None:
    """Return ``(variable tokens, operator, literal)`` with the variable first."""
    if is_variable_or_snapshot(comparison.lhs):
        value = int_literal_value(comparison.rhs)
        if value is not None:
            return token_texts(comparison.lhs), comparison.op, value
    if is_variable_or_snapshot(comparison.rhs):
        value = int_literal_value(comparison.lhs)
        if value is not None:
            return token_texts(comparison.rhs), _FLIPPED[comparison.op], value
    return None


def _is_impossible(node: SyntaxNode) -> bool:
    parts = binary_parts(node)
    if parts is None or parts.op is not _AND:
        return False
    first, second = _comparison(parts.lhs), _comparison(parts.rhs)
    if first is None or second is None:
        return False
    lower, upper = _bound(first), _bound(second)
    if lower is None or upper is None or lower[0] != upper[0]:
        return False
    l_op, l_value = lower[1], lower[2]
    r_op, r_value = upper[1], upper[2]
    if (l_op, r_op) in ((_GT, _LT), (_GT, _LE), (_GE, _LT)):
        return l_value >= r_value
    if (l_op, r_op) == (_GE, _LE):
        return l_value > r_value
    if (l_op, r_op) in ((_LT, _GT), (_LT, _GE), (_LE, _GT)):
        return l_value <= r_value
    if (l_op, r_op) == (_LE, _GE):
        return l_value < r_value
    return False


# ---------------------------------------------------------------------------
# Fixer
# ---------------------------------------------------------------------------


def fix_double_comparison(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Rewrite the pair as the first comparison with the simplified operator.

    Returns None for ``a <= b || a >= b``, which has no single-operator
    form.

    Raises
    ------
    ValueError
        If ``node`` is not a simplifiable or redundant comparison pair.
    """
    pair = _variable_pair(node)
    if pair is None:
        raise ValueError(f"Expected a pair of comparisons, got {node!r}")
    key = (pair.first.op, pair.joiner, pair.second_op)
    if key in _SIMPLIFIABLE:
        simplified: TokenType | None = _SIMPLIFIABLE[key]
    elif key in _REDUNDANT:
        simplified = _REDUNDANT[key]
    else:
        raise ValueError(f"Comparison pair {node.text_without_trivia!r} cannot be simplified")
    if simplified is None:
        return None
    lhs = pair.first.lhs.text_without_trivia
    rhs = pair.first.rhs.text_without_trivia
    return node, f"{lhs} {_OPERATOR_TEXT[simplified]} {rhs}"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


IMPOSSIBLE_COMPARISON = RuleDescriptor(
    kind=LintKind.IMPOSSIBLE_COMPARISON,
    allowed_name="impossible_comparison",
    message="Impossible condition, always false",
    severity=Severity.ERROR,
)

SIMPLIFIABLE_COMPARISON = RuleDescriptor(
    kind=LintKind.SIMPLIFIABLE_COMPARISON,
    allowed_name="simplifiable_comparison",
    message="This double comparison can be simplified.",
    fixer=fix_double_comparison,
)

REDUNDANT_COMPARISON = RuleDescriptor(
    kind=LintKind.REDUNDANT_COMPARISON,
    allowed_name="redundant_comparison",
    message="Redundant double comparison found. Consider simplifying to a single comparison.",
    fixer=fix_double_comparison,
)

CONTRADICTORY_COMPARISON = RuleDescriptor(
    kind=LintKind.CONTRADICTORY_COMPARISON,
    allowed_name="contradictory_comparison",
    message="This double comparison is contradictory and always false.",
    severity=Severity.ERROR,
)


def check_double_comparison(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report comparison pairs that can be simplified or are never true."""
    diagnostics: list[Diagnostic] = []
    for node in nodes_of_kind(item, SyntaxKind.EXPR_BINARY):
        if _is_impossible(node):
            diagnostics.append(IMPOSSIBLE_COMPARISON.diagnostic(node))
            continue
        pair = _variable_pair(node)
        if pair is None:
            continue
        key = (pair.first.op, pair.joiner, pair.second_op)
        if key in _SIMPLIFIABLE:
            diagnostics.append(SIMPLIFIABLE_COMPARISON.diagnostic(node))
        elif key in _REDUNDANT:
            diagnostics.append(REDUNDANT_COMPARISON.diagnostic(node))
        elif key in _CONTRADICTORY:
            diagnostics.append(CONTRADICTORY_COMPARISON.diagnostic(node))
    return diagnostics


DOUBLE_COMPARISON_GROUP = RuleGroup(
    name="double_comparison",
    rules=(
        IMPOSSIBLE_COMPARISON,
        SIMPLIFIABLE_COMPARISON,
        REDUNDANT_COMPARISON,
        CONTRADICTORY_COMPARISON,
    ),
    check=check_double_comparison,
)
