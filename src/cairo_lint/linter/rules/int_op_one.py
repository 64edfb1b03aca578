"""Integer comparisons that add or subtract one instead of using a strict operator.

    int_ge_plus_one  ``x >= y + 1``  →  ``x > y``
    int_ge_min_one   ``x - 1 >= y``  →  ``x > y``
    int_le_plus_one  ``x + 1 <= y``  →  ``x < y``
    int_le_min_one   ``x <= y - 1``  →  ``x < y``

Both sides must be plain variables apart from the ``+ 1`` or ``- 1``.
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import (
    BinaryParts,
    binary_parts,
    is_int_literal,
    is_variable,
    nodes_of_kind,
)
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode


def _offset_variable(node: SyntaxNode, op: TokenType) -> SyntaxNode | None:
    """Return ``x`` when ``node`` is ``x <op> 1``."""
    parts = binary_parts(node)
    if parts is None or parts.op is not op:
        return None
    if is_variable(parts.lhs) and is_int_literal(parts.rhs, 1):
        return parts.lhs
    return None


def _comparison(node: SyntaxNode, op: TokenType) -> BinaryParts:
    parts = binary_parts(node)
    if parts is None or parts.op is not op:
        raise ValueError(f"Expected a {op.name} comparison, got {node!r}")
    return parts


# ---------------------------------------------------------------------------
# Fixers
# ---------------------------------------------------------------------------


def fix_int_ge_plus_one(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Rewrite ``x >= y + 1`` to ``x > y``."""
    parts = _comparison(node, TokenType.GE)
    inner = binary_parts(parts.rhs)
    assert inner is not None
    return node, f"{parts.lhs.text_without_trivia} > {inner.lhs.text_without_trivia}"


def fix_int_ge_min_one(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Rewrite ``x - 1 >= y`` to ``x > y``."""
    parts = _comparison(node, TokenType.GE)
    inner = binary_parts(parts.lhs)
    assert inner is not None
    return node, f"{inner.lhs.text_without_trivia} > {parts.rhs.text_without_trivia}"


def fix_int_le_plus_one(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Rewrite ``x + 1 <= y`` to ``x < y``."""
    parts = _comparison(node, TokenType.LE)
    inner = binary_parts(parts.lhs)
    assert inner is not None
    return node, f"{inner.lhs.text_without_trivia} < {parts.rhs.text_without_trivia}"


def fix_int_le_min_one(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Rewrite ``x <= y - 1`` to ``x < y``."""
    parts = _comparison(node, TokenType.LE)
    inner = binary_parts(parts.rhs)
    assert inner is not None
    return node, f"{parts.lhs.text_without_trivia} < {inner.lhs.text_without_trivia}"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


INT_GE_PLUS_ONE = RuleDescriptor(
    kind=LintKind.INT_GE_PLUS_ONE,
    allowed_name="int_ge_plus_one",
    message="Unnecessary add operation in integer >= comparison. Use simplified comparison.",
    fixer=fix_int_ge_plus_one,
)

INT_GE_MIN_ONE = RuleDescriptor(
    kind=LintKind.INT_GE_MIN_ONE,
    allowed_name="int_ge_min_one",
    message="Unnecessary sub operation in integer >= comparison. Use simplified comparison.",
    fixer=fix_int_ge_min_one,
)

INT_LE_PLUS_ONE = RuleDescriptor(
    kind=LintKind.INT_LE_PLUS_ONE,
    allowed_name="int_le_plus_one",
    message="Unnecessary add operation in integer <= comparison. Use simplified comparison.",
    fixer=fix_int_le_plus_one,
)

INT_LE_MIN_ONE = RuleDescriptor(
    kind=LintKind.INT_LE_MIN_ONE,
    allowed_name="int_le_min_one",
    message="Unnecessary sub operation in integer <= comparison. Use simplified comparison.",
    fixer=fix_int_le_min_one,
)


def check_int_op_one(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report ``>=`` and ``<=`` comparisons offset by one."""
    diagnostics: list[Diagnostic] = []
    for node in nodes_of_kind(item, SyntaxKind.EXPR_BINARY):
        parts = binary_parts(node)
        assert parts is not None
        if parts.op is TokenType.GE:
            if is_variable(parts.lhs) and _offset_variable(parts.rhs, TokenType.PLUS) is not None:
                diagnostics.append(INT_GE_PLUS_ONE.diagnostic(node))
            if _offset_variable(parts.lhs, TokenType.MINUS) is not None and is_variable(parts.rhs):
                diagnostics.append(INT_GE_MIN_ONE.diagnostic(node))
        elif parts.op is TokenType.LE:
            if _offset_variable(parts.lhs, TokenType.PLUS) is not None and is_variable(parts.rhs):
                diagnostics.append(INT_LE_PLUS_ONE.diagnostic(node))
            if is_variable(parts.lhs) and _offset_variable(parts.rhs, TokenType.MINUS) is not None:
                diagnostics.append(INT_LE_MIN_ONE.diagnostic(node))
    return diagnostics


INT_OP_ONE_GROUP = RuleGroup(
    name="int_op_one",
    rules=(INT_GE_PLUS_ONE, INT_GE_MIN_ONE, INT_LE_PLUS_ONE, INT_LE_MIN_ONE),
    check=check_int_op_one,
)
