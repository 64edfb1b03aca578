"""Lints on ``if`` expressions.

Rule groups:
    collapsible_if       ``if a { if b { ... } }``       →  ``if (a) && (b) { ... }``
    collapsible_if_else  ``else { if b { ... } }``       →  ``else if b { ... }``
    ifs_same_cond        ``if a { ... } else if a { ... }``
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import (
    dedent_continuation,
    else_clause,
    if_block,
    if_condition,
    nodes_of_kind,
    sole_if_of_block,
    token_texts,
)
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode


def _expect_if(node: SyntaxNode) -> None:
    if node.kind is not SyntaxKind.EXPR_IF:
        raise ValueError(f"Expected an if expression, got {node!r}")


# ---------------------------------------------------------------------------
# collapsible_if
# ---------------------------------------------------------------------------


def _collapsible_inner_if(if_expr: SyntaxNode) -> SyntaxNode | None:
    """Return the inner ``if`` that can merge into ``if_expr``."""
    if else_clause(if_expr) is not None:
        return None
    if if_condition(if_expr).kind is SyntaxKind.CONDITION_LET:
        return None
    inner = sole_if_of_block(if_block(if_expr))
    if inner is None or else_clause(inner) is not None:
        return None
    if if_condition(inner).kind is SyntaxKind.CONDITION_LET:
        return None
    return inner


def check_collapsible_if(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report an ``if`` whose body is only another ``if``, neither with ``else``."""
    return [
        COLLAPSIBLE_IF.diagnostic(node)
        for node in nodes_of_kind(item, SyntaxKind.EXPR_IF)
        if _collapsible_inner_if(node) is not None
    ]


def fix_collapsible_if(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Merge both conditions with ``&&`` and keep the inner body.

    Raises
    ------
    ValueError
        If ``node`` is not an ``if`` expression.
    """
    _expect_if(node)
    inner = _collapsible_inner_if(node)
    if inner is None:
        return None
    outer_condition = if_condition(node).text_without_trivia
    inner_condition = if_condition(inner).text_without_trivia
    body = dedent_continuation(if_block(inner).text_without_trivia)
    return node, f"if ({outer_condition}) && ({inner_condition}) {body}"


COLLAPSIBLE_IF = RuleDescriptor(
    kind=LintKind.COLLAPSIBLE_IF,
    allowed_name="collapsible_if",
    message=(
        "Each `if`-statement adds one level of nesting, which makes code look more "
        "complex than it really is."
    ),
    fixer=fix_collapsible_if,
)

COLLAPSIBLE_IF_GROUP = RuleGroup(
    name="collapsible_if",
    rules=(COLLAPSIBLE_IF,),
    check=check_collapsible_if,
)


# ---------------------------------------------------------------------------
# collapsible_if_else
# ---------------------------------------------------------------------------


def _if_in_else_block(if_expr: SyntaxNode) -> SyntaxNode | None:
    """Return the ``if`` an ``else { ... }`` block consists of."""
    clause = else_clause(if_expr)
    if clause is None:
        return None
    branch = clause.children[1]
    if branch.kind is not SyntaxKind.BLOCK:
        return None
    return sole_if_of_block(branch)


def check_collapsible_if_else(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report an ``else`` block that holds nothing but an ``if``."""
    return [
        COLLAPSIBLE_IF_ELSE.diagnostic(node)
        for node in nodes_of_kind(item, SyntaxKind.EXPR_IF)
        if _if_in_else_block(node) is not None
    ]


def fix_collapsible_if_else(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Replace ``else { if ... }`` by ``else if ...``.

    Raises
    ------
    ValueError
        If ``node`` is not an ``if`` expression.
    """
    _expect_if(node)
    inner = _if_in_else_block(node)
    if inner is None:
        return None
    clause = else_clause(node)
    assert clause is not None
    return clause, f"else {dedent_continuation(inner.text_without_trivia)}"


COLLAPSIBLE_IF_ELSE = RuleDescriptor(
    kind=LintKind.COLLAPSIBLE_IF_ELSE,
    allowed_name="collapsible_if_else",
    message="Consider using else if instead of else { if ... }",
    fixer=fix_collapsible_if_else,
)

COLLAPSIBLE_IF_ELSE_GROUP = RuleGroup(
    name="collapsible_if_else",
    rules=(COLLAPSIBLE_IF_ELSE,),
    check=check_collapsible_if_else,
)


# ---------------------------------------------------------------------------
# ifs_same_cond
# ---------------------------------------------------------------------------


def _passes_ref(node: SyntaxNode) -> bool:
    """Return True if a call in ``node`` takes a ``ref`` argument."""
    for desc in node.descendants():
        if desc.kind is SyntaxKind.ARG_LIST and desc.terminal(TokenType.REF) is not None:
            return True
    return False


def _has_same_condition_later(if_expr: SyntaxNode) -> bool:
    condition = if_condition(if_expr)
    if _passes_ref(condition):
        return False
    expected = token_texts(condition)
    clause = else_clause(if_expr)
    while clause is not None:
        branch = clause.children[1]
        if branch.kind is not SyntaxKind.EXPR_IF:
            return False
        other = if_condition(branch)
        if not _passes_ref(other) and token_texts(other) == expected:
            return True
        clause = else_clause(branch)
    return False


def check_ifs_same_cond(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report an ``if`` whose condition is repeated by a later ``else if``."""
    return [
        DUPLICATE_IF_CONDITION.diagnostic(node)
        for node in nodes_of_kind(item, SyntaxKind.EXPR_IF)
        if _has_same_condition_later(node)
    ]


DUPLICATE_IF_CONDITION = RuleDescriptor(
    kind=LintKind.IFS_SAME_COND,
    allowed_name="ifs_same_cond",
    message="Consecutive `if` with the same condition found.",
)

DUPLICATE_IF_CONDITION_GROUP = RuleGroup(
    name="ifs_same_cond",
    rules=(DUPLICATE_IF_CONDITION,),
    check=check_ifs_same_cond,
)
