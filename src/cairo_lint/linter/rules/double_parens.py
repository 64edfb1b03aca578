"""Parentheses wrapped directly around parentheses or a unit tuple.

``((x))`` reads as ``x``.  Only the outermost layer is reported; the fix
replaces it with the innermost non-parenthesized expression.
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import nodes_of_kind, strip_parens
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode

_INNER_KINDS = frozenset({SyntaxKind.EXPR_PARENTHESIZED, SyntaxKind.EXPR_TUPLE})


def _is_double_parens(node: SyntaxNode) -> bool:
    return node.kind is SyntaxKind.EXPR_PARENTHESIZED and node.children[1].kind in _INNER_KINDS


def check_double_parens(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report the outermost node of each stack of redundant parentheses."""
    diagnostics: list[Diagnostic] = []
    for node in nodes_of_kind(item, SyntaxKind.EXPR_PARENTHESIZED):
        if not _is_double_parens(node):
            continue
        parent = node.parent
        if parent is not None and _is_double_parens(parent):
            continue
        diagnostics.append(DOUBLE_PARENS.diagnostic(node))
    return diagnostics


def fix_double_parens(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Replace the parentheses with the expression they enclose.

    Raises
    ------
    ValueError
        If ``node`` is not a parenthesized expression.
    """
    if node.kind is not SyntaxKind.EXPR_PARENTHESIZED:
        raise ValueError(f"Expected a parenthesized expression, got {node!r}")
    return node, strip_parens(node).text_without_trivia


DOUBLE_PARENS = RuleDescriptor(
    kind=LintKind.DOUBLE_PARENS,
    allowed_name="double_parens",
    message="unnecessary double parentheses found. Consider removing them.",
    fixer=fix_double_parens,
)

DOUBLE_PARENS_GROUP = RuleGroup(
    name="double_parens",
    rules=(DOUBLE_PARENS,),
    check=check_double_parens,
)
