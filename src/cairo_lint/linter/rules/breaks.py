"""``break ();`` where a bare ``break;`` says the same."""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import nodes_of_kind
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode


def _unit_value(statement: SyntaxNode) -> SyntaxNode | None:
    """Return the ``()`` expression a ``break`` statement carries."""
    value = statement.child(SyntaxKind.EXPR_TUPLE)
    if value is None or len(value.children) != 2:
        return None
    return value


def check_break(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report ``break`` statements returning the unit value."""
    return [
        BREAK_UNIT.diagnostic(node)
        for node in nodes_of_kind(item, SyntaxKind.STATEMENT_BREAK)
        if _unit_value(node) is not None
    ]


def fix_break_unit(node: SyntaxNode) -> tuple[SyntaxNode, str] | None:
    """Drop the ``()`` value, keeping attributes and the semicolon.

    Raises
    ------
    ValueError
        If ``node`` is not a ``break ()`` statement.
    """
    value = _unit_value(node) if node.kind is SyntaxKind.STATEMENT_BREAK else None
    if value is None:
        raise ValueError(f"Expected a break statement with a unit value, got {node!r}")
    start = node.span_without_trivia.start
    text = node.text_without_trivia
    before = text[: value.span_without_trivia.start - start].rstrip()
    after = text[value.span_without_trivia.end - start:]
    return node, before + after


BREAK_UNIT = RuleDescriptor(
    kind=LintKind.BREAK_UNIT,
    allowed_name="break_unit",
    message="unnecessary double parentheses found after break. Consider removing them.",
    fixer=fix_break_unit,
)

BREAK_GROUP = RuleGroup(
    name="breaks",
    rules=(BREAK_UNIT,),
    check=check_break,
)
