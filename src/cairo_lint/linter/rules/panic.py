"""Calls to ``panic`` left in the code.

Covers the ``panic!(...)`` macro and direct calls to ``panic(...)`` or
``core::panics::panic(...)``.  The rule is disabled unless the project
configuration turns it on.
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.linter.rules.helpers import function_bodies
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode

_PANIC_PATHS = frozenset({"panic", "panics::panic", "core::panics::panic"})


def _is_panic(node: SyntaxNode) -> bool:
    if node.kind not in (SyntaxKind.EXPR_CALL, SyntaxKind.EXPR_INLINE_MACRO):
        return False
    path = node.children[0]
    return path.kind is SyntaxKind.EXPR_PATH and path.text_without_trivia in _PANIC_PATHS


def check_panic_usage(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report every ``panic`` call and ``panic!`` invocation."""
    return [
        PANIC_IN_CODE.diagnostic(node)
        for body in function_bodies(item)
        for node in body.descendants()
        if _is_panic(node)
    ]


PANIC_IN_CODE = RuleDescriptor(
    kind=LintKind.PANIC,
    allowed_name="panic",
    message="Leaving `panic` in the code is discouraged.",
    enabled_by_default=False,
)

PANIC_GROUP = RuleGroup(
    name="panic",
    rules=(PANIC_IN_CODE,),
    check=check_panic_usage,
)
