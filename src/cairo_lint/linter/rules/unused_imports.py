"""Imports whose name is never referenced.

In the Cairo toolchain this diagnostic comes from the compiler, not
from a lint plugin; the linter only routes it to the import pruner.
Here the host model is part of the linter, so the detection runs as one
more checker over ``use`` items.  The diagnostic is anchored at the
``UsePathLeaf`` (alias included) and its message names the binding with
the path of the module that declares it.

Glob imports (``use a::*;``) are never reported.
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.grammar.tokens import TokenType
from cairo_lint.linter.context import RuleDescriptor, RuleGroup
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode


def binding_name(leaf: SyntaxNode) -> str:
    """Return the name a ``UsePathLeaf`` brings into scope.

    Raises
    ------
    ValueError
        If ``leaf`` is not a ``UsePathLeaf``.
    """
    if leaf.kind is not SyntaxKind.USE_PATH_LEAF:
        raise ValueError(f"Expected a use path leaf, got {leaf!r}")
    alias = leaf.child(SyntaxKind.ALIAS_CLAUSE)
    owner = alias if alias is not None else leaf
    name = owner.terminal(TokenType.IDENT)
    assert name is not None
    return name.text_without_trivia


def _module_path(node: SyntaxNode) -> list[str]:
    path: list[str] = []
    for ancestor in node.ancestors():
        if ancestor.kind is SyntaxKind.ITEM_MODULE:
            name = ancestor.terminal(TokenType.IDENT)
            if name is not None:
                path.append(name.text_without_trivia)
    return list(reversed(path))


def check_unused_imports(item: SyntaxNode, model: SemanticModel) -> list[Diagnostic]:
    """Report every imported name the file never references."""
    if item.kind is not SyntaxKind.ITEM_USE:
        return []
    diagnostics: list[Diagnostic] = []
    for leaf in item.descendants():
        if leaf.kind is not SyntaxKind.USE_PATH_LEAF:
            continue
        name = binding_name(leaf)
        if model.is_used(name):
            continue
        qualified = "::".join([*_module_path(item), name])
        diagnostics.append(UNUSED_IMPORT.diagnostic(leaf, qualified))
    return diagnostics


UNUSED_IMPORT = RuleDescriptor(
    kind=LintKind.UNUSED_IMPORTS,
    allowed_name="unused_imports",
    message="Unused import: `{}`",
)

UNUSED_IMPORTS_GROUP = RuleGroup(
    name="unused_imports",
    rules=(UNUSED_IMPORT,),
    check=check_unused_imports,
)
