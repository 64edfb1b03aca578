"""Per-file semantic facts consumed by the checkers.

The linter does not type-check.  The ``SemanticModel`` exposes the two
facts the shipped checkers need from a host compiler:

* the module items of the file, with the items of inline ``mod`` blocks
  flattened in (the ``mod`` item itself is a container, not an item);
* the set of names referenced outside ``use`` declarations, from which
  unused imports are derived.
"""
from __future__ import annotations

from dataclasses import dataclass

from cairo_lint.grammar.tokens import TokenType
from cairo_lint.syntax.kinds import ITEM_KINDS, SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode, SyntaxTree

# Parents under which an identifier is a reference to a name in scope.
_REFERENCE_PARENTS = frozenset(
    {
        SyntaxKind.EXPR_PATH,
        SyntaxKind.TYPE,
        SyntaxKind.GENERIC_ARGS,
        SyntaxKind.GENERIC_PARAMS,
    }
)


@dataclass(frozen=True)
class SemanticModel:
    """Semantic facts for one parsed file.

    Parameters
    ----------
    tree:
        The syntax tree the facts were computed from.
    items:
        Module items in source order.
    used_names:
        Identifiers referenced by paths and types outside ``use``
        declarations.
    """

    tree: SyntaxTree
    items: tuple[SyntaxNode, ...]
    used_names: frozenset[str]

    @classmethod
    def build(cls, tree: SyntaxTree) -> SemanticModel:
        """Compute the semantic model of ``tree``."""
        return cls(
            tree=tree,
            items=tuple(module_items(tree.root)),
            used_names=frozenset(_referenced_names(tree.root)),
        )

    def is_used(self, name: str) -> bool:
        """Return True if ``name`` is referenced anywhere outside imports."""
        return name in self.used_names


def module_items(container: SyntaxNode) -> list[SyntaxNode]:
    """Return the items of ``container``, descending into inline modules."""
    items: list[SyntaxNode] = []
    for child in container.children:
        if child.kind is SyntaxKind.ITEM_MODULE:
            body = child.child(SyntaxKind.ITEM_BODY)
            if body is not None:
                items.extend(module_items(body))
        elif child.kind in ITEM_KINDS:
            items.append(child)
    return items


def _referenced_names(root: SyntaxNode) -> set[str]:
    names: set[str] = set()
    for node in root.descendants():
        if node.token_type is not TokenType.IDENT:
            continue
        parent = node.parent
        if parent is None or parent.kind not in _REFERENCE_PARENTS:
            continue
        if any(anc.kind is SyntaxKind.ITEM_USE for anc in node.ancestors()):
            continue
        names.add(node.text_without_trivia)
    return names
