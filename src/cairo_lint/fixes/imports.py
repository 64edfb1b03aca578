"""Removal of unused imports.

Unused-import diagnostics are not fixed one by one: several of them
may point into the same ``use`` declaration, and removing names from a
brace group has to look at the group as a whole.  The pruner works in
two steps.

1. ``collect_unused_imports`` walks up from every unused leaf.  The
   first ``UsePathMulti`` (``{...}``) on the way records the entry of
   its list that holds the leaf; a whole ``ItemUse`` reached first is
   marked for deletion.  The resulting ``ImportFix`` states are keyed
   by the node that owns them.

2. ``apply_import_fixes`` consumes the states deepest first.  A brace
   group whose entries are all dead climbs outward: it becomes a dead
   entry of the enclosing group, or deletes the ``ItemUse``.  A group
   with survivors is rewritten to ``name`` or ``{a, b}``.  When an
   enclosing group is rewritten too, the rewrite of the inner group is
   folded into it so that no two edits of one declaration overlap.

Example
-------
::

    use core::{
        integer::{u128_safe_divmod, u128_byte_reverse},
        option::Option,
    };

with both ``integer`` names unused becomes ``use core::option::Option;``.
"""
from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.fixes.edit import Edit
from cairo_lint.linter.context import LintContext, get_lint_context
from cairo_lint.syntax.kinds import SyntaxKind
from cairo_lint.syntax.tree import SyntaxNode

logger = logging.getLogger(__name__)


@dataclass
class ImportFix:
    """Pending removal inside one import declaration.

    Parameters
    ----------
    node:
        The ``UsePathMulti`` group the names are removed from, or the
        ``ItemUse`` deleted as a whole.
    items_to_remove:
        Texts of the dead entries of the group's list.  Empty for a
        whole-declaration deletion.
    """

    node: SyntaxNode
    items_to_remove: list[str] = field(default_factory=list)

    @property
    def removes_declaration(self) -> bool:
        """Return True if the whole ``use`` declaration goes away."""
        return self.node.kind is SyntaxKind.ITEM_USE


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


def is_unused_import(diagnostic: Diagnostic, context: LintContext | None = None) -> bool:
    """Return True if ``diagnostic`` reports an unused import."""
    if diagnostic.kind is LintKind.UNUSED_IMPORTS:
        return True
    if diagnostic.kind is not LintKind.UNKNOWN:
        return False
    ctx = context if context is not None else get_lint_context()
    return ctx.lint_kind(diagnostic.message) is LintKind.UNUSED_IMPORTS


def collect_unused_imports(
    diagnostics: Iterable[Diagnostic],
    context: LintContext | None = None,
) -> dict[str, dict[SyntaxNode, ImportFix]]:
    """Group the unused-import diagnostics into per-file ``ImportFix`` states.

    Diagnostics of other rules are ignored.

    Returns
    -------
    dict[str, dict[SyntaxNode, ImportFix]]
        For each file id, the states keyed by their owning node.
    """
    file_fixes: dict[str, dict[SyntaxNode, ImportFix]] = {}
    for diagnostic in diagnostics:
        if not is_unused_import(diagnostic, context):
            continue
        fixes = file_fixes.setdefault(diagnostic.file_id, {})
        _process_unused_import(diagnostic.anchor, fixes)
    return file_fixes


def _process_unused_import(leaf: SyntaxNode, fixes: dict[SyntaxNode, ImportFix]) -> None:
    current = leaf
    for parent in leaf.ancestors():
        if parent.kind is SyntaxKind.USE_PATH_LIST:
            group = parent.parent
            assert group is not None and group.kind is SyntaxKind.USE_PATH_MULTI
            fixes.setdefault(group, ImportFix(group)).items_to_remove.append(
                current.text_without_trivia
            )
            return
        if parent.kind is SyntaxKind.ITEM_USE:
            fixes[parent] = ImportFix(parent)
            return
        current = parent
    raise ValueError(f"Unused import {leaf!r} is not inside a use declaration")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def apply_import_fixes(fixes: dict[SyntaxNode, ImportFix]) -> list[Edit]:
    """Turn the states of one file into edits.

    Parameters
    ----------
    fixes:
        The states of a single file, as built by
        ``collect_unused_imports``.  The mapping is consumed.

    Returns
    -------
    list[Edit]
        One edit per declaration part touched; edits never overlap.
    """
    states = fixes
    queue: list[tuple[int, int, SyntaxNode]] = []
    order = itertools.count()

    def push(node: SyntaxNode) -> None:
        heapq.heappush(queue, (-node.depth, next(order), node))

    for node in states:
        push(node)

    deleted: list[SyntaxNode] = []
    removed: set[SyntaxNode] = set()
    rewrites: dict[SyntaxNode, str] = {}

    while queue:
        _, _, node = heapq.heappop(queue)
        state = states.pop(node, None)
        if state is None:
            continue
        if state.removes_declaration:
            deleted.append(node)
            removed.add(node)
            continue

        dead = set(state.items_to_remove)
        survivors = [entry for entry in _list_entries(node) if entry.text_without_trivia not in dead]
        if not survivors:
            removed.add(node)
            owner, entry_text = _climb(node)
            if owner.kind is SyntaxKind.ITEM_USE:
                states.setdefault(owner, ImportFix(owner))
            else:
                states.setdefault(owner, ImportFix(owner)).items_to_remove.append(entry_text)
            push(owner)
            continue

        rendered = [_render_entry(entry, rewrites) for entry in survivors]
        rewrites[node] = rendered[0] if len(rendered) == 1 else "{" + ", ".join(rendered) + "}"

    edits = [_delete_declaration(node) for node in deleted]
    for node, replacement in rewrites.items():
        if any(ancestor in removed for ancestor in node.ancestors()):
            continue
        edits.append(Edit(node.span_without_trivia, replacement))
    logger.debug("Import pruning produced %d edit(s)", len(edits))
    return edits


def _list_entries(group: SyntaxNode) -> list[SyntaxNode]:
    path_list = group.child(SyntaxKind.USE_PATH_LIST)
    if path_list is None:
        return []
    return [child for child in path_list.children if not child.is_terminal]


def _climb(group: SyntaxNode) -> tuple[SyntaxNode, str]:
    """Return the node inheriting a fully dead group, with the dead entry text."""
    current = group
    for parent in group.ancestors():
        if parent.kind is SyntaxKind.USE_PATH_LIST:
            outer = parent.parent
            assert outer is not None
            return outer, current.text_without_trivia
        if parent.kind is SyntaxKind.ITEM_USE:
            return parent, ""
        current = parent
    raise ValueError(f"Use path group {group!r} is not inside a use declaration")


def _render_entry(entry: SyntaxNode, rewrites: dict[SyntaxNode, str]) -> str:
    """Return the text of ``entry`` with inner group rewrites folded in.

    Folded rewrites are removed from ``rewrites``.
    """
    inner = [
        node
        for node in entry.descendants()
        if node.kind is SyntaxKind.USE_PATH_MULTI and node in rewrites
    ]
    text = entry.text_without_trivia
    origin = entry.span_without_trivia.start
    for node in sorted(inner, key=lambda n: n.span_without_trivia.start, reverse=True):
        span = node.span_without_trivia
        text = text[: span.start - origin] + rewrites.pop(node) + text[span.end - origin:]
    return text


def _delete_declaration(item_use: SyntaxNode) -> Edit:
    """Delete ``item_use`` through its trailing newline.

    When only indentation precedes the declaration on its line, the
    indentation goes too.
    """
    source = item_use.tree.source
    start = item_use.span_without_trivia.start
    line_start = source.rfind("\n", 0, start) + 1
    if not source[line_start:start].strip(" \t"):
        start = line_start
    return Edit.delete(start, item_use.span.end)
