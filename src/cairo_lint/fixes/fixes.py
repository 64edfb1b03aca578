"""Fix generation for lint diagnostics.

Each rule may carry a fixer that rewrites the node of a diagnostic.
``generate_fix`` turns the fixer's ``(node, replacement)`` result into
an ``Edit`` over the node's text without trivia, so that surrounding
comments and whitespace are left alone.  Unused imports are handled by
``cairo_lint.fixes.imports`` instead, since their edits depend on the
other unused names of the same declaration.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.fixes.edit import Edit
from cairo_lint.fixes.imports import apply_import_fixes, collect_unused_imports, is_unused_import
from cairo_lint.linter.context import LintContext, get_lint_context

logger = logging.getLogger(__name__)


def generate_fix(diagnostic: Diagnostic, context: LintContext | None = None) -> Edit | None:
    """Return the edit fixing ``diagnostic``, if its rule has one.

    Parameters
    ----------
    diagnostic:
        A diagnostic produced by a registered rule.
    context:
        Registry resolving the rule.  Defaults to the shared registry.

    Returns
    -------
    Edit | None
        ``None`` for unused imports, for rules without a fixer, and when
        the fixer declines the node.

    Raises
    ------
    UnknownLintError
        If no registered rule owns the diagnostic.
    """
    ctx = context if context is not None else get_lint_context()
    if is_unused_import(diagnostic, ctx):
        logger.debug("Unused imports should be handled in preemptively")
        return None

    rule = ctx.rule_for(diagnostic)
    if rule.fixer is None:
        logger.debug("No fix available for diagnostic: %s", diagnostic.message)
        return None

    result = rule.fixer(diagnostic.anchor)
    if result is None:
        logger.debug("Fixer of %s declined %r", rule.allowed_name, diagnostic.anchor)
        return None
    node, replacement = result
    return Edit(node.span_without_trivia, replacement)


def collect_fixes(
    diagnostics: Iterable[Diagnostic],
    context: LintContext | None = None,
) -> dict[str, list[Edit]]:
    """Build every edit for ``diagnostics``, grouped by file id.

    Import edits come first within a file, followed by the rule fixes
    in diagnostic order.  The edits are not checked for overlaps; see
    ``cairo_lint.fixes.resolver``.
    """
    ctx = context if context is not None else get_lint_context()
    diagnostics = list(diagnostics)

    edits: dict[str, list[Edit]] = {}
    for file_id, import_fixes in collect_unused_imports(diagnostics, ctx).items():
        edits.setdefault(file_id, []).extend(apply_import_fixes(import_fixes))

    for diagnostic in diagnostics:
        edit = generate_fix(diagnostic, ctx)
        if edit is not None:
            edits.setdefault(diagnostic.file_id, []).append(edit)
    return edits
