"""Cairo linter: rule dispatch, suppression and fixing for one file.

``CairoLinter`` parses a source file, builds its ``SemanticModel`` and
runs every distinct checker of its rule registry against each module
item.  Diagnostics suppressed by ``#[allow(...)]`` or by the project
configuration are dropped; the rest are returned sorted by position.

Usage
-----
::

    from cairo_lint.linter import CairoLinter

    linter = CairoLinter()
    diagnostics = linter.lint("fn main() { let x = 1; let _y = x + 0; }")
    fixed, result = linter.fix(source)
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cairo_lint.config import LintConfig
from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.files import InMemoryFileStore
from cairo_lint.linter.context import LintContext, RuleGroup, get_lint_context
from cairo_lint.linter.suppression import filter_diagnostics
from cairo_lint.parser.parser import parse
from cairo_lint.semantic.model import SemanticModel
from cairo_lint.syntax.tree import SyntaxTree

if TYPE_CHECKING:
    from cairo_lint.fixes.resolver import FixResult

logger = logging.getLogger(__name__)

DEFAULT_FILE_ID = "lib.cairo"


class CairoLinter:
    """Configurable Cairo linter.

    Parameters
    ----------
    config:
        Project rule switches.  Defaults to the empty configuration,
        under which every rule runs with its default enablement.
    context:
        Rule registry to dispatch.  Defaults to the shared registry of
        every built-in rule group.
    """

    def __init__(
        self,
        config: LintConfig | None = None,
        context: LintContext | None = None,
    ) -> None:
        self._config = config if config is not None else LintConfig()
        self._context = context if context is not None else get_lint_context()
        self._owns_context = context is not None

    @property
    def config(self) -> LintConfig:
        return self._config

    @property
    def context(self) -> LintContext:
        return self._context

    def lint_tree(self, tree: SyntaxTree) -> list[Diagnostic]:
        """Run every checker against the items of ``tree``.

        Parameters
        ----------
        tree:
            A parsed file.

        Returns
        -------
        list[Diagnostic]
            Findings that survive suppression, sorted by position.
        """
        model = SemanticModel.build(tree)
        diagnostics: list[Diagnostic] = []
        for item in model.items:
            diagnostics.extend(self._context.dispatch(item, model))

        kept = filter_diagnostics(diagnostics, self._config, self._context)
        kept.sort(key=lambda d: (d.anchor.span_without_trivia.start, d.anchor.span_without_trivia.end))
        logger.debug(
            "%s: %d diagnostic(s), %d suppressed",
            tree.file_id,
            len(kept),
            len(diagnostics) - len(kept),
        )
        return kept

    def lint(self, source: str, file_id: str = DEFAULT_FILE_ID) -> list[Diagnostic]:
        """Parse ``source`` and lint it.

        Raises
        ------
        cairo_lint.lexer.LexError
            If the source contains invalid characters.
        cairo_lint.parser.ParseErrorCollection
            If the source contains syntax errors.
        """
        return self.lint_tree(parse(source, file_id))

    def fix(self, source: str, file_id: str = DEFAULT_FILE_ID) -> tuple[str, FixResult]:
        """Lint ``source`` and apply every safe fix.

        Returns
        -------
        tuple[str, FixResult]
            The patched text (``source`` itself unless the fixes were
            applied) and the outcome.
        """
        from cairo_lint.fixes.fixes import collect_fixes
        from cairo_lint.fixes.resolver import apply_file_fixes

        diagnostics = self.lint(source, file_id)
        edits = collect_fixes(diagnostics, self._context).get(file_id, [])
        store = InMemoryFileStore({file_id: source})
        result = apply_file_fixes(file_id, edits, store)
        return store.files[file_id], result

    def add_group(self, group: RuleGroup) -> None:
        """Register a custom rule group with this linter only.

        Parameters
        ----------
        group:
            The group to add.  The shared registry is copied first, so
            other linters are unaffected.
        """
        if not self._owns_context:
            self._context = LintContext(self._context.groups)
            self._owns_context = True
        self._context.register(group)

    @property
    def rule_count(self) -> int:
        """Return the number of rules currently registered."""
        return len(self._context)


def lint(
    source: str,
    file_id: str = DEFAULT_FILE_ID,
    config: LintConfig | None = None,
) -> list[Diagnostic]:
    """Convenience function: lint ``source`` with all default rules.

    Parameters
    ----------
    source:
        Cairo source text.
    file_id:
        Identifier reported in diagnostics.
    config:
        Optional project rule switches.

    Returns
    -------
    list[Diagnostic]
        Sorted list of all lint findings.
    """
    return CairoLinter(config=config).lint(source, file_id)


def fix(
    source: str,
    file_id: str = DEFAULT_FILE_ID,
    config: LintConfig | None = None,
) -> str:
    """Convenience function: return ``source`` with every safe fix applied."""
    fixed, _ = CairoLinter(config=config).fix(source, file_id)
    return fixed
