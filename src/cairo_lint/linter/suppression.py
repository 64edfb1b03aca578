"""Suppression of diagnostics by ``#[allow(...)]`` and project configuration.

A diagnostic is dropped when the node it points at, or any node
containing it, carries ``#[allow(<name>)]`` with the allowed name of
the diagnostic's rule.  Otherwise the project configuration decides,
falling back to whether the rule is enabled by default.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from cairo_lint.config import LintConfig
from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.linter.context import LintContext, get_lint_context

logger = logging.getLogger(__name__)

ALLOW_ATTRIBUTE = "allow"


def is_suppressed(
    diagnostic: Diagnostic,
    config: LintConfig | None = None,
    context: LintContext | None = None,
) -> bool:
    """Return True if ``diagnostic`` must not be reported.

    Parameters
    ----------
    diagnostic:
        The diagnostic to test.
    config:
        Project rule switches.  Defaults to the empty configuration.
    context:
        Registry resolving the diagnostic's rule.  Defaults to the
        shared registry.

    Raises
    ------
    UnknownLintError
        If no registered rule owns the diagnostic.
    """
    ctx = context if context is not None else get_lint_context()
    cfg = config if config is not None else LintConfig()
    rule = ctx.rule_for(diagnostic)

    for node in diagnostic.anchor.ancestors_with_self():
        if node.has_attr_with_arg(ALLOW_ATTRIBUTE, rule.allowed_name):
            return True

    return not cfg.is_enabled(rule.allowed_name, default=rule.enabled_by_default)


def filter_diagnostics(
    diagnostics: Iterable[Diagnostic],
    config: LintConfig | None = None,
    context: LintContext | None = None,
) -> list[Diagnostic]:
    """Return the diagnostics that are not suppressed, in input order."""
    kept: list[Diagnostic] = []
    for diagnostic in diagnostics:
        if is_suppressed(diagnostic, config, context):
            logger.debug("Suppressed %s", diagnostic)
            continue
        kept.append(diagnostic)
    return kept
