"""Cairo linter module.

Exports the ``CairoLinter`` class, the ``lint`` and ``fix`` convenience
functions, the rule registry and the suppression filter.
"""
from __future__ import annotations

from cairo_lint.linter.context import (
    DuplicateRuleError,
    LintContext,
    RuleDescriptor,
    RuleGroup,
    UnknownLintError,
    get_lint_context,
    is_panic_diagnostic,
)
from cairo_lint.linter.linter import CairoLinter, fix, lint
from cairo_lint.linter.suppression import filter_diagnostics, is_suppressed

__all__ = [
    "CairoLinter",
    "lint",
    "fix",
    "LintContext",
    "RuleDescriptor",
    "RuleGroup",
    "UnknownLintError",
    "DuplicateRuleError",
    "get_lint_context",
    "is_panic_diagnostic",
    "is_suppressed",
    "filter_diagnostics",
]
