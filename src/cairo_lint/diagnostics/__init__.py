"""Cairo lint diagnostics module.

Exports the ``Diagnostic`` type, severities, lint kinds and rendering.
"""
from __future__ import annotations

from cairo_lint.diagnostics.diagnostic import Diagnostic, Severity
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.diagnostics.render import format_diagnostic, format_diagnostics

__all__ = [
    "Diagnostic",
    "Severity",
    "LintKind",
    "format_diagnostic",
    "format_diagnostics",
]
