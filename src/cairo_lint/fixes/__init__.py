"""Cairo lint fixes module.

Exports the ``Edit`` type, fix generation, the unused-import pruner and
the conflict resolver that applies edits through a ``FileStore``.
"""
from __future__ import annotations

from cairo_lint.fixes.edit import Edit
from cairo_lint.fixes.fixes import collect_fixes, generate_fix
from cairo_lint.fixes.imports import ImportFix, apply_import_fixes, collect_unused_imports
from cairo_lint.fixes.resolver import (
    FixOutcome,
    FixResult,
    apply_edits,
    apply_file_fixes,
    fix_files,
    resolve_fixes,
)

__all__ = [
    "Edit",
    "generate_fix",
    "collect_fixes",
    "ImportFix",
    "collect_unused_imports",
    "apply_import_fixes",
    "FixOutcome",
    "FixResult",
    "resolve_fixes",
    "apply_edits",
    "apply_file_fixes",
    "fix_files",
]
