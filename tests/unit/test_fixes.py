"""Unit tests for cairo_lint.fixes.fixes: edits built from diagnostics."""
from __future__ import annotations

import pytest

from cairo_lint.diagnostics.diagnostic import Diagnostic
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.fixes import collect_fixes, generate_fix
from cairo_lint.linter import UnknownLintError, fix, lint

_SOURCE = (
    "use core::option::Option;\n"
    "\n"
    "fn main() {\n"
    "    let _a = x == true; // keep me\n"
    "    let _b = ((y));\n"
    "}\n"
)


class TestGenerateFix:
    def test_edit_covers_node_without_trivia(self) -> None:
        diagnostic = next(d for d in lint(_SOURCE) if d.kind is LintKind.BOOL_COMPARISON)
        edit = generate_fix(diagnostic)
        assert edit is not None
        assert _SOURCE[edit.start:edit.end] == "x == true"
        assert edit.replacement == "x"

    def test_unused_import_is_left_to_the_pruner(self) -> None:
        diagnostic = next(d for d in lint(_SOURCE) if d.kind is LintKind.UNUSED_IMPORTS)
        assert generate_fix(diagnostic) is None

    def test_rule_without_fixer(self) -> None:
        (diagnostic,) = lint("fn main() {\n    let _a = x + 0;\n}\n")
        assert generate_fix(diagnostic) is None

    def test_message_only_diagnostic_resolved_by_message(self) -> None:
        found = next(d for d in lint(_SOURCE) if d.kind is LintKind.DOUBLE_PARENS)
        host = Diagnostic(anchor=found.anchor, message=found.message)
        edit = generate_fix(host)
        assert edit is not None
        assert edit.replacement == "y"

    def test_unknown_message_raises(self) -> None:
        found = lint(_SOURCE)[0]
        with pytest.raises(UnknownLintError):
            generate_fix(Diagnostic(anchor=found.anchor, message="made up"))


class TestCollectFixes:
    def test_import_edits_come_first(self) -> None:
        edits = collect_fixes(lint(_SOURCE))["lib.cairo"]
        assert [edit.replacement for edit in edits] == ["", "x", "y"]
        assert edits[0].start == 0

    def test_grouped_by_file(self) -> None:
        diagnostics = lint("fn f() { let _a = ((x)); }", file_id="a.cairo") + lint(
            "fn g() { let _b = ((y)); }", file_id="b.cairo"
        )
        edits = collect_fixes(diagnostics)
        assert sorted(edits) == ["a.cairo", "b.cairo"]

    def test_no_fixable_diagnostics(self) -> None:
        assert collect_fixes(lint("fn main() {\n    let _a = x * 0;\n}\n")) == {}

    def test_whole_file_fix_keeps_comments(self) -> None:
        assert fix(_SOURCE) == (
            "\n"
            "fn main() {\n"
            "    let _a = x; // keep me\n"
            "    let _b = y;\n"
            "}\n"
        )
