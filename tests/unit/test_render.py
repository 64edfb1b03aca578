"""Unit tests for cairo_lint.diagnostics: the Diagnostic type and its rendering."""
from __future__ import annotations

import dataclasses

from cairo_lint.diagnostics.diagnostic import Diagnostic, Severity
from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.diagnostics.render import format_diagnostic, format_diagnostics
from cairo_lint.linter import lint

_REDUNDANT = "fn main() {\n    let x = 1;\n    let _y = x + 0;\n}\n"


class TestDiagnostic:
    def test_position_and_str(self) -> None:
        (diagnostic,) = lint(_REDUNDANT)
        assert (diagnostic.line, diagnostic.col) == (3, 14)
        assert diagnostic.file_id == "lib.cairo"
        assert str(diagnostic) == (
            "lib.cairo:3:14: warning: This operation doesn't change the value and can be simplified."
        )

    def test_severity_labels(self) -> None:
        assert Severity.WARNING.label == "warning"
        assert Severity.ERROR.label == "error"


class TestFormatDiagnostic:
    def test_plugin_diagnostic(self) -> None:
        (diagnostic,) = lint(_REDUNDANT)
        assert format_diagnostic(diagnostic) == (
            "warning: Plugin diagnostic: This operation doesn't change the value and can be simplified.\n"
            " --> lib.cairo:3:14\n"
            "  |\n"
            "3 |     let _y = x + 0;\n"
            "  |              -----\n"
            "  |\n"
        )

    def test_host_diagnostic_has_no_prefix(self) -> None:
        (diagnostic,) = lint("use a::b;\n", file_id="src/lib.cairo")
        assert format_diagnostic(diagnostic) == (
            "warning: Unused import: `b`\n"
            " --> src/lib.cairo:1:8\n"
            "  |\n"
            "1 | use a::b;\n"
            "  |        -\n"
            "  |\n"
        )

    def test_host_diagnostic_without_kind_has_no_prefix(self) -> None:
        (diagnostic,) = lint("use a::b;\n")
        untagged = dataclasses.replace(diagnostic, kind=LintKind.UNKNOWN)
        assert format_diagnostic(untagged).startswith("warning: Unused import: `b`\n")

    def test_unregistered_message_keeps_prefix(self) -> None:
        (diagnostic,) = lint(_REDUNDANT)
        custom = Diagnostic(anchor=diagnostic.anchor, message="Custom finding.")
        assert format_diagnostic(custom).startswith("warning: Plugin diagnostic: Custom finding.\n")

    def test_error_label(self) -> None:
        (diagnostic,) = lint("fn main() {\n    let _a = x > 5 && x < 3;\n}\n")
        rendered = format_diagnostic(diagnostic)
        assert rendered.startswith("error: Plugin diagnostic: Impossible condition, always false\n")

    def test_multiline_anchor_underlined_on_first_line(self) -> None:
        source = "fn main() {\n    if a {\n        if b {\n            c();\n        }\n    }\n}\n"
        (diagnostic,) = lint(source)
        lines = format_diagnostic(diagnostic).splitlines()
        assert lines[3] == "2 |     if a {"
        assert lines[4] == "  |     ------"

    def test_gutter_widens_with_line_number(self) -> None:
        source = "\n" * 9 + "fn main() { let _a = ((x)); }\n"
        (diagnostic,) = lint(source)
        lines = format_diagnostic(diagnostic).splitlines()
        assert lines[1] == "  --> lib.cairo:10:22"
        assert lines[2] == "   |"
        assert lines[3].startswith("10 | fn main()")

    def test_format_diagnostics_concatenates(self) -> None:
        diagnostics = lint("fn main() {\n    let _a = ((x));\n    let _b = y + 0;\n}\n")
        rendered = format_diagnostics(diagnostics)
        assert rendered == "".join(format_diagnostic(d) for d in diagnostics)
        assert rendered.count("--> lib.cairo") == 2

    def test_empty_input(self) -> None:
        assert format_diagnostics([]) == ""
