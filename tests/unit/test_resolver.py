"""Unit tests for cairo_lint.fixes.resolver and cairo_lint.fixes.edit."""
from __future__ import annotations

import pytest

from cairo_lint.files import InMemoryFileStore, MissingFileContentError
from cairo_lint.fixes.edit import Edit
from cairo_lint.fixes.resolver import (
    FixOutcome,
    apply_edits,
    apply_file_fixes,
    fix_files,
    resolve_fixes,
)
from cairo_lint.syntax.tree import TextSpan

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _ReadOnlyStore(InMemoryFileStore):
    def __init__(self, files: dict[str, str], read_only: set[str]) -> None:
        super().__init__(files)
        self.read_only = read_only

    def write(self, file_id: str, text: str) -> None:
        if file_id in self.read_only:
            raise PermissionError(13, "Permission denied", file_id)
        super().write(file_id, text)


# ---------------------------------------------------------------------------
# Edit
# ---------------------------------------------------------------------------


class TestEdit:
    def test_constructors(self) -> None:
        assert Edit.replace(1, 3, "x") == Edit(TextSpan(1, 3), "x")
        assert Edit.delete(1, 3).replacement == ""

    def test_apply(self) -> None:
        assert Edit.replace(4, 5, "y").apply("let x;") == "let y;"
        assert Edit.delete(0, 4).apply("let x;") == "x;"
        assert Edit.replace(3, 3, " mut").apply("let x;") == "let mut x;"

    def test_repr(self) -> None:
        assert repr(Edit.replace(5, 7, "b")) == "Edit(span=TextSpan(5, 7), replacement='b')"


# ---------------------------------------------------------------------------
# resolve_fixes
# ---------------------------------------------------------------------------


class TestResolveFixes:
    def test_orders_by_descending_start(self) -> None:
        result = resolve_fixes([Edit.replace(0, 2, "a"), Edit.replace(5, 7, "b")])
        assert result == [Edit.replace(5, 7, "b"), Edit.replace(0, 2, "a")]

    def test_empty_input(self) -> None:
        assert resolve_fixes([]) == []

    @pytest.mark.parametrize("first, second", [
        ((0, 5), (4, 8)),
        ((0, 10), (2, 3)),
        ((2, 6), (2, 4)),
    ])
    def test_any_overlap_rejects_everything(self, first: tuple[int, int], second: tuple[int, int]) -> None:
        edits = [Edit.replace(*first, "a"), Edit.replace(*second, "b"), Edit.replace(20, 21, "c")]
        assert resolve_fixes(edits) == []

    def test_touching_edits_are_compatible(self) -> None:
        result = resolve_fixes([Edit.replace(0, 5, "a"), Edit.replace(5, 8, "b")])
        assert len(result) == 2

    def test_exact_duplicates_collapse(self) -> None:
        edit = Edit.replace(1, 2, "x")
        assert resolve_fixes([edit, Edit.replace(1, 2, "x")]) == [edit]

    def test_same_span_different_text_conflicts(self) -> None:
        assert resolve_fixes([Edit.replace(1, 2, "x"), Edit.replace(1, 2, "y")]) == []

    def test_apply_edits_uses_original_offsets(self) -> None:
        text = "aa bb cc"
        edits = [Edit.replace(0, 2, "x"), Edit.replace(6, 8, "zzzz")]
        assert apply_edits(text, edits) == "x bb zzzz"


# ---------------------------------------------------------------------------
# apply_file_fixes / fix_files
# ---------------------------------------------------------------------------


class TestApplyFileFixes:
    def test_no_edits_does_not_touch_store(self) -> None:
        store = InMemoryFileStore()
        result = apply_file_fixes("lib.cairo", [], store)
        assert result.outcome is FixOutcome.NO_EDITS
        assert not result.applied
        assert store.writes == []

    def test_overlap_leaves_file_byte_identical(self) -> None:
        store = InMemoryFileStore({"lib.cairo": "0123456789"})
        result = apply_file_fixes(
            "lib.cairo", [Edit.replace(0, 5, "a"), Edit.replace(3, 6, "b")], store
        )
        assert result.outcome is FixOutcome.REJECTED
        assert result.edits == ()
        assert store.files["lib.cairo"] == "0123456789"
        assert store.writes == []

    def test_applied_in_one_write(self) -> None:
        store = InMemoryFileStore({"lib.cairo": "0123456789"})
        result = apply_file_fixes(
            "lib.cairo", [Edit.replace(0, 2, "ab"), Edit.delete(8, 10)], store
        )
        assert result.applied
        assert result.edits == (Edit.delete(8, 10), Edit.replace(0, 2, "ab"))
        assert store.files["lib.cairo"] == "ab234567"
        assert store.writes == ["lib.cairo"]

    def test_missing_content_raises(self) -> None:
        with pytest.raises(MissingFileContentError) as exc_info:
            apply_file_fixes("gone.cairo", [Edit.delete(0, 1)], InMemoryFileStore())
        assert exc_info.value.file_id == "gone.cairo"

    def test_fix_files_processes_each_file_independently(self) -> None:
        store = InMemoryFileStore({"a.cairo": "aaaa", "b.cairo": "bbbb"})
        results, failures = fix_files(
            {
                "a.cairo": [Edit.replace(0, 1, "x")],
                "b.cairo": [Edit.replace(0, 2, "y"), Edit.replace(1, 3, "z")],
                "gone.cairo": [Edit.delete(0, 1)],
            },
            store,
        )
        outcomes = {result.file_id: result.outcome for result in results}
        assert outcomes == {"a.cairo": FixOutcome.APPLIED, "b.cairo": FixOutcome.REJECTED}
        assert list(failures) == ["gone.cairo"]
        assert store.files == {"a.cairo": "xaaa", "b.cairo": "bbbb"}

    def test_failed_write_does_not_stop_other_files(self) -> None:
        store = _ReadOnlyStore({"a.cairo": "aaaa", "b.cairo": "bbbb"}, read_only={"a.cairo"})
        results, failures = fix_files(
            {"a.cairo": [Edit.replace(0, 1, "x")], "b.cairo": [Edit.replace(0, 1, "y")]},
            store,
        )
        assert [result.file_id for result in results] == ["b.cairo"]
        assert isinstance(failures["a.cairo"], PermissionError)
        assert store.files == {"a.cairo": "aaaa", "b.cairo": "ybbb"}
