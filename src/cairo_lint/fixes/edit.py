"""Text edits produced by fixers and the import pruner."""
from __future__ import annotations

from dataclasses import dataclass

from cairo_lint.syntax.tree import TextSpan


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace ``span`` of a file's text with ``replacement``.

    Parameters
    ----------
    span:
        Half-open character range ``[start, end)`` of the original text.
    replacement:
        Text inserted in place of the span.  Empty to delete.
    """

    span: TextSpan
    replacement: str

    @classmethod
    def replace(cls, start: int, end: int, replacement: str) -> Edit:
        """Build an edit from raw offsets."""
        return cls(TextSpan(start, end), replacement)

    @classmethod
    def delete(cls, start: int, end: int) -> Edit:
        """Build an edit removing ``[start, end)``."""
        return cls(TextSpan(start, end), "")

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end

    def apply(self, text: str) -> str:
        """Return ``text`` with this edit applied."""
        return text[: self.start] + self.replacement + text[self.end:]
