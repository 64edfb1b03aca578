"""Diagnostic types for the Cairo linter.

A ``Diagnostic`` is a message anchored to a syntax node.  Diagnostics
are produced by checkers (one rule group each) and by the host compiler
(unused imports); the rule registry maps each of them back to the rule
that owns its message.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cairo_lint.diagnostics.kinds import LintKind
from cairo_lint.syntax.tree import SyntaxNode


class Severity(Enum):
    """Severity levels for diagnostics."""

    WARNING = "warning"
    ERROR = "error"

    @property
    def label(self) -> str:
        """Lower-case label used in rendered output."""
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """A single lint finding.

    Parameters
    ----------
    anchor:
        Syntax node the finding points at.
    message:
        Human-readable description; equals the message of exactly one
        registered rule.
    severity:
        How serious this finding is.
    kind:
        Rule tag.  ``LintKind.UNKNOWN`` when the producer only knows the
        message.
    """

    anchor: SyntaxNode
    message: str
    severity: Severity = Severity.WARNING
    kind: LintKind = LintKind.UNKNOWN

    def __str__(self) -> str:
        line, col = self.anchor.line_col
        return f"{self.file_id}:{line}:{col}: {self.severity.label}: {self.message}"

    @property
    def file_id(self) -> str:
        """Identifier of the file the anchor belongs to."""
        return self.anchor.file_id

    @property
    def line(self) -> int:
        """1-based line of the anchor."""
        return self.anchor.line_col[0]

    @property
    def col(self) -> int:
        """1-based column of the anchor."""
        return self.anchor.line_col[1]

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic should fail a lint run."""
        return self.severity is Severity.ERROR
