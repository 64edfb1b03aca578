"""Conflict resolution and application of edits.

The edits of one file are applied together or not at all.  After exact
duplicates are dropped and the edits are sorted by descending
``(start, end)``, each adjacent pair must be disjoint; a single
overlap rejects the whole set and the file stays byte-identical.  A
rejected file is not an error: its diagnostics are still reported, the
user fixes them by hand or re-runs after the other fixes landed.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from cairo_lint.files import FileStore
from cairo_lint.fixes.edit import Edit

logger = logging.getLogger(__name__)


class FixOutcome(Enum):
    """What happened to a file's edits."""

    NO_EDITS = "no_edits"
    APPLIED = "applied"
    REJECTED = "rejected"


@dataclass(frozen=True)
class FixResult:
    """Outcome of fixing one file.

    Parameters
    ----------
    file_id:
        The file the edits target.
    outcome:
        Whether the edits were applied.
    edits:
        The edits written, in application order.  Empty unless
        ``outcome`` is ``APPLIED``.
    """

    file_id: str
    outcome: FixOutcome
    edits: tuple[Edit, ...] = field(default_factory=tuple)

    @property
    def applied(self) -> bool:
        return self.outcome is FixOutcome.APPLIED


# ---------------------------------------------------------------------------
# Pure resolution
# ---------------------------------------------------------------------------


def resolve_fixes(edits: Iterable[Edit]) -> list[Edit]:
    """Return the edits in application order, or ``[]`` if any overlap.

    Parameters
    ----------
    edits:
        Candidate edits of a single file.

    Returns
    -------
    list[Edit]
        Deduplicated edits sorted by descending ``(start, end)``.  Empty
        when two edits overlap or nest.

    Example
    -------
    >>> resolve_fixes([Edit.replace(0, 2, "a"), Edit.replace(5, 7, "b")])
    [Edit(span=TextSpan(5, 7), replacement='b'), Edit(span=TextSpan(0, 2), replacement='a')]
    """
    unique = list(dict.fromkeys(edits))
    ordered = sorted(unique, key=lambda edit: (edit.start, edit.end), reverse=True)
    for higher, lower in zip(ordered, ordered[1:]):
        if higher.start < lower.end:
            logger.debug(
                "Rejecting %d edit(s): %r overlaps %r", len(ordered), lower.span, higher.span
            )
            return []
    return ordered


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """Apply non-overlapping ``edits`` to ``text``, last edit first."""
    for edit in sorted(edits, key=lambda edit: (edit.start, edit.end), reverse=True):
        text = edit.apply(text)
    return text


# ---------------------------------------------------------------------------
# File application
# ---------------------------------------------------------------------------


def apply_file_fixes(file_id: str, edits: Iterable[Edit], store: FileStore) -> FixResult:
    """Apply the edits of ``file_id`` through ``store``.

    The file is read and written only when the edit set is safe.

    Raises
    ------
    MissingFileContentError
        If the store has no text for ``file_id``.
    OSError
        If the store cannot write the patched text.
    """
    edits = list(edits)
    if not edits:
        return FixResult(file_id, FixOutcome.NO_EDITS)

    resolved = resolve_fixes(edits)
    if not resolved:
        logger.debug("Overlapping fixes in %s, leaving the file unchanged", file_id)
        return FixResult(file_id, FixOutcome.REJECTED)

    text = store.read(file_id)
    store.write(file_id, apply_edits(text, resolved))
    logger.debug("Applied %d fix(es) to %s", len(resolved), file_id)
    return FixResult(file_id, FixOutcome.APPLIED, tuple(resolved))


def fix_files(
    edits_by_file: Mapping[str, Iterable[Edit]],
    store: FileStore,
) -> tuple[list[FixResult], dict[str, OSError]]:
    """Apply the edits of every file independently.

    A file whose content is missing or whose write fails is recorded
    and skipped; the other files are still fixed.

    Returns
    -------
    tuple[list[FixResult], dict[str, OSError]]
        Results of the files that could be processed, and the error of
        each file that could not be read or written.
    """
    results: list[FixResult] = []
    failures: dict[str, OSError] = {}
    for file_id, edits in edits_by_file.items():
        try:
            results.append(apply_file_fixes(file_id, edits, store))
        except OSError as exc:
            logger.warning("Cannot fix %s: %s", file_id, exc)
            failures[file_id] = exc
    return results, failures
