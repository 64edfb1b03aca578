"""File access for the fix pipeline.

The fix resolver never opens files itself.  It asks a ``FileStore`` for
the current text of a file and hands the patched text back in a single
write.  ``DiskFileStore`` maps file ids to paths; ``InMemoryFileStore``
keeps everything in a dict and is what the tests and the single-source
``fix`` entry point use.
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class MissingFileContentError(FileNotFoundError):
    """Raised when a store has no text for a file it was asked to patch."""

    def __init__(self, file_id: str) -> None:
        self.file_id = file_id
        super().__init__(f"No content available for file {file_id!r}")


class FileStore(Protocol):
    """Read and write access to source files by id."""

    def read(self, file_id: str) -> str:
        """Return the current text of ``file_id``.

        Raises
        ------
        MissingFileContentError
            If the store has no content for ``file_id``.
        """
        ...

    def write(self, file_id: str, text: str) -> None:
        """Replace the whole text of ``file_id``."""
        ...


class InMemoryFileStore:
    """A ``FileStore`` backed by a dict of file id to text.

    Parameters
    ----------
    files:
        Initial contents.
    """

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.writes: list[str] = []

    def read(self, file_id: str) -> str:
        try:
            return self.files[file_id]
        except KeyError:
            raise MissingFileContentError(file_id) from None

    def write(self, file_id: str, text: str) -> None:
        self.files[file_id] = text
        self.writes.append(file_id)


class DiskFileStore:
    """A ``FileStore`` over the local file system.

    File ids are paths, resolved against ``root`` when relative.  Writes
    are atomic: the text goes to a temporary file in the target's
    directory which then replaces the target.

    Parameters
    ----------
    root:
        Directory relative file ids are resolved against.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = root if root is not None else Path.cwd()

    def path(self, file_id: str) -> Path:
        """Return the path ``file_id`` refers to."""
        path = Path(file_id)
        return path if path.is_absolute() else self.root / path

    def read(self, file_id: str) -> str:
        path = self.path(file_id)
        try:
            with open(path, encoding="utf-8", newline="") as handle:
                return handle.read()
        except FileNotFoundError:
            raise MissingFileContentError(file_id) from None

    def write(self, file_id: str, text: str) -> None:
        path = self.path(file_id)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(text)
            if path.exists():
                shutil.copymode(path, tmp_path)
            os.replace(tmp_path, str(path))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        logger.debug("Wrote %d character(s) to %s", len(text), path)
