# src/handlers/rotation.py — v1
"""Size-based rotation and retention of numbered backups.

Layout on disk: ``{path}`` is the active file, ``{path}.1`` the most
recent backup, ``{path}.2`` the one before, and so on. Housekeeping is
best-effort: failing to prune or rename never blocks new writes.
"""

from __future__ import annotations

import contextlib
import glob
import os
from typing import BinaryIO


class RotationManager:
    """Decide when a log file is full and shift its backups."""

    def __init__(self, max_bytes: int = 0, backup_count: int = 0) -> None:
        self.max_bytes = max_bytes
        self.backup_count = backup_count

    @property
    def enabled(self) -> bool:
        return self.max_bytes > 0

    def should_rotate(self, stream: BinaryIO) -> bool:
        """Return True once the open file has reached ``max_bytes``."""
        if not self.enabled:
            return False
        size = os.fstat(stream.fileno()).st_size
        return size >= self.max_bytes

    def list_backups(self, path: str) -> list[tuple[int, str]]:
        """Existing backups as ``(index, filename)``, oldest first.

        Only purely numeric suffixes count, ordered by their integer value
        so that ``.10`` sorts after ``.9``.
        """
        prefix = f"{path}."
        backups: list[tuple[int, str]] = []
        for candidate in glob.glob(f"{glob.escape(path)}.*"):
            suffix = candidate[len(prefix):]
            if suffix.isdigit() and int(suffix) > 0:
                backups.append((int(suffix), candidate))
        backups.sort(reverse=True)
        return backups

    def rotate(self, path: str) -> None:
        """Rotate ``path`` whose stream the caller has already closed."""
        backups = self.list_backups(path)

        if self.backup_count == 0:
            for _, filename in backups:
                _remove(filename)
            _remove(path)
            return

        # Keep room for the active file becoming ``.1``
        excess = len(backups) - self.backup_count + 1
        if excess > 0:
            for _, filename in backups[:excess]:
                _remove(filename)
            backups = backups[excess:]

        survivors = [filename for _, filename in reversed(backups)]
        for rank in range(len(survivors), 0, -1):
            _rename(survivors[rank - 1], f"{path}.{rank + 1}")

        _rename(path, f"{path}.1")


def _remove(filename: str) -> None:
    with contextlib.suppress(OSError):
        os.remove(filename)


def _rename(source: str, target: str) -> None:
    if source == target or not os.path.isfile(source):
        return
    with contextlib.suppress(OSError):
        if os.path.isfile(target):
            os.remove(target)
        os.rename(source, target)
