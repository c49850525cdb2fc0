"""Lazily-typed directory entries.

Listing a directory only yields names. Whether a name is a file or a
subdirectory is resolved by ``Entry.kind`` on first demand with one ``stat``,
then cached on the entry for its lifetime.
"""

from __future__ import annotations

import os
import stat
import threading
from enum import Enum

from .limiter import OpenFileLimiter, UnboundedOpenFileLimiter, opened


class EntryKind(Enum):
    """Classification of a directory member after following symlinks."""

    FILE = "file"
    DIR = "dir"
    OTHER = "other"


def kind_from_mode(mode: int) -> EntryKind:
    """Map an ``st_mode`` value onto ``EntryKind``."""
    if stat.S_ISDIR(mode):
        return EntryKind.DIR
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


class Entry:
    """One named member of one listed directory.

    ``dir`` and ``base`` identify the entry. The kind starts unresolved; a
    failed probe leaves it unresolved so a later ``kind()`` call retries.
    """

    __slots__ = ("dir", "base", "_limiter", "_kind", "_lock")

    def __init__(self, dir: str, base: str, limiter: OpenFileLimiter | None = None) -> None:
        self.dir = dir
        self.base = base
        self._limiter: OpenFileLimiter = limiter if limiter is not None else UnboundedOpenFileLimiter()
        self._kind: EntryKind | None = None
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return os.path.join(self.dir, self.base)

    @property
    def needs_stat(self) -> bool:
        """Return whether the kind has not been resolved yet."""
        return self._kind is None

    def kind(self) -> tuple[EntryKind | None, OSError | None]:
        """Return ``(kind, error)``, probing the filesystem at most once.

        Symlinks are followed, so a link to a directory reports ``DIR``.
        """
        kind = self._kind
        if kind is not None:
            return kind, None

        with self._lock:
            if self._kind is not None:
                return self._kind, None
            try:
                with opened(self._limiter):
                    st = os.stat(self.path)
            except OSError as exc:
                return None, exc
            self._kind = kind_from_mode(st.st_mode)
            return self._kind, None

    def __repr__(self) -> str:
        kind = self._kind.value if self._kind is not None else "unresolved"
        return f"Entry(dir={self.dir!r}, base={self.base!r}, kind={kind})"


__all__ = [
    "EntryKind",
    "Entry",
    "kind_from_mode",
]
