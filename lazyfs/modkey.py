"""Modification keys for cheap file-change detection.

A key is built from ``stat`` metadata only: inode, size, mtime, mode and
owner. Two equal keys mean the file is very likely unchanged since the last
observation. Files touched too recently are refused, because a second write
inside the same timestamp tick would otherwise produce an identical key.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass

from .errors import ModKeyUnusableError

MOD_KEY_SAFETY_GAP_SECONDS = 3
_NS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class ModKey:
    """Opaque, hashable fingerprint of one file's identity and metadata."""

    inode: int
    size: int
    mtime_ns: int
    mode: int
    uid: int


def compute_mod_key(
    path: str | os.PathLike[str],
    *,
    safety_gap_seconds: int = MOD_KEY_SAFETY_GAP_SECONDS,
    now_ns: int | None = None,
) -> tuple[ModKey | None, OSError | None]:
    """Return ``(key, error)`` for ``path``.

    Probe failures are returned as-is. ``ModKeyUnusableError`` is returned
    when the mtime is zeroed out by the filesystem or falls within
    ``safety_gap_seconds`` of ``now_ns`` (defaults to the current time).
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        return None, exc

    mtime_ns = int(st.st_mtime_ns)
    if mtime_ns == 0:
        return None, ModKeyUnusableError(f"modification time is zero: {os.fspath(path)}")

    if safety_gap_seconds > 0:
        current_ns = time.time_ns() if now_ns is None else now_ns
        if mtime_ns + safety_gap_seconds * _NS_PER_SECOND > current_ns:
            return None, ModKeyUnusableError(f"file was modified too recently: {os.fspath(path)}")

    return (
        ModKey(
            inode=int(st.st_ino),
            size=int(st.st_size),
            mtime_ns=mtime_ns,
            mode=int(st.st_mode),
            uid=int(st.st_uid),
        ),
        None,
    )


__all__ = [
    "MOD_KEY_SAFETY_GAP_SECONDS",
    "ModKey",
    "compute_mod_key",
]
