"""Caching filesystem layer for build and module-resolution pipelines.

Directory listings are memoized per ``RealFileSystem`` instance, entry kinds
are resolved lazily, and platform error quirks are folded into one
not-found condition. The CLI lives in ``lazyfs.cli``.
"""

from __future__ import annotations

from .entry import Entry, EntryKind
from .errors import ErrorKind, ModKeyUnusableError, error_kind
from .limiter import BoundedOpenFileLimiter, OpenFileLimiter, UnboundedOpenFileLimiter, opened
from .modkey import ModKey, compute_mod_key
from .real_fs import RealFileSystem, real_fs
from .types import DirectoryListing, FileSystem


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "BoundedOpenFileLimiter",
    "DirectoryListing",
    "Entry",
    "EntryKind",
    "ErrorKind",
    "FileSystem",
    "ModKey",
    "ModKeyUnusableError",
    "OpenFileLimiter",
    "RealFileSystem",
    "UnboundedOpenFileLimiter",
    "compute_mod_key",
    "error_kind",
    "main",
    "opened",
    "real_fs",
]
