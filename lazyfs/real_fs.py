"""Filesystem facade backed by the operating system.

Directory listings are memoized for the lifetime of a ``RealFileSystem``,
including failures: a directory that could not be listed once is treated as
unlistable from then on. File reads and modification keys always go to disk.
Every underlying open or stat is bracketed by the injected open-file limiter.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping
from types import MappingProxyType

from . import paths
from .config import load_mod_key_safety_gap_seconds, load_open_file_limit
from .entry import Entry
from .errors import ErrorKind, error_kind, normalize_open_error, not_found_error
from .limiter import BoundedOpenFileLimiter, OpenFileLimiter, opened
from .modkey import MOD_KEY_SAFETY_GAP_SECONDS, ModKey, compute_mod_key
from .paths import PathArg
from .types import DirectoryListing

logger = logging.getLogger(__name__)

_EMPTY_ENTRIES: Mapping[str, Entry] = MappingProxyType({})


def resolve_cwd() -> str:
    """Return the symlink-resolved working directory, best effort.

    Resolution failures (dangling components, symlink loops) fall back to the
    raw ``os.getcwd()`` value; an unavailable cwd yields ``""``.
    """
    try:
        cwd = os.getcwd()
    except OSError as exc:
        logger.debug("Working directory unavailable: %s", exc)
        return ""
    try:
        return os.path.realpath(cwd, strict=True)
    except OSError as exc:
        logger.debug("Keeping unresolved working directory %s: %s", cwd, exc)
        return cwd


def _listing_error(directory: str, error: OSError) -> OSError:
    """Fold a misleading ``ENOTDIR`` from a listing into not-found.

    Some platforms report ``ENOTDIR`` for a path that does not exist at all.
    ``ENOTDIR`` stays when ``directory`` really exists as a non-directory.
    """
    if error_kind(error) is not ErrorKind.NOT_A_DIRECTORY:
        return error
    try:
        os.stat(directory)
    except OSError:
        return not_found_error(directory, error)
    return error


class RealFileSystem:
    """Caching ``FileSystem`` implementation over ``os`` calls."""

    def __init__(
        self,
        limiter: OpenFileLimiter | None = None,
        *,
        mod_key_safety_gap_seconds: int = MOD_KEY_SAFETY_GAP_SECONDS,
    ) -> None:
        self._limiter: OpenFileLimiter = limiter if limiter is not None else BoundedOpenFileLimiter()
        self._mod_key_safety_gap_seconds = mod_key_safety_gap_seconds
        self._entries: dict[str, DirectoryListing] = {}
        self._entries_lock = threading.Lock()
        self._cwd = resolve_cwd()

    @property
    def limiter(self) -> OpenFileLimiter:
        return self._limiter

    def read_directory(self, path: PathArg) -> tuple[Mapping[str, Entry], OSError | None]:
        """Return ``(entries, error)`` for ``path``, listing it at most once.

        Entries come back with their kind unresolved. The lock is held across
        the listing so concurrent first callers share one ``listdir``.
        """
        directory = os.fspath(path)
        with self._entries_lock:
            cached = self._entries.get(directory)
            if cached is not None:
                return cached.entries, cached.error

            listing = self._list_directory(directory)
            self._entries[directory] = listing
            return listing.entries, listing.error

    def _list_directory(self, directory: str) -> DirectoryListing:
        logger.debug("Listing directory %s", directory)
        with opened(self._limiter):
            try:
                names = os.listdir(directory)
            except OSError as exc:
                error = _listing_error(directory, exc)
                logger.debug("Caching failed listing of %s: %s", directory, error)
                return DirectoryListing(entries=_EMPTY_ENTRIES, error=error)

        # No stat here: kinds resolve lazily because directories can hold
        # tens of thousands of names.
        entries = {name: Entry(directory, name, self._limiter) for name in names}
        return DirectoryListing(entries=MappingProxyType(entries))

    def cached_directories(self) -> list[str]:
        """Return the directory paths memoized so far."""
        with self._entries_lock:
            return list(self._entries)

    def read_file(self, path: PathArg, encoding: str = "utf-8") -> tuple[str, OSError | None]:
        """Return ``(content, error)`` after reading all of ``path``.

        Undecodable bytes survive as surrogate escapes. Nothing is cached.
        """
        try:
            with opened(self._limiter):
                with open(path, "rb") as handle:
                    data = handle.read()
        except OSError as exc:
            return "", normalize_open_error(exc, path)
        return data.decode(encoding, errors="surrogateescape"), None

    def mod_key(self, path: PathArg) -> tuple[ModKey | None, OSError | None]:
        """Return ``(key, error)`` for ``path``; recomputed on every call."""
        with opened(self._limiter):
            return compute_mod_key(path, safety_gap_seconds=self._mod_key_safety_gap_seconds)

    def is_abs(self, path: PathArg) -> bool:
        return paths.is_abs(path)

    def abs_path(self, path: PathArg) -> str | None:
        return paths.abs_path(path)

    def dir_name(self, path: PathArg) -> str:
        return paths.dir_name(path)

    def base_name(self, path: PathArg) -> str:
        return paths.base_name(path)

    def ext(self, path: PathArg) -> str:
        return paths.ext(path)

    def join(self, *parts: PathArg) -> str:
        return paths.join(*parts)

    def rel(self, base: PathArg, target: PathArg) -> str | None:
        return paths.rel(base, target)

    def cwd(self) -> str:
        """Return the working directory captured at construction."""
        return self._cwd


def real_fs(
    limiter: OpenFileLimiter | None = None,
    *,
    mod_key_safety_gap_seconds: int | None = None,
) -> RealFileSystem:
    """Build a ``RealFileSystem`` from persisted config plus explicit overrides."""
    if limiter is None:
        limiter = BoundedOpenFileLimiter(load_open_file_limit())
    if mod_key_safety_gap_seconds is None:
        mod_key_safety_gap_seconds = load_mod_key_safety_gap_seconds()
    return RealFileSystem(limiter, mod_key_safety_gap_seconds=mod_key_safety_gap_seconds)


__all__ = [
    "RealFileSystem",
    "real_fs",
    "resolve_cwd",
]
