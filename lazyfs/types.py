"""Capability surface shared by every filesystem implementation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from .entry import Entry
from .modkey import ModKey
from .paths import PathArg


@dataclass(frozen=True)
class DirectoryListing:
    """Memoized outcome of listing one directory.

    ``entries`` is empty whenever ``error`` is set.
    """

    entries: Mapping[str, Entry]
    error: OSError | None = None


class FileSystem(Protocol):
    """What resolvers and bundlers depend on to read the filesystem."""

    def read_directory(self, path: PathArg) -> tuple[Mapping[str, Entry], OSError | None]: ...

    def read_file(self, path: PathArg) -> tuple[str, OSError | None]: ...

    def mod_key(self, path: PathArg) -> tuple[ModKey | None, OSError | None]: ...

    def is_abs(self, path: PathArg) -> bool: ...

    def abs_path(self, path: PathArg) -> str | None: ...

    def dir_name(self, path: PathArg) -> str: ...

    def base_name(self, path: PathArg) -> str: ...

    def ext(self, path: PathArg) -> str: ...

    def join(self, *parts: PathArg) -> str: ...

    def rel(self, base: PathArg, target: PathArg) -> str | None: ...

    def cwd(self) -> str: ...


__all__ = [
    "DirectoryListing",
    "FileSystem",
]
