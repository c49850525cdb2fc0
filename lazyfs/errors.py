"""Canonical error vocabulary for filesystem operations.

Platforms disagree on which errno a missing path component produces. Helpers
here fold those differences into one not-found condition and classify any
``OSError`` into the small set of kinds callers need to branch on.
"""

from __future__ import annotations

import errno
import os
from enum import Enum


class ErrorKind(Enum):
    """Coarse classification of a filesystem failure."""

    NOT_FOUND = "not-found"
    NOT_A_DIRECTORY = "not-a-directory"
    PERMISSION_DENIED = "permission-denied"
    OTHER = "other"


class ModKeyUnusableError(OSError):
    """Raised-as-value when a file's metadata cannot reliably detect changes."""


_PERMISSION_ERRNOS = frozenset({errno.EACCES, errno.EPERM})


def error_kind(error: BaseException) -> ErrorKind:
    """Return the canonical kind for ``error``."""
    if isinstance(error, ModKeyUnusableError):
        return ErrorKind.OTHER
    if isinstance(error, FileNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(error, NotADirectoryError):
        return ErrorKind.NOT_A_DIRECTORY
    if isinstance(error, PermissionError):
        return ErrorKind.PERMISSION_DENIED
    if isinstance(error, OSError):
        if error.errno == errno.ENOENT:
            return ErrorKind.NOT_FOUND
        if error.errno == errno.ENOTDIR:
            return ErrorKind.NOT_A_DIRECTORY
        if error.errno in _PERMISSION_ERRNOS:
            return ErrorKind.PERMISSION_DENIED
    return ErrorKind.OTHER


def not_found_error(path: str | os.PathLike[str], cause: BaseException | None = None) -> FileNotFoundError:
    """Build the canonical not-found error for ``path``.

    ``cause`` (usually the platform's ``ENOTDIR`` error) is chained as
    ``__cause__`` so the original errno stays inspectable.
    """
    error = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(path))
    error.__cause__ = cause
    return error


def normalize_open_error(error: OSError, path: str | os.PathLike[str]) -> OSError:
    """Rewrite ``ENOTDIR`` from an open into not-found, pass others through.

    Opening a file never asks for a directory, so ``ENOTDIR`` here means a
    path component is a regular file: the target simply does not exist.
    """
    if error_kind(error) is ErrorKind.NOT_A_DIRECTORY:
        return not_found_error(path, error)
    return error


__all__ = [
    "ErrorKind",
    "ModKeyUnusableError",
    "error_kind",
    "not_found_error",
    "normalize_open_error",
]
