"""Stateless path helpers delegating to ``os.path`` semantics.

Separator handling, case rules and ``..`` collapsing are whatever the host
platform's ``os.path`` does; nothing here reimplements them.
"""

from __future__ import annotations

import os

PathArg = str | os.PathLike[str]


def is_abs(path: PathArg) -> bool:
    return os.path.isabs(path)


def abs_path(path: PathArg) -> str | None:
    """Return the absolute form of ``path`` or ``None`` if cwd is unavailable."""
    try:
        return os.path.abspath(path)
    except OSError:
        return None


def dir_name(path: PathArg) -> str:
    """Return the cleaned parent of ``path``; ``"."`` for a bare name."""
    parent = os.path.dirname(os.fspath(path))
    if not parent:
        return "."
    return os.path.normpath(parent)


def base_name(path: PathArg) -> str:
    """Return the last element of ``path`` ignoring trailing separators.

    An empty path yields ``"."`` and a path of only separators yields ``os.sep``.
    """
    raw = os.fspath(path)
    if not raw:
        return "."
    stripped = raw.rstrip(os.sep + (os.altsep or ""))
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


def ext(path: PathArg) -> str:
    return os.path.splitext(os.fspath(path))[1]


def join(*parts: PathArg) -> str:
    """Join ``parts`` and clean the result (``join("a", "b", "../c") -> a/c``)."""
    if not parts:
        return "."
    return os.path.normpath(os.path.join(*parts))


def rel(base: PathArg, target: PathArg) -> str | None:
    """Return ``target`` relative to ``base`` or ``None`` when impossible."""
    try:
        return os.path.relpath(target, base)
    except ValueError:
        # Windows: paths on different drives.
        return None
    except OSError:
        # Relative arguments need the cwd, which may be gone.
        return None


__all__ = [
    "PathArg",
    "is_abs",
    "abs_path",
    "dir_name",
    "base_name",
    "ext",
    "join",
    "rel",
]
