"""Scoped open-file limiters bracketing every underlying open or stat."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

DEFAULT_OPEN_FILE_LIMIT = 32


class OpenFileLimiter(Protocol):
    """Paired acquire/release hooks called around each open/stat."""

    def acquire(self) -> None: ...

    def release(self) -> None: ...


class BoundedOpenFileLimiter:
    """Block callers once ``limit`` opens are in flight."""

    def __init__(self, limit: int = DEFAULT_OPEN_FILE_LIMIT) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"open file limit must be a positive integer, got {limit!r}")
        self.limit = limit
        self._semaphore = threading.BoundedSemaphore(limit)

    def acquire(self) -> None:
        self._semaphore.acquire()

    def release(self) -> None:
        self._semaphore.release()


class UnboundedOpenFileLimiter:
    """No-op limiter for callers that bound concurrency elsewhere."""

    def acquire(self) -> None:
        return None

    def release(self) -> None:
        return None


@contextmanager
def opened(limiter: OpenFileLimiter) -> Iterator[None]:
    """Hold one limiter slot for the duration of the ``with`` body.

    ``release`` runs exactly once per successful ``acquire`` on every exit
    path; if ``acquire`` itself raises, nothing is released.
    """
    limiter.acquire()
    try:
        yield
    finally:
        limiter.release()


__all__ = [
    "DEFAULT_OPEN_FILE_LIMIT",
    "OpenFileLimiter",
    "BoundedOpenFileLimiter",
    "UnboundedOpenFileLimiter",
    "opened",
]
