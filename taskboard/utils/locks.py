"""Per-column mutual exclusion for position-critical sections.

Every operation that reads a column's maximum ``sort_order`` and then
writes a task into that column, every insert-shift, and every
delete-if-empty check holds the lock of each column it touches for the
whole read-then-write sequence.  Locks are always taken in ascending
column-id order so two operations touching the same pair of columns
cannot deadlock.
"""

from __future__ import annotations

import threading
from contextlib import ExitStack, contextmanager
from typing import Iterable, Iterator

from taskboard.errors import StorageError


class ColumnLockRegistry:
    """Lazily creates one ``threading.Lock`` per column id."""

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, column_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(column_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[column_id] = lock
            return lock

    @contextmanager
    def hold(self, column_ids: Iterable[int]) -> Iterator[None]:
        """Acquire the locks for *column_ids*, waiting at most ``timeout`` for each."""
        ordered = sorted({cid for cid in column_ids if cid is not None})
        with ExitStack() as stack:
            for column_id in ordered:
                lock = self._lock_for(column_id)
                if not lock.acquire(timeout=self.timeout):
                    raise StorageError(f"Timed out waiting for column {column_id}")
                stack.callback(lock.release)
            yield
