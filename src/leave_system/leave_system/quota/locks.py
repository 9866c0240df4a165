from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class EmployeeLocks:
    """One re-entrant lock per employee.

    Quota read-modify-write sequences for the same employee run one at a
    time inside a process; different employees never wait on each other.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[int, threading.RLock] = {}

    def _lock_for(self, employee_id: int) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[employee_id] = lock
            return lock

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        lock = self._lock_for(int(employee_id))
        with lock:
            yield
