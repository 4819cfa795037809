from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class KeyedLock:
    """One mutex per key, created on demand and dropped when idle.

    Serializes work for the same key (e.g. one person on one day) while
    letting unrelated keys proceed in parallel.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._waiters: Dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            self._waiters[key] = self._waiters.get(key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
