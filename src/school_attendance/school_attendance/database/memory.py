from __future__ import annotations

import itertools
import threading
from collections import defaultdict
from typing import Dict, Iterator


class MemoryDatabase:
    """In-process stand-in for the MySQL schema.

    Each table is a dict keyed by primary key. Unique keys live in named
    indexes (key -> primary key) that repositories keep in step with their
    tables. A single re-entrant lock plays the role of a transaction:
    repositories hold it for every read-modify-write.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.tables: Dict[str, dict] = defaultdict(dict)
        self.indexes: Dict[str, dict] = defaultdict(dict)
        self._sequences: Dict[str, Iterator[int]] = {}

    def next_id(self, table: str) -> int:
        with self.lock:
            seq = self._sequences.get(table)
            if seq is None:
                seq = self._sequences[table] = itertools.count(1)
            return next(seq)

    def table(self, name: str) -> dict:
        return self.tables[name]

    def index(self, name: str) -> dict:
        return self.indexes[name]
