from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ..database.memory import MemoryDatabase
from .model import Settings
from .repository import SettingsRepository

TABLE = "settings"


class MemorySettingsRepository(SettingsRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get(self) -> Optional[Settings]:
        with self._db.lock:
            return self._db.table(TABLE).get(1)

    def save(self, *, school_start_time: time, school_end_time: time) -> None:
        with self._db.lock:
            self._db.table(TABLE)[1] = Settings(
                school_start_time=school_start_time,
                school_end_time=school_end_time,
                updated_at=datetime.now(),
            )
