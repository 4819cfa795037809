from __future__ import annotations

from datetime import time
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Settings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[Settings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT school_start_time, school_end_time, updated_at FROM settings WHERE setting_id=1"
            )
            r = fetchone(cur)
            if not r:
                return None
            return Settings(
                school_start_time=normalize_mysql_time(r["school_start_time"]),
                school_end_time=normalize_mysql_time(r["school_end_time"]),
                updated_at=r.get("updated_at"),
            )

    def save(self, *, school_start_time: time, school_end_time: time) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(setting_id, school_start_time, school_end_time)
                VALUES(1, %s, %s)
                ON DUPLICATE KEY UPDATE
                    school_start_time=VALUES(school_start_time),
                    school_end_time=VALUES(school_end_time)
                """,
                (school_start_time, school_end_time),
            )
