from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import SchoolClass
from .repository import ClassRepository


def _row_to_class(r: dict) -> SchoolClass:
    return SchoolClass(class_id=int(r["class_id"]), name=r["name"], code=r["code"])


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name, code FROM classes ORDER BY name ASC")
            return [_row_to_class(r) for r in fetchall(cur)]

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name, code FROM classes WHERE class_id=%s", (int(class_id),))
            r = fetchone(cur)
            return _row_to_class(r) if r else None

    def create(self, *, name: str, code: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("INSERT INTO classes(name, code) VALUES(%s,%s)", (name, code))
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateKeyError(code) from exc
            raise

    def update(self, *, class_id: int, name: str, code: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE classes SET name=%s, code=%s WHERE class_id=%s",
                    (name, code, int(class_id)),
                )
                return cur.rowcount > 0
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateKeyError(code) from exc
            raise

    def delete_by_id(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (int(class_id),))
            return cur.rowcount > 0
