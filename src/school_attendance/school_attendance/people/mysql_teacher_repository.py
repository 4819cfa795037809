from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import PersonType
from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Teacher
from .repository import TeacherRepository

_COLUMNS = "id, teacher_code, name, id_card_number, phone, sex, photo, qr_code, created_at"


def _row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        id=int(r["id"]),
        teacher_code=r["teacher_code"],
        name=r["name"],
        id_card_number=r["id_card_number"],
        phone=r["phone"],
        sex=r["sex"],
        photo=r.get("photo"),
        qr_code=r.get("qr_code"),
        created_at=r.get("created_at"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers ORDER BY created_at DESC, id DESC")
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE id=%s", (int(teacher_id),))
            r = fetchone(cur)
            return _row_to_teacher(r) if r else None

    def get_by_code(self, code: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE teacher_code=%s", (code,))
            r = fetchone(cur)
            return _row_to_teacher(r) if r else None

    def next_sequence(self, code_base: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(MAX(CAST(SUBSTRING(teacher_code, %s) AS UNSIGNED)), 0) AS n
                FROM teachers
                WHERE teacher_code LIKE %s
                """,
                (len(code_base) + 1, f"{code_base}%"),
            )
            return int(fetchone(cur)["n"]) + 1

    def create(
        self,
        *,
        teacher_code: str,
        name: str,
        id_card_number: str,
        phone: str,
        sex: str,
        photo: Optional[str],
        qr_code: Optional[str],
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO teachers(teacher_code, name, id_card_number, phone, sex, photo, qr_code)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (teacher_code, name, id_card_number, phone, sex, photo, qr_code),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateKeyError(teacher_code) from exc
            raise

    def update(
        self,
        *,
        teacher_id: int,
        name: str,
        id_card_number: str,
        phone: str,
        sex: str,
        photo: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE teachers
                SET name=%s, id_card_number=%s, phone=%s, sex=%s, photo=%s
                WHERE id=%s
                """,
                (name, id_card_number, phone, sex, photo, int(teacher_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, teacher_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_events WHERE person_type=%s AND person_id=%s",
                (PersonType.TEACHER.value, int(teacher_id)),
            )
            cur.execute("DELETE FROM teachers WHERE id=%s", (int(teacher_id),))
            return cur.rowcount > 0
