from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import PersonType
from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Student
from .repository import StudentRepository

_COLUMNS = "id, student_code, name, class_name, parent_phone, photo, qr_code, academic_year_id, created_at"


def _row_to_student(r: dict) -> Student:
    return Student(
        id=int(r["id"]),
        student_code=r["student_code"],
        name=r["name"],
        class_name=r["class_name"],
        parent_phone=r["parent_phone"],
        academic_year_id=int(r["academic_year_id"]),
        photo=r.get("photo"),
        qr_code=r.get("qr_code"),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, academic_year_id: Optional[int] = None) -> Sequence[Student]:
        sql = f"SELECT {_COLUMNS} FROM students"
        params: tuple = ()
        if academic_year_id is not None:
            sql += " WHERE academic_year_id=%s"
            params = (int(academic_year_id),)
        sql += " ORDER BY created_at DESC, id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (int(student_id),))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def get_by_code(self, code: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_code=%s", (code,))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def count(self, *, academic_year_id: Optional[int] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if academic_year_id is None:
                cur.execute("SELECT COUNT(*) AS n FROM students")
            else:
                cur.execute("SELECT COUNT(*) AS n FROM students WHERE academic_year_id=%s", (int(academic_year_id),))
            return int(fetchone(cur)["n"])

    def next_sequence(self, code_base: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(MAX(CAST(SUBSTRING(student_code, %s) AS UNSIGNED)), 0) AS n
                FROM students
                WHERE student_code LIKE %s
                """,
                (len(code_base) + 1, f"{code_base}%"),
            )
            return int(fetchone(cur)["n"]) + 1

    def create(
        self,
        *,
        student_code: str,
        name: str,
        class_name: str,
        parent_phone: str,
        academic_year_id: int,
        photo: Optional[str],
        qr_code: Optional[str],
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(student_code, name, class_name, parent_phone, photo, qr_code, academic_year_id)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (student_code, name, class_name, parent_phone, photo, qr_code, int(academic_year_id)),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateKeyError(student_code) from exc
            raise

    def update(
        self,
        *,
        student_id: int,
        name: str,
        class_name: str,
        parent_phone: str,
        photo: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, class_name=%s, parent_phone=%s, photo=%s
                WHERE id=%s
                """,
                (name, class_name, parent_phone, photo, int(student_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_events WHERE person_type=%s AND person_id=%s",
                (PersonType.STUDENT.value, int(student_id)),
            )
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
