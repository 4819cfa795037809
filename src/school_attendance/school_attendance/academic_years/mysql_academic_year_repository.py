from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AcademicYearStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AcademicYear
from .repository import AcademicYearRepository

_COLUMNS = "academic_year_id, name, start_year, end_year, status"


def _row_to_year(r: dict) -> AcademicYear:
    return AcademicYear(
        academic_year_id=int(r["academic_year_id"]),
        name=r["name"],
        start_year=int(r["start_year"]),
        end_year=int(r["end_year"]),
        status=AcademicYearStatus(r["status"]),
    )


class MySQLAcademicYearRepository(AcademicYearRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AcademicYear]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM academic_years ORDER BY start_year DESC, academic_year_id DESC")
            return [_row_to_year(r) for r in fetchall(cur)]

    def get_by_id(self, academic_year_id: int) -> Optional[AcademicYear]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM academic_years WHERE academic_year_id=%s", (int(academic_year_id),))
            r = fetchone(cur)
            return _row_to_year(r) if r else None

    def get_active(self) -> Optional[AcademicYear]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM academic_years WHERE status='active' ORDER BY academic_year_id LIMIT 1"
            )
            r = fetchone(cur)
            return _row_to_year(r) if r else None

    def create(self, *, name: str, start_year: int, end_year: int, status: AcademicYearStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO academic_years(name, start_year, end_year, status)
                VALUES(%s,%s,%s,%s)
                """,
                (name, int(start_year), int(end_year), status.value),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        academic_year_id: int,
        name: str,
        start_year: int,
        end_year: int,
        status: AcademicYearStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE academic_years
                SET name=%s, start_year=%s, end_year=%s, status=%s
                WHERE academic_year_id=%s
                """,
                (name, int(start_year), int(end_year), status.value, int(academic_year_id)),
            )
            return cur.rowcount > 0

    def set_active(self, academic_year_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE academic_years
                SET status = IF(academic_year_id=%s, 'active', 'inactive')
                """,
                (int(academic_year_id),),
            )

    def delete_by_id(self, academic_year_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM academic_years WHERE academic_year_id=%s", (int(academic_year_id),))
            return cur.rowcount > 0
