from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus, CheckInType, PersonType
from ..core.exceptions import DuplicateEventError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, normalize_mysql_time
from .model import AttendanceEntry, AttendanceEvent
from .repository import AttendanceRepository

_EVENT_COLUMNS = (
    "e.event_id, e.person_type, e.person_id, e.attendance_date, e.check_in_type, "
    "e.check_in_time, e.status, e.minutes_late, e.recorded_at"
)


def _row_to_event(r: dict) -> AttendanceEvent:
    return AttendanceEvent(
        event_id=int(r["event_id"]),
        person_type=PersonType(r["person_type"]),
        person_id=int(r["person_id"]),
        attendance_date=r["attendance_date"],
        check_in_type=CheckInType(r["check_in_type"]),
        check_in_time=normalize_mysql_time(r["check_in_time"]),
        status=AttendanceStatus(r["status"]) if r.get("status") else None,
        minutes_late=int(r["minutes_late"]) if r.get("minutes_late") is not None else None,
        recorded_at=r.get("recorded_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, cur, event_id: int) -> AttendanceEvent:
        cur.execute(f"SELECT {_EVENT_COLUMNS} FROM attendance_events e WHERE e.event_id=%s", (event_id,))
        return _row_to_event(fetchone(cur))

    def insert_arrival(
        self,
        *,
        person_type: PersonType,
        person_id: int,
        attendance_date: date,
        check_in_time: time,
        status: AttendanceStatus,
        minutes_late: Optional[int],
        recorded_at: datetime,
    ) -> AttendanceEvent:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_events(
                        person_type, person_id, attendance_date, check_in_type,
                        check_in_time, status, minutes_late, recorded_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        person_type.value,
                        int(person_id),
                        attendance_date,
                        CheckInType.ARRIVAL.value,
                        check_in_time,
                        status.value,
                        minutes_late,
                        recorded_at,
                    ),
                )
                return self._get(cur, int(cur.lastrowid))
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateEventError(CheckInType.ARRIVAL.value) from exc
            raise

    def insert_departure(
        self,
        *,
        person_type: PersonType,
        person_id: int,
        attendance_date: date,
        check_in_time: time,
        latest_arrival: time,
        recorded_at: datetime,
    ) -> Optional[AttendanceEvent]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # Conditional insert: the arrival row must exist and be old enough.
                cur.execute(
                    """
                    INSERT INTO attendance_events(
                        person_type, person_id, attendance_date, check_in_type, check_in_time, recorded_at
                    )
                    SELECT %s, %s, %s, %s, %s, %s FROM DUAL
                    WHERE EXISTS (
                        SELECT 1 FROM attendance_events a
                        WHERE a.person_type=%s AND a.person_id=%s AND a.attendance_date=%s
                          AND a.check_in_type=%s AND a.check_in_time <= %s
                    )
                    """,
                    (
                        person_type.value,
                        int(person_id),
                        attendance_date,
                        CheckInType.DEPARTURE.value,
                        check_in_time,
                        recorded_at,
                        person_type.value,
                        int(person_id),
                        attendance_date,
                        CheckInType.ARRIVAL.value,
                        latest_arrival,
                    ),
                )
                if cur.rowcount <= 0:
                    return None
                return self._get(cur, int(cur.lastrowid))
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateEventError(CheckInType.DEPARTURE.value) from exc
            raise

    def list_for_person_and_date(
        self, *, person_type: PersonType, person_id: int, attendance_date: date
    ) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM attendance_events e
                WHERE e.person_type=%s AND e.person_id=%s AND e.attendance_date=%s
                ORDER BY e.check_in_time ASC, e.event_id ASC
                """,
                (person_type.value, int(person_id), attendance_date),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def list_entries_for_date(
        self, attendance_date: date, *, academic_year_id: Optional[int] = None
    ) -> Sequence[AttendanceEntry]:
        year_filter = ""
        params: list = [attendance_date]
        if academic_year_id is not None:
            year_filter = " AND s.academic_year_id=%s"
            params.append(int(academic_year_id))
        params.append(attendance_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}, s.student_code AS code, s.name AS name, s.class_name AS class_name
                FROM attendance_events e
                JOIN students s ON s.id = e.person_id
                WHERE e.person_type='student' AND e.attendance_date=%s{year_filter}
                UNION ALL
                SELECT {_EVENT_COLUMNS}, t.teacher_code AS code, t.name AS name, NULL AS class_name
                FROM attendance_events e
                JOIN teachers t ON t.id = e.person_id
                WHERE e.person_type='teacher' AND e.attendance_date=%s
                ORDER BY check_in_time ASC, event_id ASC
                """,
                tuple(params),
            )
            return [
                AttendanceEntry(
                    event=_row_to_event(r),
                    code=r["code"],
                    name=r["name"],
                    class_name=r.get("class_name"),
                )
                for r in fetchall(cur)
            ]

    def delete_all(self, *, academic_year_id: Optional[int] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if academic_year_id is None:
                cur.execute("DELETE FROM attendance_events")
            else:
                cur.execute(
                    """
                    DELETE e FROM attendance_events e
                    JOIN students s ON s.id = e.person_id
                    WHERE e.person_type='student' AND s.academic_year_id=%s
                    """,
                    (int(academic_year_id),),
                )
            return int(cur.rowcount)
