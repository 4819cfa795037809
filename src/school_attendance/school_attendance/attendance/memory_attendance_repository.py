from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, CheckInType, PersonType
from ..core.exceptions import DuplicateEventError
from ..database.memory import MemoryDatabase
from .model import AttendanceEntry, AttendanceEvent
from .repository import AttendanceRepository

TABLE = "attendance_events"
# (person_type, person_id, attendance_date, check_in_type) -> event_id
KEY_INDEX = "attendance_events.person_day_type"


def _key(person_type: PersonType, person_id: int, attendance_date: date, kind: CheckInType) -> tuple:
    return (person_type, int(person_id), attendance_date, kind)


def drop_person_events(db: MemoryDatabase, person_type: PersonType, person_id: int) -> None:
    """Cascade for person deletes; caller holds db.lock."""
    events, keys = db.table(TABLE), db.index(KEY_INDEX)
    for event_id in [k for k, e in events.items() if e.person_type == person_type and e.person_id == int(person_id)]:
        e = events.pop(event_id)
        keys.pop(_key(e.person_type, e.person_id, e.attendance_date, e.check_in_type), None)


class MemoryAttendanceRepository(AttendanceRepository):
    """Attendance log over MemoryDatabase; joins read the students/teachers tables."""

    def __init__(self, db: MemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict[int, AttendanceEvent]:
        return self._db.table(TABLE)

    @property
    def _keys(self) -> dict[tuple, int]:
        return self._db.index(KEY_INDEX)

    def _find(self, person_type: PersonType, person_id: int, attendance_date: date, kind: CheckInType):
        event_id = self._keys.get(_key(person_type, person_id, attendance_date, kind))
        return None if event_id is None else self._rows.get(event_id)

    def _insert(self, **fields) -> AttendanceEvent:
        event_id = self._db.next_id(TABLE)
        event = AttendanceEvent(event_id=event_id, **fields)
        self._rows[event_id] = event
        self._keys[_key(event.person_type, event.person_id, event.attendance_date, event.check_in_type)] = event_id
        return event

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
        with self._db.lock:
            if self._find(person_type, person_id, attendance_date, CheckInType.ARRIVAL):
                raise DuplicateEventError(CheckInType.ARRIVAL.value)
            return self._insert(
                person_type=person_type,
                person_id=int(person_id),
                attendance_date=attendance_date,
                check_in_type=CheckInType.ARRIVAL,
                check_in_time=check_in_time,
                status=status,
                minutes_late=minutes_late,
                recorded_at=recorded_at,
            )

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
        with self._db.lock:
            if self._find(person_type, person_id, attendance_date, CheckInType.DEPARTURE):
                raise DuplicateEventError(CheckInType.DEPARTURE.value)
            arrival = self._find(person_type, person_id, attendance_date, CheckInType.ARRIVAL)
            if arrival is None or arrival.check_in_time > latest_arrival:
                return None
            return self._insert(
                person_type=person_type,
                person_id=int(person_id),
                attendance_date=attendance_date,
                check_in_type=CheckInType.DEPARTURE,
                check_in_time=check_in_time,
                recorded_at=recorded_at,
            )

    def list_for_person_and_date(
        self, *, person_type: PersonType, person_id: int, attendance_date: date
    ) -> Sequence[AttendanceEvent]:
        with self._db.lock:
            found = (self._find(person_type, person_id, attendance_date, kind) for kind in CheckInType)
            items = [e for e in found if e is not None]
        items.sort(key=lambda e: (e.check_in_time, e.event_id))
        return items

    def list_entries_for_date(
        self, attendance_date: date, *, academic_year_id: Optional[int] = None
    ) -> Sequence[AttendanceEntry]:
        with self._db.lock:
            events = [e for e in self._rows.values() if e.attendance_date == attendance_date]
            students = dict(self._db.table("students"))
            teachers = dict(self._db.table("teachers"))

        entries = []
        for e in events:
            if e.person_type == PersonType.STUDENT:
                s = students.get(e.person_id)
                if s is None:
                    continue
                if academic_year_id is not None and s.academic_year_id != int(academic_year_id):
                    continue
                entries.append(AttendanceEntry(event=e, code=s.student_code, name=s.name, class_name=s.class_name))
            else:
                t = teachers.get(e.person_id)
                if t is None:
                    continue
                entries.append(AttendanceEntry(event=e, code=t.teacher_code, name=t.name, class_name=None))

        entries.sort(key=lambda x: (x.event.check_in_time, x.event.event_id))
        return entries

    def delete_all(self, *, academic_year_id: Optional[int] = None) -> int:
        with self._db.lock:
            if academic_year_id is None:
                doomed = list(self._rows)
            else:
                students = self._db.table("students")
                doomed = [
                    k
                    for k, e in self._rows.items()
                    if e.person_type == PersonType.STUDENT
                    and e.person_id in students
                    and students[e.person_id].academic_year_id == int(academic_year_id)
                ]
            for k in doomed:
                e = self._rows.pop(k)
                self._keys.pop(_key(e.person_type, e.person_id, e.attendance_date, e.check_in_type), None)
            return len(doomed)
