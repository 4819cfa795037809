from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, PersonType
from .model import AttendanceEntry, AttendanceEvent


class AttendanceRepository(Protocol):
    """Append-only daily event log, unique on (person, date, check-in type)."""

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
        """Raises DuplicateEventError if the person already arrived that day."""

        raise NotImplementedError

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
        """Insert a departure only if an arrival at or before `latest_arrival` exists.

        Returns None when that condition does not hold; raises
        DuplicateEventError if a departure is already stored.
        """

        raise NotImplementedError

    def list_for_person_and_date(
        self, *, person_type: PersonType, person_id: int, attendance_date: date
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_entries_for_date(
        self, attendance_date: date, *, academic_year_id: Optional[int] = None
    ) -> Sequence[AttendanceEntry]:
        """Events of the day ordered by time: students in scope plus all teachers."""

        raise NotImplementedError

    def delete_all(self, *, academic_year_id: Optional[int] = None) -> int:
        """Delete every event (or only those of the year's students). Returns the count."""

        raise NotImplementedError
