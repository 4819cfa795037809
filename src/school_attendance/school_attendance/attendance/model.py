from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_clock_time
from ..core.enums import AttendanceStatus, CheckInType, PersonType


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one arrival or departure scan of a person on a day.

    `check_in_time` is the wall clock reported by the scanning device;
    `recorded_at` is when the server stored the event (audit only).
    """

    event_id: int
    person_type: PersonType
    person_id: int
    attendance_date: date
    check_in_type: CheckInType
    check_in_time: time
    status: Optional[AttendanceStatus] = None
    minutes_late: Optional[int] = None
    recorded_at: Optional[datetime] = None

    @property
    def is_arrival(self) -> bool:
        return self.check_in_type == CheckInType.ARRIVAL

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "person_type": self.person_type.value,
            "person_id": self.person_id,
            "date": self.attendance_date.isoformat(),
            "check_in_type": self.check_in_type.value,
            "check_in_time": format_clock_time(self.check_in_time),
            "status": self.status.value if self.status else None,
            "minutes_late": self.minutes_late,
        }


@dataclass(frozen=True)
class AttendanceEntry:
    """Read-model: an event joined with the person's display fields."""

    event: AttendanceEvent
    code: str
    name: str
    class_name: Optional[str]

    def to_dict(self) -> dict:
        e = self.event
        row = {
            "id": e.event_id,
            "person_type": e.person_type.value,
            "person_id": self.code,
            "name": self.name,
            "class": self.class_name,
            "check_in_type": e.check_in_type.value,
            "check_in_time": format_clock_time(e.check_in_time),
            "status": e.status.value if e.status else None,
            "minutes_late": e.minutes_late,
        }
        if e.person_type == PersonType.STUDENT:
            row["student_id"] = self.code
        else:
            row["teacher_id"] = self.code
        return row
