from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Sequence

from ..attendance.model import AttendanceEntry
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_clock_time
from ..core.enums import AttendanceStatus, CheckInType, PersonType, TotalBasis
from ..core.exceptions import ValidationError
from ..people.repository import StudentRepository


def parse_total_basis(value: Any, default: TotalBasis) -> TotalBasis:
    if value is None or value == "":
        return default
    try:
        return TotalBasis(str(value).strip().lower())
    except ValueError:
        raise ValidationError("total must be 'checked_in' or 'roster'")


@dataclass(frozen=True)
class DailyStats:
    """Counts for one day. present/late/absent are about students only."""

    day: date
    present: int
    late: int
    absent: int
    teachers_present: int
    teachers_late: int
    basis: TotalBasis
    entries: Sequence[AttendanceEntry] = field(default_factory=tuple)

    @property
    def total_checked_in(self) -> int:
        return self.present + self.late

    @property
    def total_roster(self) -> int:
        return self.present + self.late + self.absent

    @property
    def total(self) -> int:
        return self.total_roster if self.basis == TotalBasis.ROSTER else self.total_checked_in

    def counts(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "total": self.total,
            "total_checked_in": self.total_checked_in,
            "total_roster": self.total_roster,
            "teachers_present": self.teachers_present,
            "teachers_late": self.teachers_late,
        }

    def to_dict(self) -> dict:
        body = {"success": True, **self.counts()}
        body["entries"] = [e.to_dict() for e in self.entries]
        return body


@dataclass(frozen=True)
class ReportRow:
    student_id: str
    name: str
    class_name: Optional[str]
    arrival: Optional[str]
    departure: Optional[str]
    status: Optional[str]
    minutes_late: Optional[int]

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "name": self.name,
            "class": self.class_name,
            "arrival": self.arrival,
            "departure": self.departure,
            "status": self.status,
            "minutes_late": self.minutes_late,
        }


@dataclass(frozen=True)
class DailyReport:
    stats: DailyStats
    rows: Sequence[ReportRow]
    absent_students: Sequence[dict]

    def to_dict(self) -> dict:
        body = {"success": True, **self.stats.counts()}
        body["entries"] = [r.to_dict() for r in self.rows]
        body["absentStudents"] = list(self.absent_students)
        return body


class AttendanceReportService:
    """Read-only aggregation over the attendance log and the student roster."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def entries(self, day: date, *, academic_year_id: Optional[int] = None) -> Sequence[AttendanceEntry]:
        return self._attendance.list_entries_for_date(day, academic_year_id=academic_year_id)

    def stats(
        self,
        day: date,
        *,
        academic_year_id: Optional[int] = None,
        basis: TotalBasis = TotalBasis.CHECKED_IN,
    ) -> DailyStats:
        entries = self.entries(day, academic_year_id=academic_year_id)
        roster = self._students.count(academic_year_id=academic_year_id)
        return self._build_stats(day, entries, roster, basis)

    @staticmethod
    def _build_stats(day: date, entries: Sequence[AttendanceEntry], roster: int, basis: TotalBasis) -> DailyStats:
        tally = {
            (PersonType.STUDENT, AttendanceStatus.PRESENT): 0,
            (PersonType.STUDENT, AttendanceStatus.LATE): 0,
            (PersonType.TEACHER, AttendanceStatus.PRESENT): 0,
            (PersonType.TEACHER, AttendanceStatus.LATE): 0,
        }
        for entry in entries:
            e = entry.event
            if e.check_in_type == CheckInType.ARRIVAL and e.status is not None:
                tally[(e.person_type, e.status)] += 1

        present = tally[(PersonType.STUDENT, AttendanceStatus.PRESENT)]
        late = tally[(PersonType.STUDENT, AttendanceStatus.LATE)]
        return DailyStats(
            day=day,
            present=present,
            late=late,
            absent=max(0, roster - present - late),
            teachers_present=tally[(PersonType.TEACHER, AttendanceStatus.PRESENT)],
            teachers_late=tally[(PersonType.TEACHER, AttendanceStatus.LATE)],
            basis=basis,
            entries=tuple(entries),
        )

    def report(
        self,
        day: date,
        *,
        academic_year_id: Optional[int] = None,
        basis: TotalBasis = TotalBasis.ROSTER,
    ) -> DailyReport:
        entries = self.entries(day, academic_year_id=academic_year_id)
        roster = self._students.list_all(academic_year_id=academic_year_id)
        stats = self._build_stats(day, entries, len(roster), basis)

        by_student: dict[int, dict] = {}
        for entry in entries:
            e = entry.event
            if e.person_type != PersonType.STUDENT:
                continue
            row = by_student.setdefault(
                e.person_id,
                {"student_id": entry.code, "name": entry.name, "class_name": entry.class_name,
                 "arrival": None, "departure": None, "status": None, "minutes_late": None},
            )
            if e.check_in_type == CheckInType.ARRIVAL:
                row["arrival"] = format_clock_time(e.check_in_time)
                row["status"] = e.status.value if e.status else None
                row["minutes_late"] = e.minutes_late
            else:
                row["departure"] = format_clock_time(e.check_in_time)

        rows = [ReportRow(**r) for r in by_student.values()]
        rows.sort(key=lambda r: (r.arrival or "", r.student_id))

        arrived = {pid for pid, r in by_student.items() if r["arrival"]}
        absent = [
            {"student_id": s.student_code, "name": s.name, "class": s.class_name}
            for s in sorted(roster, key=lambda s: (s.class_name, s.name, s.student_code))
            if s.id not in arrived
        ]
        return DailyReport(stats=stats, rows=rows, absent_students=absent)
