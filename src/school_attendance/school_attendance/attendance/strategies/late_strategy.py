from __future__ import annotations

from datetime import date, datetime, time

from ...core.enums import AttendanceStatus
from .base import ArrivalStrategy, StatusDecision


class LateStrategy(ArrivalStrategy):
    """Late arrival; minutes are counted from school start, whole minutes only."""

    def decide(self, *, arrival: time, school_start: time) -> StatusDecision:
        day = date.min
        delta = datetime.combine(day, arrival) - datetime.combine(day, school_start)
        minutes = max(0, int(delta.total_seconds() // 60))
        return StatusDecision(status=AttendanceStatus.LATE, minutes_late=minutes)
