from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import ArrivalStrategy, StatusDecision


class OnTimeStrategy(ArrivalStrategy):
    """Arrived no later than school start (plus grace)."""

    def decide(self, *, arrival: time, school_start: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, minutes_late=0)
