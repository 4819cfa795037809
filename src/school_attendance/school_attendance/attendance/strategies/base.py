from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    minutes_late: int = 0


class ArrivalStrategy(ABC):
    """Strategy Pattern: encapsulate how an arrival is classified."""

    @abstractmethod
    def decide(self, *, arrival: time, school_start: time) -> StatusDecision:
        raise NotImplementedError
