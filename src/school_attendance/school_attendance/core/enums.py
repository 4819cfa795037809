from __future__ import annotations

from enum import Enum


class PersonType(str, Enum):
    """Who a scanned QR code belongs to."""

    STUDENT = "student"
    TEACHER = "teacher"


class CheckInType(str, Enum):
    """The two events a person may record per calendar day."""

    ARRIVAL = "arrival"
    DEPARTURE = "departure"


class AttendanceStatus(str, Enum):
    """Classification stored on arrival events only."""

    PRESENT = "present"
    LATE = "late"


class AcademicYearStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Capability(str, Enum):
    """What an API key is allowed to do."""

    SCANNER = "scanner"
    ADMIN = "admin"


class TotalBasis(str, Enum):
    """Which quantity the `total` field of stats/report carries."""

    CHECKED_IN = "checked_in"
    ROSTER = "roster"
