from __future__ import annotations

import re
from datetime import date, datetime, time

from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_HHMMSS = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_hhmm(value: str, field_name: str = "time") -> time:
    """Parse a 24-hour HH:MM wall-clock string (settings format)."""
    m = _HHMM.match(str(value or "").strip())
    if not m:
        raise ValidationError(f"{field_name} must be HH:MM (24-hour)")
    return time(hour=int(m.group(1)), minute=int(m.group(2)))


def parse_clock_time(value: str, field_name: str = "time") -> time:
    """Parse HH:MM:SS (seconds optional) as sent by scanning devices."""
    m = _HHMMSS.match(str(value or "").strip())
    if not m:
        raise ValidationError(f"{field_name} must be HH:MM:SS (24-hour)")
    return time(hour=int(m.group(1)), minute=int(m.group(2)), second=int(m.group(3) or 0))


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def format_clock_time(value: time | None) -> str | None:
    return value.strftime("%H:%M:%S") if value is not None else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
