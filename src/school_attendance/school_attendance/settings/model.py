from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..common.datetime_utils import format_hhmm


@dataclass(frozen=True)
class Settings:
    """School day boundaries. Arrivals are classified against `school_start_time`."""

    school_start_time: time
    school_end_time: time
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "school_start_time": format_hhmm(self.school_start_time),
            "school_end_time": format_hhmm(self.school_end_time),
        }
