from __future__ import annotations

import logging
from typing import Any

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..core.constants import DEFAULT_SCHOOL_END_TIME, DEFAULT_SCHOOL_START_TIME
from ..core.exceptions import RejectedError, ValidationError
from .model import Settings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Use case: read and change the school day boundaries.

    Changes apply to future arrivals only; stored events keep the status
    they were classified with.
    """

    def __init__(
        self,
        repo: SettingsRepository,
        *,
        default_start: str = DEFAULT_SCHOOL_START_TIME,
        default_end: str = DEFAULT_SCHOOL_END_TIME,
    ):
        self._repo = repo
        self._default = Settings(
            school_start_time=parse_hhmm(default_start, "school_start_time"),
            school_end_time=parse_hhmm(default_end, "school_end_time"),
        )

    def get(self) -> Settings:
        return self._repo.get() or self._default

    def set(self, *, school_start_time: Any, school_end_time: Any) -> Settings:
        try:
            start = parse_hhmm(school_start_time, "school_start_time")
            end = parse_hhmm(school_end_time, "school_end_time")
        except ValidationError as e:
            logger.info("Settings update rejected: %s", e)
            raise RejectedError(str(e)) from e

        if start >= end:
            logger.info(
                "Settings update rejected: start %s is not before end %s",
                format_hhmm(start),
                format_hhmm(end),
            )
            raise RejectedError("school_start_time must be before school_end_time")

        self._repo.save(school_start_time=start, school_end_time=end)
        logger.info("School day set to %s-%s", format_hhmm(start), format_hhmm(end))
        return self.get()
