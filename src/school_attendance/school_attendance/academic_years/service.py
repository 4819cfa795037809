from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_int, require_int, require_non_empty
from ..core.enums import AcademicYearStatus
from ..core.exceptions import NotFoundError, RejectedError, ValidationError
from ..people.repository import StudentRepository
from .model import AcademicYear
from .repository import AcademicYearRepository

logger = logging.getLogger(__name__)


def _parse_status(value: Any) -> Optional[AcademicYearStatus]:
    if value is None or value == "":
        return None
    try:
        return AcademicYearStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError("status must be 'active' or 'inactive'")


class AcademicYearService:
    """Use case: manage academic years; at most one of them is active."""

    def __init__(self, years: AcademicYearRepository, students: StudentRepository):
        self._years = years
        self._students = students

    def list_years(self) -> Sequence[AcademicYear]:
        return self._years.list_all()

    def get_year(self, academic_year_id: int) -> AcademicYear:
        year = self._years.get_by_id(academic_year_id)
        if not year:
            raise NotFoundError("Academic year not found")
        return year

    def get_active(self) -> Optional[AcademicYear]:
        return self._years.get_active()

    def resolve_scope(self, academic_year_id: Any = None) -> Optional[int]:
        """Year id a request works on: explicit id, else the active year, else None (all)."""
        explicit = optional_int(academic_year_id, "academic_year_id")
        if explicit is not None:
            return self.get_year(explicit).academic_year_id
        active = self._years.get_active()
        return active.academic_year_id if active else None

    @staticmethod
    def _validate(name: Any, start_year: Any, end_year: Any) -> tuple[str, int, int]:
        name = require_non_empty(name, "name")
        start = require_int(start_year, "start_year")
        end = require_int(end_year, "end_year")
        if start >= end:
            raise ValidationError("start_year must be before end_year")
        return name, start, end

    def create_year(self, *, name: Any, start_year: Any, end_year: Any, status: Any = None) -> AcademicYear:
        name, start, end = self._validate(name, start_year, end_year)
        wanted = _parse_status(status)

        year_id = self._years.create(
            name=name, start_year=start, end_year=end, status=AcademicYearStatus.INACTIVE
        )
        if wanted == AcademicYearStatus.ACTIVE or self._years.get_active() is None:
            self._years.set_active(year_id)
        logger.info("Created academic year %s", name)
        return self.get_year(year_id)

    def update_year(
        self, academic_year_id: int, *, name: Any, start_year: Any, end_year: Any, status: Any = None
    ) -> AcademicYear:
        current = self.get_year(academic_year_id)
        name, start, end = self._validate(name, start_year, end_year)
        wanted = _parse_status(status) or current.status

        self._years.update(
            academic_year_id=current.academic_year_id,
            name=name,
            start_year=start,
            end_year=end,
            status=AcademicYearStatus.INACTIVE if wanted == AcademicYearStatus.ACTIVE else wanted,
        )
        if wanted == AcademicYearStatus.ACTIVE:
            self._years.set_active(current.academic_year_id)
            logger.info("Academic year %s is now active", name)
        return self.get_year(current.academic_year_id)

    def delete_year(self, academic_year_id: int) -> None:
        year = self.get_year(academic_year_id)
        if self._students.count(academic_year_id=year.academic_year_id) > 0:
            raise RejectedError("Academic year still has students; delete or move them first")
        self._years.delete_by_id(year.academic_year_id)
        logger.info("Deleted academic year %s", year.name)
