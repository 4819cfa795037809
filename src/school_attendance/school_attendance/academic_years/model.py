from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AcademicYearStatus


@dataclass(frozen=True)
class AcademicYear:
    """Domain entity: a school year that scopes students and reports."""

    academic_year_id: int
    name: str
    start_year: int
    end_year: int
    status: AcademicYearStatus

    @property
    def is_active(self) -> bool:
        return self.status == AcademicYearStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.academic_year_id,
            "name": self.name,
            "start_year": self.start_year,
            "end_year": self.end_year,
            "status": self.status.value,
        }
