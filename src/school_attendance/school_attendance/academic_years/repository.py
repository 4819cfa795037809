from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AcademicYearStatus
from .model import AcademicYear


class AcademicYearRepository(Protocol):
    def list_all(self) -> Sequence[AcademicYear]:
        raise NotImplementedError

    def get_by_id(self, academic_year_id: int) -> Optional[AcademicYear]:
        raise NotImplementedError

    def get_active(self) -> Optional[AcademicYear]:
        raise NotImplementedError

    def create(self, *, name: str, start_year: int, end_year: int, status: AcademicYearStatus) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        academic_year_id: int,
        name: str,
        start_year: int,
        end_year: int,
        status: AcademicYearStatus,
    ) -> bool:
        raise NotImplementedError

    def set_active(self, academic_year_id: int) -> None:
        """Mark one year active and every other year inactive, atomically."""

        raise NotImplementedError

    def delete_by_id(self, academic_year_id: int) -> bool:
        raise NotImplementedError
