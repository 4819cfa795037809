from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import AcademicYearStatus
from ..database.memory import MemoryDatabase
from .model import AcademicYear
from .repository import AcademicYearRepository

TABLE = "academic_years"


class MemoryAcademicYearRepository(AcademicYearRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict[int, AcademicYear]:
        return self._db.table(TABLE)

    def list_all(self) -> Sequence[AcademicYear]:
        with self._db.lock:
            items = list(self._rows.values())
        items.sort(key=lambda y: (y.start_year, y.academic_year_id), reverse=True)
        return items

    def get_by_id(self, academic_year_id: int) -> Optional[AcademicYear]:
        with self._db.lock:
            return self._rows.get(int(academic_year_id))

    def get_active(self) -> Optional[AcademicYear]:
        with self._db.lock:
            active = [y for y in self._rows.values() if y.is_active]
        return min(active, key=lambda y: y.academic_year_id) if active else None

    def create(self, *, name: str, start_year: int, end_year: int, status: AcademicYearStatus) -> int:
        with self._db.lock:
            year_id = self._db.next_id(TABLE)
            self._rows[year_id] = AcademicYear(
                academic_year_id=year_id,
                name=name,
                start_year=int(start_year),
                end_year=int(end_year),
                status=status,
            )
            return year_id

    def update(
        self,
        *,
        academic_year_id: int,
        name: str,
        start_year: int,
        end_year: int,
        status: AcademicYearStatus,
    ) -> bool:
        with self._db.lock:
            current = self._rows.get(int(academic_year_id))
            if not current:
                return False
            self._rows[current.academic_year_id] = replace(
                current, name=name, start_year=int(start_year), end_year=int(end_year), status=status
            )
            return True

    def set_active(self, academic_year_id: int) -> None:
        with self._db.lock:
            for year_id, year in list(self._rows.items()):
                status = AcademicYearStatus.ACTIVE if year_id == int(academic_year_id) else AcademicYearStatus.INACTIVE
                self._rows[year_id] = replace(year, status=status)

    def delete_by_id(self, academic_year_id: int) -> bool:
        with self._db.lock:
            return self._rows.pop(int(academic_year_id), None) is not None
