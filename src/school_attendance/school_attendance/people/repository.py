from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, Teacher


class StudentRepository(Protocol):
    """Repository interface for students.

    Services depend on this interface, not on a concrete database.
    """

    def list_all(self, *, academic_year_id: Optional[int] = None) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Student]:
        raise NotImplementedError

    def count(self, *, academic_year_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def next_sequence(self, code_base: str) -> int:
        """1 + the highest numeric suffix among codes starting with `code_base`."""

        raise NotImplementedError

    def create(
        self,
        *,
        student_code: str,
        name: str,
        class_name: str,
        parent_phone: str,
        academic_year_id: int,
        photo: Optional[str],
        qr_code: Optional[str],
    ) -> int:
        """Insert a student; raises DuplicateKeyError if the code is taken."""

        raise NotImplementedError

    def update(
        self,
        *,
        student_id: int,
        name: str,
        class_name: str,
        parent_phone: str,
        photo: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        """Delete a student together with their attendance events."""

        raise NotImplementedError


class TeacherRepository(Protocol):
    def list_all(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Teacher]:
        raise NotImplementedError

    def next_sequence(self, code_base: str) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        teacher_code: str,
        name: str,
        id_card_number: str,
        phone: str,
        sex: str,
        photo: Optional[str],
        qr_code: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        teacher_id: int,
        name: str,
        id_card_number: str,
        phone: str,
        sex: str,
        photo: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, teacher_id: int) -> bool:
        """Delete a teacher together with their attendance events."""

        raise NotImplementedError
