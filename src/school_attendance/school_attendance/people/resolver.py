from __future__ import annotations

from typing import Any

from ..core.exceptions import NotFoundError, ValidationError
from .model import Person
from .repository import StudentRepository, TeacherRepository


class IdentityResolver:
    """Map a scanned QR payload to the student or teacher it identifies."""

    def __init__(self, students: StudentRepository, teachers: TeacherRepository):
        self._students = students
        self._teachers = teachers

    def resolve(self, code: Any) -> Person:
        code = str(code or "").strip()
        if not code:
            raise ValidationError("qr_data is required")

        person = self._students.get_by_code(code) or self._teachers.get_by_code(code)
        if person is None:
            raise NotFoundError("Invalid QR code")
        return person
