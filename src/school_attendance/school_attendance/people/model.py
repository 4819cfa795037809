from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import PersonType


class Person(Protocol):
    """What the attendance engine needs from anyone who can scan in."""

    @property
    def person_type(self) -> PersonType: ...

    @property
    def person_id(self) -> int: ...

    @property
    def code(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def class_name(self) -> Optional[str]: ...


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student, scoped to one academic year."""

    id: int
    student_code: str
    name: str
    class_name: str
    parent_phone: str
    academic_year_id: int
    photo: Optional[str] = None
    qr_code: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def person_type(self) -> PersonType:
        return PersonType.STUDENT

    @property
    def person_id(self) -> int:
        return self.id

    @property
    def code(self) -> str:
        return self.student_code

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_id": self.student_code,
            "name": self.name,
            "class": self.class_name,
            "parent_phone": self.parent_phone,
            "photo": self.photo,
            "qr_code": self.qr_code,
            "academic_year_id": self.academic_year_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a registered teacher (not tied to an academic year)."""

    id: int
    teacher_code: str
    name: str
    id_card_number: str
    phone: str
    sex: str
    photo: Optional[str] = None
    qr_code: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def person_type(self) -> PersonType:
        return PersonType.TEACHER

    @property
    def person_id(self) -> int:
        return self.id

    @property
    def code(self) -> str:
        return self.teacher_code

    @property
    def class_name(self) -> Optional[str]:
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "teacher_id": self.teacher_code,
            "name": self.name,
            "id_card_number": self.id_card_number,
            "phone": self.phone,
            "sex": self.sex,
            "photo": self.photo,
            "qr_code": self.qr_code,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
