from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..academic_years.repository import AcademicYearRepository
from ..common.validators import optional_photo, require_non_empty, require_phone
from ..core.constants import (
    DEFAULT_STUDENT_CODE_PREFIX,
    DEFAULT_TEACHER_CODE_PREFIX,
    STUDENT_SEQUENCE_WIDTH,
    TEACHER_SEQUENCE_WIDTH,
)
from ..core.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from .model import Student, Teacher
from .qr import make_qr_data_url
from .repository import StudentRepository, TeacherRepository

logger = logging.getLogger(__name__)

# Sentinel for "photo key absent from the payload": keep the stored photo.
UNCHANGED: Any = object()

_CODE_ATTEMPTS = 3


class StudentService:
    """Use case: register and maintain students of an academic year."""

    def __init__(
        self,
        students: StudentRepository,
        years: AcademicYearRepository,
        *,
        code_prefix: str = DEFAULT_STUDENT_CODE_PREFIX,
    ):
        self._students = students
        self._years = years
        self._code_prefix = code_prefix

    def list_students(self, *, academic_year_id: Optional[int] = None) -> Sequence[Student]:
        return self._students.list_all(academic_year_id=academic_year_id)

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def _code_base(self, end_year: int) -> str:
        return f"{self._code_prefix}{int(end_year) % 100:02d}"

    def register_student(
        self,
        *,
        name: Any,
        class_name: Any,
        parent_phone: Any,
        photo: Any = None,
        academic_year_id: Optional[int] = None,
    ) -> Student:
        name = require_non_empty(name, "name")
        class_name = require_non_empty(class_name, "class")
        parent_phone = require_phone(parent_phone, "parent_phone")
        photo = optional_photo(photo)

        if academic_year_id is not None:
            year = self._years.get_by_id(academic_year_id)
            if not year:
                raise NotFoundError("Academic year not found")
        else:
            year = self._years.get_active()
            if not year:
                raise ValidationError("No active academic year; create one first")

        code_base = self._code_base(year.end_year)
        for _ in range(_CODE_ATTEMPTS):
            seq = self._students.next_sequence(code_base)
            code = f"{code_base}{seq:0{STUDENT_SEQUENCE_WIDTH}d}"
            try:
                student_id = self._students.create(
                    student_code=code,
                    name=name,
                    class_name=class_name,
                    parent_phone=parent_phone,
                    academic_year_id=year.academic_year_id,
                    photo=photo,
                    qr_code=make_qr_data_url(code),
                )
            except DuplicateKeyError:
                logger.warning("Student code %s taken concurrently, retrying", code)
                continue
            logger.info("Registered student %s (%s) in year %s", code, name, year.name)
            return self.get_student(student_id)

        raise ValidationError("Could not allocate a student code, please retry")

    def update_student(
        self,
        student_id: int,
        *,
        name: Any,
        class_name: Any,
        parent_phone: Any,
        photo: Any = UNCHANGED,
    ) -> Student:
        current = self.get_student(student_id)
        name = require_non_empty(name, "name")
        class_name = require_non_empty(class_name, "class")
        parent_phone = require_phone(parent_phone, "parent_phone")
        photo = current.photo if photo is UNCHANGED else optional_photo(photo)

        self._students.update(
            student_id=current.id,
            name=name,
            class_name=class_name,
            parent_phone=parent_phone,
            photo=photo,
        )
        return self.get_student(current.id)

    def delete_student(self, student_id: int) -> None:
        student = self.get_student(student_id)
        if not self._students.delete_by_id(student.id):
            raise NotFoundError("Student not found")
        logger.info("Deleted student %s and their attendance", student.student_code)


class TeacherService:
    """Use case: register and maintain teachers."""

    def __init__(self, teachers: TeacherRepository, *, code_prefix: str = DEFAULT_TEACHER_CODE_PREFIX):
        self._teachers = teachers
        self._code_prefix = code_prefix

    def list_teachers(self) -> Sequence[Teacher]:
        return self._teachers.list_all()

    def get_teacher(self, teacher_id: int) -> Teacher:
        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def register_teacher(
        self,
        *,
        name: Any,
        id_card_number: Any,
        phone: Any,
        sex: Any,
        photo: Any = None,
    ) -> Teacher:
        name = require_non_empty(name, "name")
        id_card_number = require_non_empty(id_card_number, "id_card_number")
        phone = require_phone(phone, "phone")
        sex = require_non_empty(sex, "sex")
        photo = optional_photo(photo)

        for _ in range(_CODE_ATTEMPTS):
            seq = self._teachers.next_sequence(self._code_prefix)
            code = f"{self._code_prefix}{seq:0{TEACHER_SEQUENCE_WIDTH}d}"
            try:
                teacher_id = self._teachers.create(
                    teacher_code=code,
                    name=name,
                    id_card_number=id_card_number,
                    phone=phone,
                    sex=sex,
                    photo=photo,
                    qr_code=make_qr_data_url(code),
                )
            except DuplicateKeyError:
                logger.warning("Teacher code %s taken concurrently, retrying", code)
                continue
            logger.info("Registered teacher %s (%s)", code, name)
            return self.get_teacher(teacher_id)

        raise ValidationError("Could not allocate a teacher code, please retry")

    def update_teacher(
        self,
        teacher_id: int,
        *,
        name: Any,
        id_card_number: Any,
        phone: Any,
        sex: Any,
        photo: Any = UNCHANGED,
    ) -> Teacher:
        current = self.get_teacher(teacher_id)
        name = require_non_empty(name, "name")
        id_card_number = require_non_empty(id_card_number, "id_card_number")
        phone = require_phone(phone, "phone")
        sex = require_non_empty(sex, "sex")
        photo = current.photo if photo is UNCHANGED else optional_photo(photo)

        self._teachers.update(
            teacher_id=current.id,
            name=name,
            id_card_number=id_card_number,
            phone=phone,
            sex=sex,
            photo=photo,
        )
        return self.get_teacher(current.id)

    def delete_teacher(self, teacher_id: int) -> None:
        teacher = self.get_teacher(teacher_id)
        if not self._teachers.delete_by_id(teacher.id):
            raise NotFoundError("Teacher not found")
        logger.info("Deleted teacher %s and their attendance", teacher.teacher_code)
