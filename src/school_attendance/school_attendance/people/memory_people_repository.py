from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.memory_attendance_repository import drop_person_events
from ..core.enums import PersonType
from ..core.exceptions import DuplicateKeyError
from ..database.memory import MemoryDatabase
from .model import Student, Teacher
from .repository import StudentRepository, TeacherRepository

STUDENTS = "students"
TEACHERS = "teachers"
STUDENT_CODES = "students.student_code"
TEACHER_CODES = "teachers.teacher_code"


def _max_suffix(codes, code_base: str) -> int:
    best = 0
    for code in codes:
        if not code.startswith(code_base):
            continue
        suffix = code[len(code_base):]
        if suffix.isdigit():
            best = max(best, int(suffix))
    return best


class MemoryStudentRepository(StudentRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict[int, Student]:
        return self._db.table(STUDENTS)

    @property
    def _codes(self) -> dict[str, int]:
        return self._db.index(STUDENT_CODES)

    def list_all(self, *, academic_year_id: Optional[int] = None) -> Sequence[Student]:
        with self._db.lock:
            items = list(self._rows.values())
        if academic_year_id is not None:
            items = [s for s in items if s.academic_year_id == int(academic_year_id)]
        items.sort(key=lambda s: s.id, reverse=True)
        return items

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with self._db.lock:
            return self._rows.get(int(student_id))

    def get_by_code(self, code: str) -> Optional[Student]:
        with self._db.lock:
            student_id = self._codes.get(code)
            return None if student_id is None else self._rows.get(student_id)

    def count(self, *, academic_year_id: Optional[int] = None) -> int:
        return len(self.list_all(academic_year_id=academic_year_id))

    def next_sequence(self, code_base: str) -> int:
        with self._db.lock:
            return _max_suffix((s.student_code for s in self._rows.values()), code_base) + 1

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
        with self._db.lock:
            if student_code in self._codes:
                raise DuplicateKeyError(student_code)
            student_id = self._db.next_id(STUDENTS)
            self._codes[student_code] = student_id
            self._rows[student_id] = Student(
                id=student_id,
                student_code=student_code,
                name=name,
                class_name=class_name,
                parent_phone=parent_phone,
                academic_year_id=int(academic_year_id),
                photo=photo,
                qr_code=qr_code,
                created_at=datetime.now(),
            )
            return student_id

    def update(
        self,
        *,
        student_id: int,
        name: str,
        class_name: str,
        parent_phone: str,
        photo: Optional[str],
    ) -> bool:
        with self._db.lock:
            current = self._rows.get(int(student_id))
            if not current:
                return False
            self._rows[current.id] = replace(
                current, name=name, class_name=class_name, parent_phone=parent_phone, photo=photo
            )
            return True

    def delete_by_id(self, student_id: int) -> bool:
        with self._db.lock:
            student = self._rows.pop(int(student_id), None)
            if student is None:
                return False
            self._codes.pop(student.student_code, None)
            drop_person_events(self._db, PersonType.STUDENT, student.id)
            return True


class MemoryTeacherRepository(TeacherRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict[int, Teacher]:
        return self._db.table(TEACHERS)

    @property
    def _codes(self) -> dict[str, int]:
        return self._db.index(TEACHER_CODES)

    def list_all(self) -> Sequence[Teacher]:
        with self._db.lock:
            items = list(self._rows.values())
        items.sort(key=lambda t: t.id, reverse=True)
        return items

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with self._db.lock:
            return self._rows.get(int(teacher_id))

    def get_by_code(self, code: str) -> Optional[Teacher]:
        with self._db.lock:
            teacher_id = self._codes.get(code)
            return None if teacher_id is None else self._rows.get(teacher_id)

    def next_sequence(self, code_base: str) -> int:
        with self._db.lock:
            return _max_suffix((t.teacher_code for t in self._rows.values()), code_base) + 1

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
        with self._db.lock:
            if teacher_code in self._codes:
                raise DuplicateKeyError(teacher_code)
            teacher_id = self._db.next_id(TEACHERS)
            self._codes[teacher_code] = teacher_id
            self._rows[teacher_id] = Teacher(
                id=teacher_id,
                teacher_code=teacher_code,
                name=name,
                id_card_number=id_card_number,
                phone=phone,
                sex=sex,
                photo=photo,
                qr_code=qr_code,
                created_at=datetime.now(),
            )
            return teacher_id

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
        with self._db.lock:
            current = self._rows.get(int(teacher_id))
            if not current:
                return False
            self._rows[current.id] = replace(
                current, name=name, id_card_number=id_card_number, phone=phone, sex=sex, photo=photo
            )
            return True

    def delete_by_id(self, teacher_id: int) -> bool:
        with self._db.lock:
            teacher = self._rows.pop(int(teacher_id), None)
            if teacher is None:
                return False
            self._codes.pop(teacher.teacher_code, None)
            drop_person_events(self._db, PersonType.TEACHER, teacher.id)
            return True
