from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .academic_years.memory_academic_year_repository import MemoryAcademicYearRepository
from .academic_years.mysql_academic_year_repository import MySQLAcademicYearRepository
from .academic_years.repository import AcademicYearRepository
from .academic_years.service import AcademicYearService
from .attendance.factory import ArrivalStrategyFactory
from .attendance.memory_attendance_repository import MemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.memory_class_repository import MemoryClassRepository
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .core.constants import (
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_MIN_DEPARTURE_GAP_MINUTES,
    DEFAULT_SCHOOL_END_TIME,
    DEFAULT_SCHOOL_START_TIME,
    DEFAULT_STUDENT_CODE_PREFIX,
    DEFAULT_TEACHER_CODE_PREFIX,
)
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import MemoryDatabase
from .people.memory_people_repository import MemoryStudentRepository, MemoryTeacherRepository
from .people.mysql_student_repository import MySQLStudentRepository
from .people.mysql_teacher_repository import MySQLTeacherRepository
from .people.repository import StudentRepository, TeacherRepository
from .people.resolver import IdentityResolver
from .people.service import StudentService, TeacherService
from .reports.service import AttendanceReportService
from .settings.memory_settings_repository import MemorySettingsRepository
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService


@dataclass(frozen=True)
class EngineOptions:
    """Tunables read from the settings module."""

    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    max_client_skew_minutes: Optional[int] = None
    min_departure_gap_minutes: int = DEFAULT_MIN_DEPARTURE_GAP_MINUTES
    student_code_prefix: str = DEFAULT_STUDENT_CODE_PREFIX
    teacher_code_prefix: str = DEFAULT_TEACHER_CODE_PREFIX
    default_school_start_time: str = DEFAULT_SCHOOL_START_TIME
    default_school_end_time: str = DEFAULT_SCHOOL_END_TIME


@dataclass(frozen=True)
class Container:
    years_repo: AcademicYearRepository
    classes_repo: ClassRepository
    students_repo: StudentRepository
    teachers_repo: TeacherRepository
    attendance_repo: AttendanceRepository
    settings_repo: SettingsRepository

    academic_year_service: AcademicYearService
    class_service: ClassService
    student_service: StudentService
    teacher_service: TeacherService
    resolver: IdentityResolver
    settings_service: SettingsService
    attendance_service: AttendanceService
    report_service: AttendanceReportService


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = "mysql",
    options: Optional[EngineOptions] = None,
) -> Container:
    options = options or EngineOptions()

    if backend == "memory":
        db = MemoryDatabase()
        years_repo = MemoryAcademicYearRepository(db)
        classes_repo = MemoryClassRepository(db)
        students_repo = MemoryStudentRepository(db)
        teachers_repo = MemoryTeacherRepository(db)
        attendance_repo = MemoryAttendanceRepository(db)
        settings_repo = MemorySettingsRepository(db)
    elif backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        years_repo = MySQLAcademicYearRepository(conn)
        classes_repo = MySQLClassRepository(conn)
        students_repo = MySQLStudentRepository(conn)
        teachers_repo = MySQLTeacherRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        settings_repo = MySQLSettingsRepository(conn)
    else:
        raise ValueError(f"Unknown storage backend {backend!r}")

    resolver = IdentityResolver(students_repo, teachers_repo)
    settings_service = SettingsService(
        settings_repo,
        default_start=options.default_school_start_time,
        default_end=options.default_school_end_time,
    )

    return Container(
        years_repo=years_repo,
        classes_repo=classes_repo,
        students_repo=students_repo,
        teachers_repo=teachers_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        academic_year_service=AcademicYearService(years_repo, students_repo),
        class_service=ClassService(classes_repo),
        student_service=StudentService(students_repo, years_repo, code_prefix=options.student_code_prefix),
        teacher_service=TeacherService(teachers_repo, code_prefix=options.teacher_code_prefix),
        resolver=resolver,
        settings_service=settings_service,
        attendance_service=AttendanceService(
            attendance_repo,
            resolver,
            settings_service,
            strategy_factory=ArrivalStrategyFactory(grace_minutes=options.late_grace_minutes),
            max_client_skew_minutes=options.max_client_skew_minutes,
            min_departure_gap_minutes=options.min_departure_gap_minutes,
        ),
        report_service=AttendanceReportService(attendance_repo, students_repo),
    )
