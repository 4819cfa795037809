from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from school_attendance.container import Container, build_container
from school_attendance.database.bootstrap import apply_seed_sql

DEMO_STUDENTS = [
    {"name": "Ama Mensah", "class_name": "Form 1A", "parent_phone": "0244000001"},
    {"name": "Kofi Boateng", "class_name": "Form 1A", "parent_phone": "0244000002"},
    {"name": "Esi Owusu", "class_name": "Form 2A", "parent_phone": "0244000003"},
]

DEMO_TEACHERS = [
    {"name": "Grace Asante", "id_card_number": "GHA-000000001-1", "phone": "0244000101", "sex": "F"},
]


def ensure_demo_people(container: Container) -> None:
    """Register demo students/teachers through the services so codes and QR images are generated."""
    if not container.student_service.list_students():
        for data in DEMO_STUDENTS:
            container.student_service.register_student(**data)
    if not container.teacher_service.list_teachers():
        for data in DEMO_TEACHERS:
            container.teacher_service.register_teacher(**data)


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = REPO_ROOT / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_demo_people(build_container(db_config=db_config, backend="mysql"))

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
