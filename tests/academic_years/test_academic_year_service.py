import pytest

from school_attendance.core.enums import AcademicYearStatus
from school_attendance.core.exceptions import NotFoundError, RejectedError, ValidationError


def test_first_year_becomes_active(container):
    year = container.academic_year_service.create_year(name="2025/2026", start_year=2025, end_year=2026)
    assert year.status == AcademicYearStatus.ACTIVE


def test_later_years_are_inactive_unless_requested(container, year):
    service = container.academic_year_service
    nxt = service.create_year(name="2026/2027", start_year=2026, end_year=2027)
    assert nxt.status == AcademicYearStatus.INACTIVE

    newest = service.create_year(name="2027/2028", start_year=2027, end_year=2028, status="active")
    statuses = {y.name: y.status for y in service.list_years()}
    assert statuses == {
        "2025/2026": AcademicYearStatus.INACTIVE,
        "2026/2027": AcademicYearStatus.INACTIVE,
        "2027/2028": AcademicYearStatus.ACTIVE,
    }
    assert service.get_active() == newest


def test_activating_by_update_keeps_a_single_active_year(container, year):
    service = container.academic_year_service
    nxt = service.create_year(name="2026/2027", start_year=2026, end_year=2027)

    service.update_year(nxt.academic_year_id, name="2026/2027", start_year=2026, end_year=2027, status="active")

    active = [y for y in service.list_years() if y.is_active]
    assert [y.academic_year_id for y in active] == [nxt.academic_year_id]


@pytest.mark.parametrize("start,end", [(2026, 2026), (2027, 2026), ("x", 2026)])
def test_year_bounds_are_validated(container, start, end):
    with pytest.raises(ValidationError):
        container.academic_year_service.create_year(name="bad", start_year=start, end_year=end)


def test_year_with_students_cannot_be_deleted(container, year):
    container.student_service.register_student(name="Ama", class_name="Form 1A", parent_phone="0244000001")

    with pytest.raises(RejectedError):
        container.academic_year_service.delete_year(year.academic_year_id)


def test_empty_year_can_be_deleted(container, year):
    container.academic_year_service.delete_year(year.academic_year_id)
    assert container.academic_year_service.list_years() == []


def test_resolve_scope(container):
    service = container.academic_year_service
    assert service.resolve_scope(None) is None

    first = service.create_year(name="2025/2026", start_year=2025, end_year=2026)
    second = service.create_year(name="2026/2027", start_year=2026, end_year=2027)

    assert service.resolve_scope(None) == first.academic_year_id
    assert service.resolve_scope(str(second.academic_year_id)) == second.academic_year_id
    with pytest.raises(NotFoundError):
        service.resolve_scope(999)
