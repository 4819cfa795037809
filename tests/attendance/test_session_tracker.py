from __future__ import annotations

import threading
from datetime import date, datetime, time

import pytest

from school_attendance.attendance.memory_attendance_repository import MemoryAttendanceRepository
from school_attendance.attendance.service import AttendanceService
from school_attendance.core.enums import AttendanceStatus, CheckInType, PersonType
from school_attendance.core.exceptions import (
    DuplicateEventError,
    NotFoundError,
    RejectedError,
    ValidationError,
)
from school_attendance.database.memory import MemoryDatabase

DAY = "2026-03-02"


@pytest.fixture
def student(container, year):
    return container.student_service.register_student(
        name="Ama Mensah", class_name="Form 1A", parent_phone="0244000001"
    )


@pytest.fixture
def teacher(container):
    return container.teacher_service.register_teacher(
        name="Grace Asante", id_card_number="GHA-1", phone="0244000101", sex="F"
    )


def _events(container, student):
    return container.attendance_repo.list_for_person_and_date(
        person_type=PersonType.STUDENT, person_id=student.id, attendance_date=date(2026, 3, 2)
    )


def test_first_scan_is_a_present_arrival(container, student, fixed_now):
    result = container.attendance_service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now)

    assert result.event.check_in_type == CheckInType.ARRIVAL
    assert result.event.status == AttendanceStatus.PRESENT
    assert result.event.minutes_late == 0
    assert result.to_dict()["minutes_late"] == 0
    assert result.to_dict()["student_id"] == student.student_code


def test_second_scan_is_departure_and_third_is_rejected(container, student, fixed_now):
    service = container.attendance_service
    service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now)

    departure = service.record_scan(student.student_code, DAY, "15:10:00", now=fixed_now)
    assert departure.event.check_in_type == CheckInType.DEPARTURE
    assert departure.event.status is None
    assert [e["check_in_type"] for e in departure.to_dict()["attendance"]] == ["arrival", "departure"]

    with pytest.raises(RejectedError):
        service.record_scan(student.student_code, DAY, "15:30:00", now=fixed_now)

    assert len(_events(container, student)) == 2


def test_late_arrival_records_minutes(container, student, fixed_now):
    result = container.attendance_service.record_scan(student.student_code, DAY, "08:17:00", now=fixed_now)

    assert result.event.status == AttendanceStatus.LATE
    assert result.event.minutes_late == 17


def test_departure_before_arrival_is_rejected(container, student, fixed_now):
    service = container.attendance_service
    service.record_scan(student.student_code, DAY, "08:00:00", now=fixed_now)

    with pytest.raises(RejectedError):
        service.record_scan(student.student_code, DAY, "07:30:00", now=fixed_now)

    assert len(_events(container, student)) == 1


def test_rapid_duplicate_scans_record_one_event(container, student, fixed_now):
    service = container.attendance_service
    outcomes = []
    for _ in range(5):
        try:
            outcomes.append(service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now))
        except RejectedError:
            outcomes.append(None)

    events = _events(container, student)
    assert [e.check_in_type for e in events] == [CheckInType.ARRIVAL]
    assert outcomes[0].event.is_arrival
    assert outcomes[1:] == [None, None, None, None]


def test_departure_inside_minimum_gap_is_rejected(container, student, fixed_now):
    service = container.attendance_service
    service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now)

    with pytest.raises(RejectedError, match="please wait"):
        service.record_scan(student.student_code, DAY, "07:55:40", now=fixed_now)

    departure = service.record_scan(student.student_code, DAY, "07:56:00", now=fixed_now)
    assert departure.event.check_in_type == CheckInType.DEPARTURE


def test_zero_gap_still_needs_a_later_departure(container, student, fixed_now):
    service = AttendanceService(
        container.attendance_repo,
        container.resolver,
        container.settings_service,
        min_departure_gap_minutes=0,
    )
    service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now)

    with pytest.raises(RejectedError):
        service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now)

    departure = service.record_scan(student.student_code, DAY, "07:55:01", now=fixed_now)
    assert departure.event.check_in_type == CheckInType.DEPARTURE


def test_concurrent_scans_produce_one_arrival(container, student, fixed_now):
    service = container.attendance_service
    barrier = threading.Barrier(8)
    results, rejected = [], []

    def scan():
        barrier.wait()
        try:
            results.append(service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now))
        except RejectedError:
            rejected.append(True)

    threads = [threading.Thread(target=scan) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    events = _events(container, student)
    assert len(events) == 1
    assert sum(1 for e in events if e.check_in_type == CheckInType.ARRIVAL) == 1
    assert len(results) == 1
    assert len(rejected) == 7


def test_unique_key_violation_surfaces_as_rejection(container, student, fixed_now):
    class BlindRepository(MemoryAttendanceRepository):
        # Pretend another process inserted between our read and write.
        def list_for_person_and_date(self, **kwargs):
            return []

    service = AttendanceService(BlindRepository(MemoryDatabase()), container.resolver, container.settings_service)
    service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now)

    with pytest.raises(RejectedError):
        service.record_scan(student.student_code, DAY, "07:56:00", now=fixed_now)


def test_memory_store_checks_arrival_before_departure():
    repo = MemoryAttendanceRepository(MemoryDatabase())
    person = dict(person_type=PersonType.STUDENT, person_id=1, attendance_date=date(2026, 3, 2))
    recorded = datetime(2026, 3, 2, 8, 0)

    assert repo.insert_departure(
        **person, check_in_time=time(8, 0), latest_arrival=time(7, 59), recorded_at=recorded
    ) is None

    repo.insert_arrival(
        **person, check_in_time=time(7, 59, 30), status=AttendanceStatus.PRESENT, minutes_late=0, recorded_at=recorded
    )
    assert repo.insert_departure(
        **person, check_in_time=time(8, 0), latest_arrival=time(7, 59), recorded_at=recorded
    ) is None
    assert repo.insert_departure(
        **person, check_in_time=time(8, 0, 30), latest_arrival=time(7, 59, 30), recorded_at=recorded
    ).check_in_type == CheckInType.DEPARTURE


def test_memory_store_enforces_unique_arrival():
    repo = MemoryAttendanceRepository(MemoryDatabase())
    kwargs = dict(
        person_type=PersonType.STUDENT,
        person_id=1,
        attendance_date=date(2026, 3, 2),
        check_in_time=time(7, 55),
        status=AttendanceStatus.PRESENT,
        minutes_late=None,
        recorded_at=datetime(2026, 3, 2, 7, 55),
    )
    repo.insert_arrival(**kwargs)

    with pytest.raises(DuplicateEventError):
        repo.insert_arrival(**kwargs)


def test_unknown_and_empty_codes(container, year, fixed_now):
    with pytest.raises(NotFoundError, match="Invalid QR code"):
        container.attendance_service.record_scan("NOPE", DAY, "07:55:00", now=fixed_now)
    with pytest.raises(ValidationError):
        container.attendance_service.record_scan("   ", DAY, "07:55:00", now=fixed_now)


def test_teacher_scan_returns_teacher_id(container, teacher, fixed_now):
    body = container.attendance_service.record_scan(teacher.teacher_code, DAY, "08:02:00", now=fixed_now).to_dict()

    assert body["person_type"] == "teacher"
    assert body["teacher_id"] == teacher.teacher_code
    assert body["status"] == "late"
    assert body["minutes_late"] == 2
    assert "attendance" not in body


def test_missing_client_clock_falls_back_to_server_time(container, student, fixed_now):
    result = container.attendance_service.record_scan(student.student_code, now=fixed_now)

    assert result.event.attendance_date == fixed_now.date()
    assert result.event.check_in_time == time(7, 55)


def test_client_date_and_time_come_together(container, student, fixed_now):
    with pytest.raises(ValidationError):
        container.attendance_service.record_scan(student.student_code, DAY, None, now=fixed_now)
    with pytest.raises(ValidationError):
        container.attendance_service.record_scan(student.student_code, None, "07:55:00", now=fixed_now)

    assert _events(container, student) == []


def test_skew_guard_rejects_far_off_device_clock(container, student, fixed_now):
    service = AttendanceService(
        container.attendance_repo,
        container.resolver,
        container.settings_service,
        max_client_skew_minutes=10,
    )

    with pytest.raises(ValidationError):
        service.record_scan(student.student_code, DAY, "09:30:00", now=fixed_now)

    assert service.record_scan(student.student_code, DAY, "08:00:00", now=fixed_now).event.is_arrival


def test_settings_change_does_not_reclassify_past_arrivals(container, student, fixed_now):
    container.attendance_service.record_scan(student.student_code, DAY, "08:30:00", now=fixed_now)
    container.settings_service.set(school_start_time="09:00", school_end_time="15:00")

    arrival = _events(container, student)[0]
    assert arrival.status == AttendanceStatus.LATE
    assert arrival.minutes_late == 30


def test_deleting_a_student_removes_their_events(container, student, fixed_now):
    container.attendance_service.record_scan(student.student_code, DAY, "07:55:00", now=fixed_now)
    container.student_service.delete_student(student.id)

    assert _events(container, student) == []
