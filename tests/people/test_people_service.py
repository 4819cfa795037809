import pytest

from school_attendance.core.exceptions import NotFoundError, ValidationError

PHOTO = "data:image/png;base64,iVBORw0KGgo="


def _register(container, name="Ama", **overrides):
    data = dict(name=name, class_name="Form 1A", parent_phone="0244000001")
    data.update(overrides)
    return container.student_service.register_student(**data)


def test_student_codes_follow_year_and_sequence(container, year):
    first = _register(container)
    second = _register(container, name="Kofi")

    assert first.student_code == "MPASAT2601"
    assert second.student_code == "MPASAT2602"
    assert first.academic_year_id == year.academic_year_id
    assert first.qr_code.startswith("data:image/png;base64,")


def test_sequence_continues_after_deletion_of_earlier_student(container, year):
    first = _register(container)
    second = _register(container, name="Kofi")
    container.student_service.delete_student(first.id)

    third = _register(container, name="Esi")
    assert third.student_code == "MPASAT2603"
    assert second.student_code != third.student_code


def test_teacher_codes_are_three_digit(container):
    teacher = container.teacher_service.register_teacher(
        name="Grace", id_card_number="GHA-1", phone="0244000101", sex="F"
    )
    assert teacher.teacher_code == "MPT001"
    assert teacher.to_dict()["teacher_id"] == "MPT001"


def test_registration_requires_an_active_year(container):
    with pytest.raises(ValidationError):
        _register(container)


@pytest.mark.parametrize(
    "overrides",
    [{"name": ""}, {"class_name": " "}, {"parent_phone": "123"}, {"photo": "not-a-data-url"}],
)
def test_student_payload_validation(container, year, overrides):
    with pytest.raises(ValidationError):
        _register(container, **overrides)


def test_teacher_payload_validation(container):
    with pytest.raises(ValidationError):
        container.teacher_service.register_teacher(name="Grace", id_card_number="", phone="0244000101", sex="F")
    with pytest.raises(ValidationError):
        container.teacher_service.register_teacher(name="Grace", id_card_number="GHA-1", phone="0244000101", sex="")


def test_update_keeps_photo_and_code_unless_given(container, year):
    student = _register(container, photo=PHOTO)

    updated = container.student_service.update_student(
        student.id, name="Ama Mensah", class_name="Form 2A", parent_phone="0244000009"
    )
    assert updated.photo == PHOTO
    assert updated.student_code == student.student_code
    assert updated.class_name == "Form 2A"

    cleared = container.student_service.update_student(
        student.id, name="Ama Mensah", class_name="Form 2A", parent_phone="0244000009", photo=None
    )
    assert cleared.photo is None


def test_missing_people_raise_not_found(container):
    with pytest.raises(NotFoundError):
        container.student_service.get_student(42)
    with pytest.raises(NotFoundError):
        container.teacher_service.delete_teacher(42)


def test_resolver_finds_students_and_teachers(container, year):
    student = _register(container)
    teacher = container.teacher_service.register_teacher(
        name="Grace", id_card_number="GHA-1", phone="0244000101", sex="F"
    )

    assert container.resolver.resolve(f"  {student.student_code} ").id == student.id
    assert container.resolver.resolve(teacher.teacher_code).id == teacher.id
    with pytest.raises(NotFoundError):
        container.resolver.resolve("MPASAT9999")
