import pytest

from school_attendance.core.exceptions import NotFoundError, ValidationError


def test_class_crud(container):
    service = container.class_service
    created = service.create_class(name="Form 1A", code="F1A")
    assert created.to_dict() == {"id": created.class_id, "name": "Form 1A", "code": "F1A"}

    renamed = service.update_class(created.class_id, name="Form One A", code="F1A")
    assert renamed.name == "Form One A"

    service.delete_class(created.class_id)
    with pytest.raises(NotFoundError):
        service.get_class(created.class_id)


def test_class_code_is_unique(container):
    service = container.class_service
    service.create_class(name="Form 1A", code="F1A")
    other = service.create_class(name="Form 1B", code="F1B")

    with pytest.raises(ValidationError):
        service.create_class(name="Again", code="F1A")
    with pytest.raises(ValidationError):
        service.update_class(other.class_id, name="Form 1B", code="F1A")


def test_class_fields_are_required(container):
    with pytest.raises(ValidationError):
        container.class_service.create_class(name="", code="F1A")
