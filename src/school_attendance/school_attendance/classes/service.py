from __future__ import annotations

from typing import Any, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from .model import SchoolClass
from .repository import ClassRepository


class ClassService:
    """Use case: the class registry shown by the registration form."""

    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list_classes(self) -> Sequence[SchoolClass]:
        return self._classes.list_all()

    def get_class(self, class_id: int) -> SchoolClass:
        item = self._classes.get_by_id(class_id)
        if not item:
            raise NotFoundError("Class not found")
        return item

    def create_class(self, *, name: Any, code: Any) -> SchoolClass:
        name = require_non_empty(name, "name")
        code = require_non_empty(code, "code")
        try:
            class_id = self._classes.create(name=name, code=code)
        except DuplicateKeyError:
            raise ValidationError(f"Class code {code} already exists")
        return self.get_class(class_id)

    def update_class(self, class_id: int, *, name: Any, code: Any) -> SchoolClass:
        current = self.get_class(class_id)
        name = require_non_empty(name, "name")
        code = require_non_empty(code, "code")
        try:
            self._classes.update(class_id=current.class_id, name=name, code=code)
        except DuplicateKeyError:
            raise ValidationError(f"Class code {code} already exists")
        return self.get_class(current.class_id)

    def delete_class(self, class_id: int) -> None:
        if not self._classes.delete_by_id(self.get_class(class_id).class_id):
            raise NotFoundError("Class not found")
