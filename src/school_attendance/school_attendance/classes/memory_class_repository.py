from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import DuplicateKeyError
from ..database.memory import MemoryDatabase
from .model import SchoolClass
from .repository import ClassRepository

TABLE = "classes"


class MemoryClassRepository(ClassRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict[int, SchoolClass]:
        return self._db.table(TABLE)

    def _code_taken(self, code: str, *, except_id: Optional[int] = None) -> bool:
        return any(c.code == code and c.class_id != except_id for c in self._rows.values())

    def list_all(self) -> Sequence[SchoolClass]:
        with self._db.lock:
            items = list(self._rows.values())
        items.sort(key=lambda c: c.name)
        return items

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with self._db.lock:
            return self._rows.get(int(class_id))

    def create(self, *, name: str, code: str) -> int:
        with self._db.lock:
            if self._code_taken(code):
                raise DuplicateKeyError(code)
            class_id = self._db.next_id(TABLE)
            self._rows[class_id] = SchoolClass(class_id=class_id, name=name, code=code)
            return class_id

    def update(self, *, class_id: int, name: str, code: str) -> bool:
        with self._db.lock:
            if int(class_id) not in self._rows:
                return False
            if self._code_taken(code, except_id=int(class_id)):
                raise DuplicateKeyError(code)
            self._rows[int(class_id)] = SchoolClass(class_id=int(class_id), name=name, code=code)
            return True

    def delete_by_id(self, class_id: int) -> bool:
        with self._db.lock:
            return self._rows.pop(int(class_id), None) is not None
