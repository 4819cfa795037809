from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchoolClass:
    class_id: int
    name: str
    code: str

    def to_dict(self) -> dict:
        return {"id": self.class_id, "name": self.name, "code": self.code}
