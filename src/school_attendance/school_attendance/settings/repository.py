from __future__ import annotations

from datetime import time
from typing import Optional, Protocol

from .model import Settings


class SettingsRepository(Protocol):
    def get(self) -> Optional[Settings]:
        """The stored singleton row, or None when nothing was ever saved."""

        raise NotImplementedError

    def save(self, *, school_start_time: time, school_end_time: time) -> None:
        raise NotImplementedError
