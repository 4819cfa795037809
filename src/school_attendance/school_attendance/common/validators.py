from __future__ import annotations

import re
from typing import Any, Optional

from ..core.constants import PHONE_PATTERN
from ..core.exceptions import ValidationError

_PHONE = re.compile(PHONE_PATTERN)


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_phone(value: Any, field_name: str) -> str:
    digits = re.sub(r"\D", "", str(value or ""))
    if not digits:
        raise ValidationError(f"{field_name} is required")
    if not _PHONE.match(digits):
        raise ValidationError(f"{field_name} must be 9-15 digits")
    return digits


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_int(value, field_name)


def optional_photo(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    value = str(value)
    if not value.startswith("data:image/"):
        raise ValidationError("photo must be an image data URL")
    return value
