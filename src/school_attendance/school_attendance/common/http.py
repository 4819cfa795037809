from __future__ import annotations

from datetime import date
from typing import Any

from flask import request

from ..core.exceptions import ValidationError
from .datetime_utils import now_local, parse_iso_date


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_date(name: str = "date") -> date:
    """Date from the query string; today when absent."""
    value: Any = request.args.get(name)
    if not value:
        return now_local().date()
    return parse_iso_date(value)
