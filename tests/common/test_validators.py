from datetime import time

import pytest

from school_attendance.common.datetime_utils import parse_clock_time, parse_hhmm
from school_attendance.common.validators import optional_photo, require_non_empty, require_phone
from school_attendance.core.exceptions import ValidationError


def test_phone_accepts_nine_to_fifteen_digits():
    assert require_phone("024 400 0001", "phone") == "0244000001"
    with pytest.raises(ValidationError):
        require_phone("12345678", "phone")
    with pytest.raises(ValidationError):
        require_phone("1" * 16, "phone")


def test_required_text_is_stripped():
    assert require_non_empty("  Ama ", "name") == "Ama"
    with pytest.raises(ValidationError, match="name is required"):
        require_non_empty("  ", "name")


def test_photo_must_be_an_image_data_url():
    assert optional_photo("") is None
    assert optional_photo("data:image/png;base64,AAAA").startswith("data:image/")
    with pytest.raises(ValidationError):
        optional_photo("http://example.com/a.png")


def test_time_parsers():
    assert parse_hhmm("08:30") == time(8, 30)
    assert parse_clock_time("15:10") == time(15, 10)
    assert parse_clock_time("15:10:59") == time(15, 10, 59)
    for bad in ("8:30", "24:00", "08:60", "", None):
        with pytest.raises(ValidationError):
            parse_hhmm(bad)
