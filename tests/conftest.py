from __future__ import annotations

from datetime import datetime

import pytest

from school_attendance.container import build_container
from school_attendance.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 7, 55, 0)


@pytest.fixture
def container():
    return build_container(backend="memory")


@pytest.fixture
def year(container):
    return container.academic_year_service.create_year(name="2025/2026", start_year=2025, end_year=2026)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers() -> dict:
    return {"X-API-Key": "test-admin-key"}


@pytest.fixture
def scanner_headers() -> dict:
    return {"Authorization": "Bearer test-scanner-key"}
