from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .academic_years.controller import register as register_academic_years
from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .container import Container, EngineOptions, build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    RejectedError,
    ValidationError,
)
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .people.controller import register as register_people
from .settings.controller import register as register_settings

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"

# Most specific first: subclasses of DomainError map to their own status.
_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (RejectedError, 409),
)

_SETTING_KEYS = (
    "DEBUG",
    "TESTING",
    "STORAGE_BACKEND",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "AUTH_ENABLED",
    "ADMIN_API_KEYS",
    "SCANNER_API_KEYS",
    "CORS_ORIGINS",
    "LOG_LEVEL",
    "LOG_FILE",
    "LATE_GRACE_MINUTES",
    "MAX_CLIENT_SKEW_MINUTES",
    "MIN_DEPARTURE_GAP_MINUTES",
    "STUDENT_CODE_PREFIX",
    "TEACHER_CODE_PREFIX",
    "DEFAULT_SCHOOL_START_TIME",
    "DEFAULT_SCHOOL_END_TIME",
    "MAX_CONTENT_LENGTH",
)


def setup_logging(app: Flask) -> None:
    """Route app and package loggers to stderr and, when LOG_FILE is set, a file."""
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    package_logger = logging.getLogger(__package__)
    package_logger.setLevel(level)
    app.logger.setLevel(level)

    if not package_logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)

    log_file = app.config.get("LOG_FILE")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        package_logger.addHandler(file_handler)
        app.logger.addHandler(file_handler)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def domain_error(error: DomainError):
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(error, cls)), 400)
        return jsonify({"success": False, "message": str(error)}), status

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"success": False, "message": error.description}), error.code

    @app.errorhandler(Exception)
    def unexpected_error(error: Exception):
        app.logger.exception("Unhandled error: %s", error)
        return jsonify({"success": False, "message": "Internal server error"}), 500


def _load_settings(app: Flask) -> dict:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    for key in _SETTING_KEYS:
        if hasattr(settings, key):
            app.config[key] = getattr(settings, key)
    app.config["SETTINGS_MODULE"] = settings_module
    return getattr(settings, "DB_CONFIG", {})


def _options_from(app: Flask) -> EngineOptions:
    defaults = EngineOptions()
    return EngineOptions(
        late_grace_minutes=int(app.config.get("LATE_GRACE_MINUTES", defaults.late_grace_minutes)),
        max_client_skew_minutes=app.config.get("MAX_CLIENT_SKEW_MINUTES"),
        min_departure_gap_minutes=int(
            app.config.get("MIN_DEPARTURE_GAP_MINUTES", defaults.min_departure_gap_minutes)
        ),
        student_code_prefix=app.config.get("STUDENT_CODE_PREFIX", defaults.student_code_prefix),
        teacher_code_prefix=app.config.get("TEACHER_CODE_PREFIX", defaults.teacher_code_prefix),
        default_school_start_time=app.config.get("DEFAULT_SCHOOL_START_TIME", defaults.default_school_start_time),
        default_school_end_time=app.config.get("DEFAULT_SCHOOL_END_TIME", defaults.default_school_end_time),
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    db_config = _load_settings(app)
    setup_logging(app)
    CORS(app, origins=app.config.get("CORS_ORIGINS") or ["*"])

    backend = app.config.get("STORAGE_BACKEND", "mysql")
    app.logger.info("settings=%s backend=%s", app.config["SETTINGS_MODULE"], backend)

    if container is None and backend == "mysql":
        if app.config.get("DEBUG"):
            app.logger.info(
                "db=%s@%s:%s/%s",
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )
        if app.config.get("AUTO_INIT_DB"):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if app.config.get("AUTO_SEED_DB"):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            app.logger.info("demo seed ready")

    if container is None:
        container = build_container(db_config=db_config, backend=backend, options=_options_from(app))
    app.extensions["school_attendance"] = container

    register_error_handlers(app)
    register_attendance(app, container)
    register_people(app, container)
    register_academic_years(app, container)
    register_classes(app, container)
    register_settings(app, container)

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"success": True, "status": "healthy", "service": "school-attendance"})

    return app
