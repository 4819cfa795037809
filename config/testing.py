import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance_test"),
}

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

AUTH_ENABLED = True
ADMIN_API_KEYS = ["test-admin-key"]
SCANNER_API_KEYS = ["test-scanner-key"]

CORS_ORIGINS = ["*"]

LOG_LEVEL = "WARNING"
LOG_FILE = ""

LATE_GRACE_MINUTES = 0
MAX_CLIENT_SKEW_MINUTES = None
MIN_DEPARTURE_GAP_MINUTES = 1

STUDENT_CODE_PREFIX = "MPASAT"
TEACHER_CODE_PREFIX = "MPT"

DEFAULT_SCHOOL_START_TIME = "08:00"
DEFAULT_SCHOOL_END_TIME = "15:00"

MAX_CONTENT_LENGTH = 8 * 1024 * 1024
