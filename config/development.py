import os

from config import env_list, env_optional_int

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

# "mysql" or "memory" (no database needed, data is lost on restart)
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

AUTH_ENABLED = bool(int(os.getenv("AUTH_ENABLED", "0")))
ADMIN_API_KEYS = env_list("ADMIN_API_KEYS", "dev-admin-key")
SCANNER_API_KEYS = env_list("SCANNER_API_KEYS", "dev-scanner-key")

CORS_ORIGINS = env_list("CORS_ORIGINS", "*")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "")

LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "0"))
MAX_CLIENT_SKEW_MINUTES = env_optional_int("MAX_CLIENT_SKEW_MINUTES")
MIN_DEPARTURE_GAP_MINUTES = int(os.getenv("MIN_DEPARTURE_GAP_MINUTES", "1"))

STUDENT_CODE_PREFIX = os.getenv("STUDENT_CODE_PREFIX", "MPASAT")
TEACHER_CODE_PREFIX = os.getenv("TEACHER_CODE_PREFIX", "MPT")

DEFAULT_SCHOOL_START_TIME = os.getenv("DEFAULT_SCHOOL_START_TIME", "08:00")
DEFAULT_SCHOOL_END_TIME = os.getenv("DEFAULT_SCHOOL_END_TIME", "15:00")

# Photos travel as data URLs inside JSON bodies
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(8 * 1024 * 1024)))
