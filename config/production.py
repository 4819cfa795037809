import os

from config import env_list, env_optional_int

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

STORAGE_BACKEND = "mysql"

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

AUTH_ENABLED = True
ADMIN_API_KEYS = env_list("ADMIN_API_KEYS")
SCANNER_API_KEYS = env_list("SCANNER_API_KEYS")

CORS_ORIGINS = env_list("CORS_ORIGINS")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/school_attendance.log")

LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "0"))
MAX_CLIENT_SKEW_MINUTES = env_optional_int("MAX_CLIENT_SKEW_MINUTES")
MIN_DEPARTURE_GAP_MINUTES = int(os.getenv("MIN_DEPARTURE_GAP_MINUTES", "1"))

STUDENT_CODE_PREFIX = os.getenv("STUDENT_CODE_PREFIX", "MPASAT")
TEACHER_CODE_PREFIX = os.getenv("TEACHER_CODE_PREFIX", "MPT")

DEFAULT_SCHOOL_START_TIME = os.getenv("DEFAULT_SCHOOL_START_TIME", "08:00")
DEFAULT_SCHOOL_END_TIME = os.getenv("DEFAULT_SCHOOL_END_TIME", "15:00")

MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(8 * 1024 * 1024)))
