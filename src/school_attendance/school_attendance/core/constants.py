"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SCHOOL_START_TIME = "08:00"
DEFAULT_SCHOOL_END_TIME = "15:00"
DEFAULT_LATE_GRACE_MINUTES = 0
DEFAULT_MIN_DEPARTURE_GAP_MINUTES = 1

DEFAULT_STUDENT_CODE_PREFIX = "MPASAT"
DEFAULT_TEACHER_CODE_PREFIX = "MPT"
STUDENT_SEQUENCE_WIDTH = 2
TEACHER_SEQUENCE_WIDTH = 3

PHONE_PATTERN = r"^\d{9,15}$"

MAX_EVENTS_PER_DAY = 2
