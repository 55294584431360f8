from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role. ADMIN users are not counted as attendance-eligible."""

    ADMIN = "ADMIN"
    USER = "USER"


class WorkMode(str, Enum):
    """Where the employee works from; also the type of a LocationConfig."""

    OFFICE = "OFFICE"
    HOME = "HOME"


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    HALF_DAY = "HALF_DAY"


class AttendanceState(str, Enum):
    """Lifecycle of a (user, date) pair, derived from the record collection."""

    NOT_CHECKED_IN = "NOT_CHECKED_IN"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
