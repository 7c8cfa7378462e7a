from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Portal roles. Each one owns a home route."""

    ADMIN = "admin"
    FACULTY = "faculty"
    SBO = "sbo"
    STUDENT = "student"

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        """Case-sensitive lookup; unknown values map to None instead of raising."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


STAFF_ROLES = (Role.ADMIN, Role.FACULTY, Role.SBO)


class AttendanceStatus(str, Enum):
    """Status stored on an attendance row."""

    PARTIAL = "partial"
    PRESENT = "present"


class LoadStatus(str, Enum):
    """Outcome of restoring the current identity from the session store."""

    RESTORED = "restored"
    ABSENT = "absent"
    MALFORMED = "malformed"


class StatsPeriod(str, Enum):
    """Dashboard attendance-rate windows, each ending today."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
