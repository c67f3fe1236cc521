from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    FACULTY = "faculty"
    STUDENT = "student"
    PARENT = "parent"


class Weekday(str, Enum):
    """Teaching days of the weekly grid."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{value!r} is not a valid Weekday")
        return cls((value or "").strip().lower())

    @property
    def label(self) -> str:
        return self.value.capitalize()


class DayScope(str, Enum):
    """Which days of the weekly schedule a conflict rule scans."""

    SAME_DAY = "same_day"
    OTHER_DAYS = "other_days"
    ALL_DAYS = "all_days"


class RejectReason(str, Enum):
    """Why a proposed period was rejected."""

    INVALID_WINDOW = "INVALID_WINDOW"
    WINDOW_TOO_LONG = "WINDOW_TOO_LONG"
    SLOT_CONFLICT = "SLOT_CONFLICT"
    INSTRUCTOR_CONFLICT = "INSTRUCTOR_CONFLICT"
    ROOM_CONFLICT = "ROOM_CONFLICT"
