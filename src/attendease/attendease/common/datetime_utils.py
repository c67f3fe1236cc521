from __future__ import annotations

from datetime import datetime, time
from typing import Tuple

from ..core.constants import CLOCK_FORMATS, TIME_SLOT_SEPARATOR
from ..core.exceptions import ValidationError


def parse_clock(value: str) -> time:
    """Parse a wall-clock time such as ``"9:00 AM"`` or ``"14:30"``.

    Raises ValidationError when the value is not a string or no supported
    format matches.
    """
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Invalid time {value!r} (expected h:mm AM/PM or HH:MM)")
    v = " ".join((value or "").strip().upper().split())
    if not v:
        raise ValidationError("Time is required")

    for fmt in CLOCK_FORMATS:
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time {value!r} (expected h:mm AM/PM or HH:MM)")


def format_clock(value: time) -> str:
    """Format a time the way the timetable grid shows it: ``9:00 AM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def parse_time_slot(value: str) -> Tuple[time, time]:
    """Split ``"9:00 AM - 10:00 AM"`` into its start and end times."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Invalid time slot {value!r} (expected 'start - end')")
    parts = (value or "").split(TIME_SLOT_SEPARATOR.strip())
    if len(parts) != 2:
        raise ValidationError(f"Invalid time slot {value!r} (expected 'start - end')")
    return parse_clock(parts[0]), parse_clock(parts[1])
