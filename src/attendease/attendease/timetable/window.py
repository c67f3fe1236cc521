from __future__ import annotations

from datetime import timedelta

from ..core.enums import RejectReason
from .model import TimeWindow, WindowCheck


def validate_window(window: TimeWindow, *, max_duration: timedelta) -> WindowCheck:
    """Check that ``window`` ends after it starts and is not longer than ``max_duration``.

    A duration exactly equal to the maximum is accepted.
    """
    if window.end <= window.start:
        return WindowCheck(ok=False, reason=RejectReason.INVALID_WINDOW)
    if window.duration > max_duration:
        return WindowCheck(ok=False, reason=RejectReason.WINDOW_TOO_LONG)
    return WindowCheck(ok=True)


def overlaps(a: TimeWindow, b: TimeWindow) -> bool:
    """Closed-open overlap test: back-to-back windows (a.end == b.start) do not overlap."""
    return a.start < b.end and b.start < a.end
