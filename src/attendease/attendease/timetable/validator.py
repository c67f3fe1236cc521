from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

from ..core.constants import DEFAULT_MAX_PERIOD_MINUTES
from ..core.enums import RejectReason
from .model import ConflictResult, Period, TimeWindow, WeeklySchedule, WindowCheck
from .rules.factory import ConflictPolicy
from .scanner import ConflictScanner
from .window import validate_window


def _hours_label(max_duration: timedelta) -> str:
    minutes = int(max_duration.total_seconds() // 60)
    if minutes % 60 == 0:
        hours = minutes // 60
        return f"{hours} hour" if hours == 1 else f"{hours} hours"
    return f"{minutes} minutes"


@dataclass(frozen=True)
class ScheduleDecision:
    accepted: bool
    reason: Optional[RejectReason] = None
    conflicts: Tuple[ConflictResult, ...] = ()
    max_duration: timedelta = timedelta(minutes=DEFAULT_MAX_PERIOD_MINUTES)

    @property
    def first_conflict(self) -> Optional[ConflictResult]:
        return self.conflicts[0] if self.conflicts else None

    @property
    def message(self) -> str:
        if self.accepted:
            return "Schedule is available"
        if self.reason == RejectReason.INVALID_WINDOW:
            return "End time must be after start time"
        if self.reason == RejectReason.WINDOW_TOO_LONG:
            return f"Class duration cannot exceed {_hours_label(self.max_duration)}"

        period = self.first_conflict.conflicting_period if self.first_conflict else None
        if self.reason == RejectReason.SLOT_CONFLICT and period is not None:
            return f"Schedule conflicts with existing class: {period.subject} ({period.window.label})"
        if self.reason == RejectReason.INSTRUCTOR_CONFLICT:
            return "Faculty is already scheduled for another class at this time"
        if self.reason == RejectReason.ROOM_CONFLICT:
            return "Room is already occupied during this time slot"
        return "Schedule conflict"

    def to_dict(self) -> dict:
        return {
            "accepted": self.accepted,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
            "conflicts": [c.to_dict() for c in self.conflicts],
        }


class ScheduleConflictValidator:
    """Decide whether a proposed period is well-formed and fits the schedule.

    Pure: no I/O and no state besides configuration, so it can be called
    inside the store's transaction between reading the snapshot and writing.
    """

    def __init__(
        self,
        *,
        max_duration: timedelta = timedelta(minutes=DEFAULT_MAX_PERIOD_MINUTES),
        policy: Optional[ConflictPolicy] = None,
        scanner: Optional[ConflictScanner] = None,
    ):
        self.max_duration = max_duration
        self.scanner = scanner or ConflictScanner(policy)

    @property
    def policy(self) -> ConflictPolicy:
        return self.scanner.policy

    def check_window(self, window: TimeWindow) -> WindowCheck:
        return validate_window(window, max_duration=self.max_duration)

    def validate(
        self,
        candidate: Period,
        schedule: WeeklySchedule,
        *,
        others: Optional[WeeklySchedule] = None,
        collect_all: bool = False,
    ) -> ScheduleDecision:
        window_check = self.check_window(candidate.window)
        if not window_check.ok:
            return ScheduleDecision(accepted=False, reason=window_check.reason, max_duration=self.max_duration)

        if collect_all:
            conflicts = tuple(self.scanner.scan_all(candidate, schedule, others=others))
        else:
            result = self.scanner.scan(candidate, schedule, others=others)
            conflicts = (result,) if result.has_conflict else ()

        if not conflicts:
            return ScheduleDecision(accepted=True, max_duration=self.max_duration)
        return ScheduleDecision(
            accepted=False,
            reason=conflicts[0].reason,
            conflicts=conflicts,
            max_duration=self.max_duration,
        )
