from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import format_clock
from ..core.enums import RejectReason, Weekday


@dataclass(frozen=True)
class TimeWindow:
    """Start/end wall-clock times within one nominal day."""

    start: time
    end: time

    @property
    def duration(self) -> timedelta:
        anchor = datetime(2000, 1, 1)
        return datetime.combine(anchor, self.end) - datetime.combine(anchor, self.start)

    @property
    def label(self) -> str:
        return f"{format_clock(self.start)} - {format_clock(self.end)}"


@dataclass(frozen=True)
class Period:
    """One scheduled class occurrence."""

    day: Weekday
    window: TimeWindow
    subject: str
    instructor: str
    room: str
    class_name: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "day": self.day.value,
            "subject": self.subject,
            "faculty": self.instructor,
            "room": self.room,
            "startTime": format_clock(self.window.start),
            "endTime": format_clock(self.window.end),
        }
        if self.class_name:
            out["class"] = self.class_name
        return out


@dataclass(frozen=True)
class WeeklySchedule:
    """Day-indexed periods. Every weekday is present, possibly empty.

    Instances are never mutated: the ``with_*``/``without``/``replace``
    helpers return a new schedule.
    """

    by_day: Mapping[Weekday, Tuple[Period, ...]] = field(default_factory=dict)

    def __post_init__(self):
        normalized: Dict[Weekday, Tuple[Period, ...]] = {d: () for d in Weekday}
        for day, periods in dict(self.by_day).items():
            normalized[Weekday.parse(day)] = tuple(periods)
        object.__setattr__(self, "by_day", normalized)

    @classmethod
    def empty(cls) -> "WeeklySchedule":
        return cls()

    @classmethod
    def from_periods(cls, periods: Iterable[Period]) -> "WeeklySchedule":
        grouped: Dict[Weekday, list] = {d: [] for d in Weekday}
        for p in periods:
            grouped[p.day].append(p)
        return cls({d: tuple(ps) for d, ps in grouped.items()})

    def day(self, day: Weekday) -> Tuple[Period, ...]:
        return self.by_day[day]

    def periods(self) -> Iterator[Period]:
        for d in Weekday:
            yield from self.by_day[d]

    def sorted_day(self, day: Weekday) -> Tuple[Period, ...]:
        return tuple(sorted(self.by_day[day], key=lambda p: p.window.start))

    def __len__(self) -> int:
        return sum(len(ps) for ps in self.by_day.values())

    def get(self, day: Weekday, index: int) -> Period:
        periods = self.by_day[day]
        if index < 0 or index >= len(periods):
            raise IndexError(f"No period #{index} on {day.value}")
        return periods[index]

    def with_period(self, period: Period) -> "WeeklySchedule":
        return self.with_day(period.day, self.by_day[period.day] + (period,))

    def with_day(self, day: Weekday, periods: Sequence[Period]) -> "WeeklySchedule":
        data = dict(self.by_day)
        data[day] = tuple(periods)
        return WeeklySchedule(data)

    def without(self, day: Weekday, index: int) -> "WeeklySchedule":
        self.get(day, index)
        periods = list(self.by_day[day])
        del periods[index]
        return self.with_day(day, periods)

    def replace(self, day: Weekday, index: int, period: Period) -> "WeeklySchedule":
        """Swap period #index of ``day``; if the new period is on another day it moves there."""
        if period.day == day:
            self.get(day, index)
            periods = list(self.by_day[day])
            periods[index] = period
            return self.with_day(day, periods)
        return self.without(day, index).with_period(period)

    def to_dict(self, *, sort: bool = False) -> dict:
        out = {}
        for d in Weekday:
            periods = self.sorted_day(d) if sort else self.by_day[d]
            out[d.value] = [p.to_dict() for p in periods]
        return out


@dataclass(frozen=True)
class Timetable:
    class_name: str
    semester: int
    department: str
    academic_year: Optional[str] = None
    schedule: WeeklySchedule = field(default_factory=WeeklySchedule.empty)
    updated_by: Optional[int] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "class": self.class_name,
            "semester": self.semester,
            "department": self.department,
            "academicYear": self.academic_year,
            "schedule": self.schedule.to_dict(sort=True),
            "lastUpdatedBy": self.updated_by,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class WindowCheck:
    ok: bool
    reason: Optional[RejectReason] = None


@dataclass(frozen=True)
class ConflictResult:
    has_conflict: bool
    conflicting_period: Optional[Period] = None
    reason: Optional[RejectReason] = None

    def to_dict(self) -> dict:
        return {
            "hasConflict": self.has_conflict,
            "reason": self.reason.value if self.reason else None,
            "conflictWith": self.conflicting_period.to_dict() if self.conflicting_period else None,
        }


NO_CONFLICT = ConflictResult(has_conflict=False)
