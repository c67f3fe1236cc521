from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import Period, Timetable, WeeklySchedule


@dataclass
class TimetableDraft:
    """Pending changes to one timetable, held while the store's lock is taken.

    ``snapshot`` is the state read at lock time and never changes; the
    mutators only touch ``schedule``. ``others`` holds the periods of the other
    classes in the semester, read under the same lock, when the edit asked for them.
    """

    snapshot: Timetable
    schedule: Optional[WeeklySchedule] = None
    others: Optional[WeeklySchedule] = None
    changed: bool = False

    def __post_init__(self):
        if self.schedule is None:
            self.schedule = self.snapshot.schedule

    def add(self, period: Period) -> None:
        self._set(self.schedule.with_period(period))

    def replace(self, day: Weekday, index: int, period: Period) -> None:
        self._set(self.schedule.replace(day, index, period))

    def remove(self, day: Weekday, index: int) -> Period:
        removed = self.schedule.get(day, index)
        self._set(self.schedule.without(day, index))
        return removed

    def replace_day(self, day: Weekday, periods: Sequence[Period]) -> None:
        self._set(self.schedule.with_day(day, periods))

    def _set(self, schedule: WeeklySchedule) -> None:
        self.schedule = schedule
        self.changed = True

    def result(self) -> Timetable:
        return replace(self.snapshot, schedule=self.schedule)


class TimetableRepository(Protocol):
    def get(self, *, class_name: str, semester: int) -> Optional[Timetable]:
        raise NotImplementedError

    def list_periods(
        self,
        *,
        semester: int,
        exclude_class: Optional[str] = None,
        instructor: Optional[str] = None,
    ) -> WeeklySchedule:
        """Periods of every class in a semester, each tagged with its ``class_name``."""

        raise NotImplementedError

    def edit(
        self,
        *,
        class_name: str,
        semester: int,
        department: Optional[str] = None,
        academic_year: Optional[str] = None,
        updated_by: Optional[int] = None,
        include_others: bool = False,
    ) -> ContextManager[TimetableDraft]:
        """Lock the (class_name, semester) timetable, creating it if missing.

        Edits of any class in the same semester are serialized, so with
        ``include_others`` the draft's ``others`` cannot go stale before commit.

        Yields a TimetableDraft; its changes are persisted when the block exits
        normally and discarded when it raises.
        """

        raise NotImplementedError

    def delete(self, *, class_name: str, semester: int) -> bool:
        raise NotImplementedError
