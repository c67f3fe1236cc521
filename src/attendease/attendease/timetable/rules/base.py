from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from ...core.enums import DayScope, RejectReason, Weekday
from ..model import ConflictResult, Period, WeeklySchedule
from ..window import overlaps


class ConflictRule(ABC):
    """Strategy Pattern: one dimension along which two periods can clash."""

    reason: RejectReason

    def __init__(self, scope: DayScope = DayScope.SAME_DAY):
        self.scope = scope

    @abstractmethod
    def matches(self, existing: Period, candidate: Period) -> bool:
        """Whether ``existing`` is relevant to ``candidate`` for this rule (time aside)."""
        raise NotImplementedError

    def applies_to_other_classes(self) -> bool:
        return True

    def days_to_scan(self, candidate_day: Weekday) -> tuple[Weekday, ...]:
        if self.scope == DayScope.SAME_DAY:
            return (candidate_day,)
        if self.scope == DayScope.OTHER_DAYS:
            return tuple(d for d in Weekday if d != candidate_day)
        return tuple(Weekday)

    def conflicts(
        self,
        candidate: Period,
        schedule: WeeklySchedule,
        others: Optional[WeeklySchedule] = None,
    ) -> Iterator[ConflictResult]:
        sources = [schedule]
        if others is not None and self.applies_to_other_classes():
            sources.append(others)

        for day in self.days_to_scan(candidate.day):
            for source in sources:
                for existing in source.day(day):
                    if self.matches(existing, candidate) and overlaps(existing.window, candidate.window):
                        yield ConflictResult(has_conflict=True, conflicting_period=existing, reason=self.reason)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(scope={self.scope.value})"
