from __future__ import annotations

from typing import List, Optional, Sequence

from .model import NO_CONFLICT, ConflictResult, Period, WeeklySchedule
from .rules.base import ConflictRule
from .rules.factory import ConflictPolicy, ConflictRuleFactory


class ConflictScanner:
    """Run the slot, instructor and room rules, in that order, over a schedule snapshot.

    ``schedule`` is the candidate's own class timetable; ``others`` holds the
    periods of the other classes and is only consulted by the instructor and
    room rules. Neither is modified.
    """

    def __init__(
        self,
        policy: Optional[ConflictPolicy] = None,
        *,
        rules: Optional[Sequence[ConflictRule]] = None,
        factory: Optional[ConflictRuleFactory] = None,
    ):
        self.policy = policy or ConflictPolicy()
        if rules is None:
            rules = (factory or ConflictRuleFactory()).build(self.policy)
        self._rules = tuple(rules)

    def _effective_others(self, others: Optional[WeeklySchedule]) -> Optional[WeeklySchedule]:
        return others if self.policy.include_other_classes else None

    def scan(self, candidate: Period, schedule: WeeklySchedule, *, others: Optional[WeeklySchedule] = None) -> ConflictResult:
        """Return the first conflict found, or ``NO_CONFLICT``."""
        others = self._effective_others(others)
        for rule in self._rules:
            for result in rule.conflicts(candidate, schedule, others):
                return result
        return NO_CONFLICT

    def scan_all(
        self,
        candidate: Period,
        schedule: WeeklySchedule,
        *,
        others: Optional[WeeklySchedule] = None,
    ) -> List[ConflictResult]:
        """Every conflict, grouped in rule order. Empty when the candidate fits."""
        others = self._effective_others(others)
        found: List[ConflictResult] = []
        for rule in self._rules:
            found.extend(rule.conflicts(candidate, schedule, others))
        return found
