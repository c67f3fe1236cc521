from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ...core.enums import DayScope
from .base import ConflictRule
from .instructor_rule import InstructorConflictRule
from .room_rule import RoomConflictRule
from .slot_rule import SlotConflictRule


@dataclass(frozen=True)
class ConflictPolicy:
    """Which days each rule scans, and whether other classes' periods are checked.

    The default scopes every rule to the candidate's own day and looks at the
    other classes of the same semester, which catches an instructor or room
    double-booked across two classes at the same time.
    """

    instructor_scope: DayScope = DayScope.SAME_DAY
    room_scope: DayScope = DayScope.SAME_DAY
    include_other_classes: bool = True

    @classmethod
    def nominal_clock(cls) -> "ConflictPolicy":
        """All weekdays share one clock: instructor checked on the other days, room on every day.

        Only the class's own timetable is consulted.
        """
        return cls(
            instructor_scope=DayScope.OTHER_DAYS,
            room_scope=DayScope.ALL_DAYS,
            include_other_classes=False,
        )


@dataclass
class ConflictRuleFactory:
    """Factory Pattern: build the ordered rule chain for a policy."""

    def build(self, policy: ConflictPolicy) -> Tuple[ConflictRule, ...]:
        return (
            SlotConflictRule(),
            InstructorConflictRule(policy.instructor_scope),
            RoomConflictRule(policy.room_scope),
        )
