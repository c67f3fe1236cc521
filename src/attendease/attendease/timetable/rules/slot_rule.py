from __future__ import annotations

from ...core.enums import DayScope, RejectReason
from ..model import Period
from .base import ConflictRule


class SlotConflictRule(ConflictRule):
    """Same class, same day: any overlap clashes whatever the subject, instructor or room."""

    reason = RejectReason.SLOT_CONFLICT

    def __init__(self):
        super().__init__(DayScope.SAME_DAY)

    def matches(self, existing: Period, candidate: Period) -> bool:
        return True

    def applies_to_other_classes(self) -> bool:
        return False
