from __future__ import annotations

from ...core.enums import RejectReason
from ..model import Period
from .base import ConflictRule


class InstructorConflictRule(ConflictRule):
    """The same instructor cannot teach two overlapping periods."""

    reason = RejectReason.INSTRUCTOR_CONFLICT

    def matches(self, existing: Period, candidate: Period) -> bool:
        return existing.instructor == candidate.instructor
