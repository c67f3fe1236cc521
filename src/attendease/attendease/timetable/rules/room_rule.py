from __future__ import annotations

from ...core.enums import RejectReason
from ..model import Period
from .base import ConflictRule


class RoomConflictRule(ConflictRule):
    """A room (exact string match) hosts one period at a time."""

    reason = RejectReason.ROOM_CONFLICT

    def matches(self, existing: Period, candidate: Period) -> bool:
        return existing.room == candidate.room
