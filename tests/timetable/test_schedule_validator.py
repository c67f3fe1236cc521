from __future__ import annotations

from datetime import timedelta

from src.attendease.attendease.core.enums import RejectReason
from src.attendease.attendease.timetable.model import WeeklySchedule
from src.attendease.attendease.timetable.validator import ScheduleConflictValidator


def test_window_is_checked_before_conflicts(period_factory):
    schedule = WeeklySchedule.from_periods([period_factory()])
    candidate = period_factory(start=(10, 0), end=(9, 0))

    decision = ScheduleConflictValidator().validate(candidate, schedule)

    assert not decision.accepted
    assert decision.reason == RejectReason.INVALID_WINDOW
    assert decision.conflicts == ()
    assert decision.message == "End time must be after start time"


def test_too_long_message_uses_configured_maximum(period_factory):
    candidate = period_factory(start=(9, 0), end=(13, 0))

    default = ScheduleConflictValidator().validate(candidate, WeeklySchedule.empty())
    two_hours = ScheduleConflictValidator(max_duration=timedelta(hours=2)).validate(
        period_factory(start=(9, 0), end=(11, 30)), WeeklySchedule.empty()
    )

    assert default.reason == RejectReason.WINDOW_TOO_LONG
    assert default.message == "Class duration cannot exceed 3 hours"
    assert two_hours.message == "Class duration cannot exceed 2 hours"


def test_slot_conflict_message_names_existing_class(period_factory):
    schedule = WeeklySchedule.from_periods([period_factory(subject="Data Structures")])

    decision = ScheduleConflictValidator().validate(period_factory(start=(9, 30), end=(10, 30)), schedule)

    assert decision.reason == RejectReason.SLOT_CONFLICT
    assert decision.message == "Schedule conflicts with existing class: Data Structures (9:00 AM - 10:00 AM)"


def test_instructor_and_room_messages(period_factory):
    validator = ScheduleConflictValidator()
    others = WeeklySchedule.from_periods([period_factory(instructor="Dr. Doe", room="R1", class_name="B")])

    by_instructor = validator.validate(period_factory(instructor="Dr. Doe", room="R2"), WeeklySchedule.empty(), others=others)
    by_room = validator.validate(period_factory(instructor="Dr. Lee", room="R1"), WeeklySchedule.empty(), others=others)

    assert by_instructor.message == "Faculty is already scheduled for another class at this time"
    assert by_room.message == "Room is already occupied during this time slot"


def test_accepts_free_slot(period_factory):
    schedule = WeeklySchedule.from_periods([period_factory()])

    decision = ScheduleConflictValidator().validate(period_factory(start=(10, 0), end=(11, 0)), schedule)

    assert decision.accepted
    assert decision.reason is None


def test_collect_all_reports_every_dimension(period_factory):
    schedule = WeeklySchedule.from_periods([period_factory(instructor="Dr. A", room="R1")])
    others = WeeklySchedule.from_periods(
        [
            period_factory(instructor="Dr. Doe", room="R7", class_name="B"),
            period_factory(instructor="Dr. Z", room="CS-101", class_name="C"),
        ]
    )
    candidate = period_factory(instructor="Dr. Doe", room="CS-101")

    decision = ScheduleConflictValidator().validate(candidate, schedule, others=others, collect_all=True)

    assert decision.reason == RejectReason.SLOT_CONFLICT
    assert [c.reason for c in decision.conflicts] == [
        RejectReason.SLOT_CONFLICT,
        RejectReason.INSTRUCTOR_CONFLICT,
        RejectReason.ROOM_CONFLICT,
    ]
    assert decision.to_dict()["conflicts"][1]["conflictWith"]["class"] == "B"
