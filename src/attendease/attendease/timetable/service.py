from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from ..common.datetime_utils import parse_clock, parse_time_slot
from ..common.validators import require_int_in_range, require_non_empty
from ..core.constants import MAX_SEMESTER, MIN_SEMESTER
from ..core.enums import Role, Weekday
from ..core.exceptions import AuthorizationError, NotFoundError, ScheduleRejected, ValidationError
from .model import Period, TimeWindow, Timetable, WeeklySchedule
from .repository import TimetableDraft, TimetableRepository
from .validator import ScheduleConflictValidator, ScheduleDecision

logger = logging.getLogger(__name__)

EDITOR_ROLES = (Role.ADMIN, Role.FACULTY)


@dataclass(frozen=True)
class PeriodInput:
    """Raw period fields as submitted by a form or JSON body."""

    day: str
    subject: str
    instructor: str
    room: str
    time_slot: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping, *, day: Optional[str] = None) -> "PeriodInput":
        return cls(
            day=day if day is not None else str(data.get("day") or ""),
            subject=str(data.get("subject") or ""),
            instructor=str(data.get("faculty") or data.get("instructor") or ""),
            room=str(data.get("room") or ""),
            time_slot=data.get("timeSlot") or data.get("time_slot"),
            start_time=data.get("startTime") or data.get("start_time"),
            end_time=data.get("endTime") or data.get("end_time"),
        )

    def is_complete(self) -> bool:
        has_times = bool(self.time_slot) or (bool(self.start_time) and bool(self.end_time))
        return all(v and str(v).strip() for v in (self.subject, self.instructor, self.room)) and has_times


class TimetableService:
    def __init__(self, timetables: TimetableRepository, validator: Optional[ScheduleConflictValidator] = None):
        self._timetables = timetables
        self._validator = validator or ScheduleConflictValidator()

    @staticmethod
    def _require_editor(current_role: Role) -> None:
        if current_role not in EDITOR_ROLES:
            raise AuthorizationError("You do not have permission to modify timetables")

    @staticmethod
    def _semester(value) -> int:
        return require_int_in_range(value, "Semester", MIN_SEMESTER, MAX_SEMESTER)

    @staticmethod
    def _day(value: str) -> Weekday:
        try:
            return Weekday.parse(value)
        except ValueError:
            raise ValidationError(f"Invalid day {value!r}")

    @staticmethod
    def _window(data: PeriodInput) -> TimeWindow:
        if data.time_slot:
            start, end = parse_time_slot(data.time_slot)
        else:
            start = parse_clock(data.start_time or "")
            end = parse_clock(data.end_time or "")
        return TimeWindow(start=start, end=end)

    def build_period(self, data: PeriodInput, *, class_name: Optional[str] = None) -> Period:
        if not data.is_complete():
            raise ValidationError("Please fill in all required fields")
        return Period(
            day=self._day(data.day),
            window=self._window(data),
            subject=require_non_empty(data.subject, "Subject"),
            instructor=require_non_empty(data.instructor, "Faculty"),
            room=require_non_empty(data.room, "Room"),
            class_name=class_name,
        )

    @property
    def _cross_class(self) -> bool:
        return self._validator.policy.include_other_classes

    def _others(self, *, class_name: str, semester: int) -> Optional[WeeklySchedule]:
        if not self._cross_class:
            return None
        return self._timetables.list_periods(semester=semester, exclude_class=class_name)

    def _decide(
        self,
        candidate: Period,
        schedule: WeeklySchedule,
        *,
        class_name: str,
        semester: int,
        others: Optional[WeeklySchedule] = None,
    ) -> ScheduleDecision:
        decision = self._validator.validate(candidate, schedule, others=others)
        if not decision.accepted:
            logger.info(
                "Rejected %s %s %s for %s/%s: %s",
                candidate.subject,
                candidate.day.value,
                candidate.window.label,
                class_name,
                semester,
                decision.reason.value,
            )
            raise ScheduleRejected(decision.message, reason=decision.reason, conflicts=decision.conflicts)
        return decision

    def get_timetable(self, *, class_name: str, semester) -> Timetable:
        class_name = require_non_empty(class_name, "Class")
        semester = self._semester(semester)
        timetable = self._timetables.get(class_name=class_name, semester=semester)
        if timetable is None:
            return Timetable(class_name=class_name, semester=semester, department=class_name)
        return timetable

    def check_period(self, *, class_name: str, semester, data: PeriodInput) -> ScheduleDecision:
        """Dry run: report every conflict without saving anything."""
        timetable = self.get_timetable(class_name=class_name, semester=semester)
        candidate = self.build_period(data)
        return self._validator.validate(
            candidate,
            timetable.schedule,
            others=self._others(class_name=timetable.class_name, semester=timetable.semester),
            collect_all=True,
        )

    def add_period(
        self,
        *,
        current_role: Role,
        class_name: str,
        semester,
        data: PeriodInput,
        department: Optional[str] = None,
        academic_year: Optional[str] = None,
        updated_by: Optional[int] = None,
    ) -> Timetable:
        self._require_editor(current_role)
        class_name = require_non_empty(class_name, "Class")
        semester = self._semester(semester)
        candidate = self.build_period(data)

        with self._timetables.edit(
            class_name=class_name,
            semester=semester,
            department=department,
            academic_year=academic_year,
            updated_by=updated_by,
            include_others=self._cross_class,
        ) as draft:
            self._decide(candidate, draft.schedule, class_name=class_name, semester=semester, others=draft.others)
            draft.add(candidate)

        logger.info("Added %s %s %s to %s/%s", candidate.subject, candidate.day.value, candidate.window.label, class_name, semester)
        return draft.result()

    def update_period(
        self,
        *,
        current_role: Role,
        class_name: str,
        semester,
        day: str,
        index: int,
        data: PeriodInput,
        updated_by: Optional[int] = None,
    ) -> Timetable:
        """Edit period #index of ``day``; the edited period is left out of the conflict scan."""
        self._require_editor(current_role)
        class_name = require_non_empty(class_name, "Class")
        semester = self._semester(semester)
        weekday = self._day(day)
        candidate = self.build_period(data)

        with self._timetables.edit(
            class_name=class_name,
            semester=semester,
            updated_by=updated_by,
            include_others=self._cross_class,
        ) as draft:
            rest = self._without(draft, weekday, int(index))
            self._decide(candidate, rest, class_name=class_name, semester=semester, others=draft.others)
            draft.replace(weekday, int(index), candidate)

        logger.info("Updated %s #%s of %s/%s", weekday.value, index, class_name, semester)
        return draft.result()

    def delete_period(self, *, current_role: Role, class_name: str, semester, day: str, index: int) -> Period:
        self._require_editor(current_role)
        class_name = require_non_empty(class_name, "Class")
        semester = self._semester(semester)
        weekday = self._day(day)

        if self._timetables.get(class_name=class_name, semester=semester) is None:
            raise NotFoundError("Timetable not found", key=(class_name, semester))

        with self._timetables.edit(class_name=class_name, semester=semester) as draft:
            self._without(draft, weekday, int(index))
            removed = draft.remove(weekday, int(index))

        logger.info("Removed %s #%s (%s) from %s/%s", weekday.value, index, removed.subject, class_name, semester)
        return removed

    def replace_day(
        self,
        *,
        current_role: Role,
        class_name: str,
        semester,
        day: str,
        periods: Iterable[Mapping],
        updated_by: Optional[int] = None,
    ) -> Timetable:
        """Replace a whole day of an existing timetable.

        Incomplete entries are dropped; the rest are checked in order.
        """
        self._require_editor(current_role)
        class_name = require_non_empty(class_name, "Class")
        semester = self._semester(semester)
        weekday = self._day(day)

        inputs = [PeriodInput.from_mapping(p, day=weekday.value) for p in periods]
        dropped = sum(1 for i in inputs if not i.is_complete())
        candidates = [self.build_period(i) for i in inputs if i.is_complete()]

        if self._timetables.get(class_name=class_name, semester=semester) is None:
            raise NotFoundError("Timetable not found", key=(class_name, semester))

        with self._timetables.edit(
            class_name=class_name,
            semester=semester,
            updated_by=updated_by,
            include_others=self._cross_class,
        ) as draft:
            running = draft.schedule.with_day(weekday, ())
            for candidate in candidates:
                self._decide(candidate, running, class_name=class_name, semester=semester, others=draft.others)
                running = running.with_period(candidate)
            draft.replace_day(weekday, running.day(weekday))

        logger.info(
            "Replaced %s of %s/%s with %d periods (%d incomplete dropped)",
            weekday.value,
            class_name,
            semester,
            len(candidates),
            dropped,
        )
        return draft.result()

    def delete_timetable(self, *, current_role: Role, class_name: str, semester) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can delete timetables")
        class_name = require_non_empty(class_name, "Class")
        semester = self._semester(semester)

        if not self._timetables.delete(class_name=class_name, semester=semester):
            raise NotFoundError("Timetable not found", key=(class_name, semester))
        logger.info("Deleted timetable %s/%s", class_name, semester)

    def instructor_timetable(self, *, instructor: str, semester) -> List[Period]:
        instructor = require_non_empty(instructor, "Faculty")
        semester = self._semester(semester)
        schedule = self._timetables.list_periods(semester=semester, instructor=instructor)
        return [p for d in Weekday for p in schedule.sorted_day(d)]

    @staticmethod
    def _without(draft: TimetableDraft, day: Weekday, index: int) -> WeeklySchedule:
        try:
            return draft.schedule.without(day, index)
        except IndexError:
            raise NotFoundError(f"No period #{index} on {day.label}", key=(day.value, index))
