from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import time
from typing import Optional

import pytest

from src.attendease.attendease.core.enums import Weekday
from src.attendease.attendease.timetable.model import Period, TimeWindow, Timetable, WeeklySchedule
from src.attendease.attendease.timetable.repository import TimetableDraft


class InMemoryTimetables:
    def __init__(self):
        self._by_key: dict[tuple[str, int], Timetable] = {}
        self._lock = threading.RLock()
        self.edits = 0

    def put(self, timetable: Timetable) -> None:
        self._by_key[(timetable.class_name, timetable.semester)] = timetable

    def get(self, *, class_name: str, semester: int) -> Optional[Timetable]:
        return self._by_key.get((class_name, int(semester)))

    def list_periods(self, *, semester: int, exclude_class=None, instructor=None) -> WeeklySchedule:
        out = []
        for (class_name, sem), tt in self._by_key.items():
            if sem != int(semester) or class_name == exclude_class:
                continue
            for p in tt.schedule.periods():
                if instructor is None or p.instructor == instructor:
                    out.append(replace(p, class_name=class_name))
        return WeeklySchedule.from_periods(out)

    @contextmanager
    def edit(self, *, class_name, semester, department=None, academic_year=None, updated_by=None, include_others=False):
        with self._lock:
            key = (class_name, int(semester))
            current = self._by_key.get(key) or Timetable(
                class_name=class_name,
                semester=int(semester),
                department=department or class_name,
                academic_year=academic_year,
            )
            draft = TimetableDraft(snapshot=current)
            if include_others:
                draft.others = InMemoryTimetables.list_periods(self, semester=semester, exclude_class=class_name)
            yield draft
            if draft.changed:
                self.edits += 1
                self._by_key[key] = replace(
                    draft.result(),
                    department=department or current.department,
                    academic_year=academic_year or current.academic_year,
                    updated_by=updated_by,
                )

    def delete(self, *, class_name: str, semester: int) -> bool:
        return self._by_key.pop((class_name, int(semester)), None) is not None


def make_period(day="monday", start=(9, 0), end=(10, 0), subject="Data Structures", instructor="Dr. Doe", room="CS-101", class_name=None):
    return Period(
        day=Weekday.parse(day),
        window=TimeWindow(start=time(*start), end=time(*end)),
        subject=subject,
        instructor=instructor,
        room=room,
        class_name=class_name,
    )


@pytest.fixture
def period_factory():
    return make_period


@pytest.fixture
def timetables_repo():
    return InMemoryTimetables()
