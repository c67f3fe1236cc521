from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .core.constants import DEFAULT_MAX_PERIOD_MINUTES
from .core.enums import DayScope
from .database.connection import DBConfig, DatabaseConnection
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.repository import TimetableRepository
from .timetable.rules.factory import ConflictPolicy
from .timetable.service import TimetableService
from .timetable.validator import ScheduleConflictValidator


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    timetables_repo: TimetableRepository

    validator: ScheduleConflictValidator
    timetable_service: TimetableService


def build_validator(settings: dict) -> ScheduleConflictValidator:
    """Validator configured from MAX_PERIOD_MINUTES / INSTRUCTOR_SCOPE / ROOM_SCOPE / CROSS_CLASS_CHECKS."""
    policy = ConflictPolicy(
        instructor_scope=DayScope(settings.get("INSTRUCTOR_SCOPE", DayScope.SAME_DAY.value)),
        room_scope=DayScope(settings.get("ROOM_SCOPE", DayScope.SAME_DAY.value)),
        include_other_classes=bool(settings.get("CROSS_CLASS_CHECKS", True)),
    )
    max_minutes = int(settings.get("MAX_PERIOD_MINUTES", DEFAULT_MAX_PERIOD_MINUTES))
    return ScheduleConflictValidator(max_duration=timedelta(minutes=max_minutes), policy=policy)


def build_container(
    *,
    db_config: Optional[dict] = None,
    settings: Optional[dict] = None,
    timetables_repo: Optional[TimetableRepository] = None,
) -> Container:
    conn = None
    if timetables_repo is None:
        if db_config is None:
            raise ValueError("db_config is required when no timetable repository is given")
        conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))
        timetables_repo = MySQLTimetableRepository(conn)

    validator = build_validator(settings or {})
    timetable_service = TimetableService(timetables_repo, validator)

    return Container(
        conn=conn,
        timetables_repo=timetables_repo,
        validator=validator,
        timetable_service=timetable_service,
    )
