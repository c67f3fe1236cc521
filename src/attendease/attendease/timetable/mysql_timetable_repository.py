from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Period, TimeWindow, Timetable, WeeklySchedule
from .repository import TimetableDraft, TimetableRepository

_PERIOD_COLUMNS = """
    p.day, p.position, p.subject, p.instructor, p.room, p.start_time, p.end_time
"""


def _row_to_period(r: dict, *, class_name: Optional[str] = None) -> Period:
    return Period(
        day=Weekday.parse(r["day"]),
        window=TimeWindow(start=normalize_mysql_time(r["start_time"]), end=normalize_mysql_time(r["end_time"])),
        subject=r["subject"],
        instructor=r["instructor"],
        room=r["room"],
        class_name=class_name or r.get("class_name"),
    )


def _row_to_timetable(r: dict, periods: Sequence[Period]) -> Timetable:
    return Timetable(
        class_name=r["class_name"],
        semester=int(r["semester"]),
        department=r["department"],
        academic_year=r.get("academic_year"),
        schedule=WeeklySchedule.from_periods(periods),
        updated_by=int(r["updated_by"]) if r.get("updated_by") is not None else None,
        updated_at=r.get("updated_at"),
    )


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _load_periods(cur, timetable_id: int) -> list[Period]:
        cur.execute(
            f"""
            SELECT {_PERIOD_COLUMNS}
            FROM timetable_periods p
            WHERE p.timetable_id=%s
            ORDER BY p.day, p.position
            """,
            (int(timetable_id),),
        )
        return [_row_to_period(r) for r in fetchall(cur)]

    def get(self, *, class_name: str, semester: int) -> Optional[Timetable]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT timetable_id, class_name, semester, department, academic_year, updated_by, updated_at
                FROM timetables
                WHERE class_name=%s AND semester=%s
                """,
                (class_name, int(semester)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _row_to_timetable(r, self._load_periods(cur, r["timetable_id"]))

    @staticmethod
    def _select_periods(
        cur,
        *,
        semester: int,
        exclude_class: Optional[str] = None,
        instructor: Optional[str] = None,
    ) -> WeeklySchedule:
        clauses = ["t.semester=%s"]
        params: list[object] = [int(semester)]
        if exclude_class is not None:
            clauses.append("t.class_name<>%s")
            params.append(exclude_class)
        if instructor is not None:
            clauses.append("p.instructor=%s")
            params.append(instructor)

        where = " AND ".join(clauses)
        cur.execute(
            f"""
            SELECT t.class_name, {_PERIOD_COLUMNS}
            FROM timetable_periods p
            JOIN timetables t ON t.timetable_id = p.timetable_id
            WHERE {where}
            ORDER BY p.day, p.start_time, t.class_name
            """,
            tuple(params),
        )
        return WeeklySchedule.from_periods(_row_to_period(r) for r in fetchall(cur))

    def list_periods(
        self,
        *,
        semester: int,
        exclude_class: Optional[str] = None,
        instructor: Optional[str] = None,
    ) -> WeeklySchedule:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_periods(cur, semester=semester, exclude_class=exclude_class, instructor=instructor)

    @contextmanager
    def edit(
        self,
        *,
        class_name: str,
        semester: int,
        department: Optional[str] = None,
        academic_year: Optional[str] = None,
        updated_by: Optional[int] = None,
        include_others: bool = False,
    ) -> Iterator[TimetableDraft]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Semester row first, then the header row; every edit takes them in this order.
            cur.execute("INSERT IGNORE INTO timetable_semester_locks(semester) VALUES(%s)", (int(semester),))
            cur.execute(
                "SELECT semester FROM timetable_semester_locks WHERE semester=%s FOR UPDATE",
                (int(semester),),
            )
            cur.execute(
                """
                INSERT IGNORE INTO timetables(class_name, semester, department, academic_year)
                VALUES(%s,%s,%s,%s)
                """,
                (class_name, int(semester), department or class_name, academic_year),
            )
            cur.execute(
                """
                SELECT timetable_id, class_name, semester, department, academic_year, updated_by, updated_at
                FROM timetables
                WHERE class_name=%s AND semester=%s
                FOR UPDATE
                """,
                (class_name, int(semester)),
            )
            r = fetchone(cur)
            timetable_id = int(r["timetable_id"])
            draft = TimetableDraft(snapshot=_row_to_timetable(r, self._load_periods(cur, timetable_id)))
            if include_others:
                draft.others = self._select_periods(cur, semester=semester, exclude_class=class_name)

            yield draft

            if draft.changed:
                self._write(
                    cur,
                    timetable_id=timetable_id,
                    draft=draft,
                    department=department,
                    academic_year=academic_year,
                    updated_by=updated_by,
                )

    @staticmethod
    def _write(
        cur,
        *,
        timetable_id: int,
        draft: TimetableDraft,
        department: Optional[str],
        academic_year: Optional[str],
        updated_by: Optional[int],
    ) -> None:
        cur.execute(
            """
            UPDATE timetables
            SET department=COALESCE(%s, department),
                academic_year=COALESCE(%s, academic_year),
                updated_by=%s,
                updated_at=NOW()
            WHERE timetable_id=%s
            """,
            (department, academic_year, updated_by, timetable_id),
        )
        cur.execute("DELETE FROM timetable_periods WHERE timetable_id=%s", (timetable_id,))

        rows = []
        for day in Weekday:
            for position, p in enumerate(draft.schedule.day(day)):
                rows.append(
                    (timetable_id, day.value, position, p.subject, p.instructor, p.room, p.window.start, p.window.end)
                )
        if rows:
            cur.executemany(
                """
                INSERT INTO timetable_periods(timetable_id, day, position, subject, instructor, room, start_time, end_time)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                rows,
            )

    def delete(self, *, class_name: str, semester: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM timetables WHERE class_name=%s AND semester=%s",
                (class_name, int(semester)),
            )
            return cur.rowcount > 0
