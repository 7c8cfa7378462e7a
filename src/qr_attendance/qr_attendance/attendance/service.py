from __future__ import annotations

import calendar
import csv
import io
import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import format_clock, now_local
from ..common.validators import require_non_empty
from ..core.constants import RECENT_HISTORY_DAYS, RECENT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, StatsPeriod
from ..core.exceptions import ValidationError
from ..users.model import Student
from ..users.repository import StudentRepository
from .model import AttendanceCheck, AttendanceRecord, AttendanceStats, RecordFilters
from .repository import AttendanceRepository
from .windows import ScanKind, ScanWindows

logger = logging.getLogger(__name__)

CSV_HEADERS = ("School ID", "Student Name", "Year Level", "Date", "Time In", "Time Out", "Status")


def period_start(period: StatsPeriod, today: date) -> date:
    """First day counted by ``period``: today, seven days back, or the same day last month."""
    if period == StatsPeriod.WEEK:
        return today - timedelta(days=7)
    if period == StatsPeriod.MONTH:
        year, month = (today.year, today.month - 1) if today.month > 1 else (today.year - 1, 12)
        return date(year, month, min(today.day, calendar.monthrange(year, month)[1]))
    return today


class AttendanceService:
    """Use case: SBO officers scanning student QR codes into daily attendance."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        windows: ScanWindows | None = None,
    ):
        self._attendance = attendance
        self._students = students
        self._windows = windows or ScanWindows()

    def _get_student(self, school_id: str) -> Student:
        school_id = require_non_empty(school_id, "School ID")
        student = self._students.get_by_school_id(school_id)
        if not student:
            raise ValidationError("Student not found")
        return student

    def check_student(self, school_id: str, *, today: date | None = None) -> AttendanceCheck:
        today = today or now_local().date()
        student = self._get_student(school_id)

        record = self._attendance.get_for_student_and_date(student.id, today)
        if record:
            return AttendanceCheck(student=student, record=record)

        recent = self._attendance.get_recent_for_student(
            student.id,
            since=today - timedelta(days=RECENT_HISTORY_DAYS),
            limit=RECENT_HISTORY_LIMIT,
        )
        return AttendanceCheck(student=student, record=None, recent_records=tuple(recent))

    def current_window(self, now: datetime | None = None) -> Optional[ScanKind]:
        return self._windows.current(now or now_local())

    def record(self, school_id: str, officer_id: Optional[int], *, now: datetime | None = None) -> AttendanceRecord:
        """Time-in on the first scan of the day, time-out on the second."""
        now = now or now_local()
        today = now.date()
        student = self._get_student(school_id)

        existing = self._attendance.get_for_student_and_date(student.id, today)
        if existing is None:
            if not self._windows.allows(ScanKind.TIME_IN, now):
                raise ValidationError(self._windows.describe(ScanKind.TIME_IN))
            record = self._attendance.create_time_in(
                student_id=student.id,
                school_id=student.school_id,
                student_name=student.full_name,
                year_level=student.year_level,
                day=today,
                time_in=now.time().replace(microsecond=0),
                recorded_by=officer_id,
            )
            logger.info("Time-in recorded for %s by officer %s", student.school_id, officer_id)
            return record

        if not self._windows.allows(ScanKind.TIME_OUT, now):
            raise ValidationError(self._windows.describe(ScanKind.TIME_OUT))
        if existing.time_out is not None:
            raise ValidationError("Student has already been recorded for time-out today")

        status = AttendanceStatus.PRESENT if existing.time_in else AttendanceStatus.PARTIAL
        updated = self._attendance.set_time_out(
            record_id=existing.id,
            time_out=now.time().replace(microsecond=0),
            status=status,
        )
        if updated is None:
            raise ValidationError("Student has already been recorded for time-out today")
        logger.info("Time-out recorded for %s by officer %s", student.school_id, officer_id)
        return updated

    def list_records(self, filters: RecordFilters | None = None) -> Sequence[AttendanceRecord]:
        return self._attendance.search(filters or RecordFilters())

    def export_csv(self, filters: RecordFilters | None = None) -> str:
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for r in self.list_records(filters):
            writer.writerow(
                [
                    r.school_id,
                    r.student_name,
                    r.year_level or "N/A",
                    r.date.isoformat(),
                    format_clock(r.time_in),
                    format_clock(r.time_out),
                    r.status.value,
                ]
            )
        return out.getvalue()

    def stats(self, period: StatsPeriod = StatsPeriod.TODAY, *, today: date | None = None) -> AttendanceStats:
        today = today or now_local().date()
        start = period_start(period, today)
        return AttendanceStats(
            period=period,
            start=start,
            end=today,
            total=self._students.count_students(),
            present=self._attendance.count_attendees(start=start, end=today),
        )

    def dashboard_stats(self, *, today: date | None = None) -> list[AttendanceStats]:
        today = today or now_local().date()
        return [self.stats(p, today=today) for p in StatsPeriod]
