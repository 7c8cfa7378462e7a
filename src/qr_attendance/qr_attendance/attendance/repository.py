from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, RecordFilters


class AttendanceRepository(Protocol):
    def get_for_student_and_date(self, student_id: int, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_student(self, student_id: int, *, since: date, limit: int) -> Sequence[AttendanceRecord]:
        """Records dated on or after ``since``, newest first."""
        raise NotImplementedError

    def create_time_in(
        self,
        *,
        student_id: int,
        school_id: str,
        student_name: str,
        year_level: Optional[str],
        day: date,
        time_in: time,
        recorded_by: Optional[int],
    ) -> AttendanceRecord:
        raise NotImplementedError

    def set_time_out(self, *, record_id: int, time_out: time, status: AttendanceStatus) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def search(self, filters: RecordFilters) -> Sequence[AttendanceRecord]:
        """Newest first (by creation time)."""
        raise NotImplementedError

    def count_attendees(self, *, start: date, end: date) -> int:
        """Distinct students with a record dated within ``[start, end]``."""
        raise NotImplementedError
