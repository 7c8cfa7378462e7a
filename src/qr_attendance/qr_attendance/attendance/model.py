from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, StatsPeriod
from ..users.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's attendance for one day (time-in, then time-out)."""

    id: int
    student_id: int
    school_id: str
    student_name: str
    year_level: Optional[str]
    date: date
    time_in: Optional[time]
    time_out: Optional[time]
    recorded_by: Optional[int]
    status: AttendanceStatus
    created_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.time_in is not None and self.time_out is not None


@dataclass(frozen=True)
class AttendanceCheck:
    """Read-model answering "has this student been recorded today?"."""

    student: Student
    record: Optional[AttendanceRecord]
    recent_records: Sequence[AttendanceRecord] = field(default_factory=tuple)

    @property
    def has_record(self) -> bool:
        return self.record is not None

    @property
    def status(self) -> Optional[str]:
        if not self.record:
            return None
        return "complete" if self.record.is_complete else "partial"


@dataclass(frozen=True)
class RecordFilters:
    date: Optional[date] = None
    school_id: Optional[str] = None
    student_name: Optional[str] = None
    year_level: Optional[str] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class AttendanceStats:
    """Students seen at least once in ``[start, end]`` against all registered students."""

    period: StatsPeriod
    start: date
    end: date
    total: int
    present: int

    @property
    def rate(self) -> int:
        """Whole percent, halves rounded up; 0 when nobody is registered."""
        if self.total <= 0:
            return 0
        return (200 * self.present + self.total) // (2 * self.total)
