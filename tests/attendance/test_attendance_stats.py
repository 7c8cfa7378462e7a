from __future__ import annotations

from datetime import date, time

import pytest

from src.qr_attendance.qr_attendance.attendance.model import AttendanceStats
from src.qr_attendance.qr_attendance.attendance.service import AttendanceService, period_start
from src.qr_attendance.qr_attendance.core.enums import StatsPeriod
from tests.fakes import InMemoryAttendance, InMemoryStudents, make_student

TODAY = date(2026, 2, 2)


def _seen(repo: InMemoryAttendance, student_id: int, day: date) -> None:
    repo.add(
        student_id=student_id,
        school_id=f"2024-{student_id:04d}",
        student_name="Someone",
        year_level="y1",
        date=day,
        time_in=time(8, 0),
    )


@pytest.fixture
def roster() -> InMemoryStudents:
    return InMemoryStudents([make_student(id=i, school_id=f"2024-{i:04d}") for i in range(1, 5)])


@pytest.mark.parametrize(
    "period, today, expected",
    [
        (StatsPeriod.TODAY, TODAY, TODAY),
        (StatsPeriod.WEEK, TODAY, date(2026, 1, 26)),
        (StatsPeriod.MONTH, TODAY, date(2026, 1, 2)),
        (StatsPeriod.MONTH, date(2026, 3, 31), date(2026, 2, 28)),
        (StatsPeriod.MONTH, date(2026, 1, 15), date(2025, 12, 15)),
    ],
)
def test_period_start(period, today, expected):
    assert period_start(period, today) == expected


@pytest.mark.parametrize(
    "present, total, rate",
    [(0, 0, 0), (3, 0, 0), (0, 4, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (4, 4, 100)],
)
def test_rate_is_whole_percent_rounded_half_up(present, total, rate):
    stats = AttendanceStats(period=StatsPeriod.TODAY, start=TODAY, end=TODAY, total=total, present=present)

    assert stats.rate == rate


def test_today_counts_students_recorded_today(roster):
    repo = InMemoryAttendance()
    _seen(repo, 1, TODAY)
    _seen(repo, 2, TODAY)
    _seen(repo, 3, date(2026, 2, 1))

    stats = AttendanceService(repo, roster).stats(StatsPeriod.TODAY, today=TODAY)

    assert (stats.total, stats.present, stats.rate) == (4, 2, 50)


def test_week_and_month_count_distinct_attendees(roster):
    repo = InMemoryAttendance()
    for day in (26, 28, 30):
        _seen(repo, 1, date(2026, 1, day))
    _seen(repo, 2, date(2026, 1, 10))
    _seen(repo, 3, date(2025, 12, 20))

    svc = AttendanceService(repo, roster)
    week = svc.stats(StatsPeriod.WEEK, today=TODAY)
    month = svc.stats(StatsPeriod.MONTH, today=TODAY)

    assert (week.present, week.rate) == (1, 25)
    assert (month.present, month.rate) == (2, 50)


def test_no_students_gives_zero_rate():
    stats = AttendanceService(InMemoryAttendance(), InMemoryStudents()).stats(StatsPeriod.WEEK, today=TODAY)

    assert (stats.total, stats.present, stats.rate) == (0, 0, 0)


def test_dashboard_stats_covers_every_period(roster):
    rows = AttendanceService(InMemoryAttendance(), roster).dashboard_stats(today=TODAY)

    assert [s.period for s in rows] == [StatsPeriod.TODAY, StatsPeriod.WEEK, StatsPeriod.MONTH]
    assert all(s.end == TODAY for s in rows)
