from __future__ import annotations

from datetime import datetime

import pytest

from src.qr_attendance.qr_attendance.container import build_services
from src.qr_attendance.qr_attendance.core.enums import Role
from src.qr_attendance.qr_attendance.main import create_app
from tests.fakes import (
    ALL_DAY,
    InMemoryAttendance,
    InMemoryStaff,
    InMemoryStudents,
    RecordingNavigator,
    RecordingNotifier,
    make_staff,
    make_student,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 15, 0)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def staff_repo() -> InMemoryStaff:
    return InMemoryStaff(
        [
            make_staff(1, "admin", "admin123", Role.ADMIN, full_name="Portal Admin"),
            make_staff(2, "mreyes", "faculty123", Role.FACULTY, full_name="Maria Reyes", email="mreyes@example.edu"),
            make_staff(3, "sbo", "sbo123", Role.SBO, full_name="Sam Officer", position="Secretary"),
        ]
    )


@pytest.fixture
def students_repo() -> InMemoryStudents:
    return InMemoryStudents([make_student()])


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def app(staff_repo, students_repo, attendance_repo):
    container = build_services(
        staff_repo=staff_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        windows=ALL_DAY,
    )
    return create_app(settings_module="config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()
