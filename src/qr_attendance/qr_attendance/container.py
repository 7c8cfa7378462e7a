from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.windows import ScanWindows
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLStaffRepository, MySQLStudentRepository
from .users.repository import StaffRepository, StudentRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    staff_repo: StaffRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    attendance_service: AttendanceService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    staff_repo: StaffRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    windows: ScanWindows | None = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementation (MySQL or in-memory)."""
    return Container(
        staff_repo=staff_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(staff_repo, students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo, windows=windows),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        staff_repo=MySQLStaffRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        conn=conn,
    )
