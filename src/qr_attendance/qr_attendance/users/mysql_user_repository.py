from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_date
from .model import StaffAccount, Student
from .repository import StaffRepository, StudentRepository


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_username(self, username: str, *, role: Role) -> Optional[StaffAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, username, full_name, email, position, password_hash, role
                FROM staff_accounts
                WHERE username=%s AND role=%s
                """,
                (username, role.value),
            )
            row = fetchone(cur)
            if not row:
                return None
            return StaffAccount(
                id=int(row["id"]),
                username=row["username"],
                full_name=row["full_name"],
                password_hash=row["password_hash"],
                role=Role(row["role"]),
                email=row.get("email"),
                position=row.get("position"),
            )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_school_id(self, school_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, school_id, first_name, last_name, middle_name, birthdate,
                       year_level, tribe, password_hash
                FROM students
                WHERE school_id=%s
                """,
                (school_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Student(
                id=int(row["id"]),
                school_id=row["school_id"],
                first_name=row["first_name"],
                last_name=row["last_name"],
                middle_name=row.get("middle_name"),
                birthdate=normalize_mysql_date(row["birthdate"]),
                year_level=row["year_level"],
                tribe=row.get("tribe"),
                password_hash=row["password_hash"],
            )

    def create_student(
        self,
        *,
        school_id: str,
        first_name: str,
        last_name: str,
        middle_name: Optional[str],
        birthdate: date,
        year_level: str,
        tribe: Optional[str],
        password_hash: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(school_id, first_name, last_name, middle_name, birthdate,
                                     year_level, tribe, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (school_id, first_name, last_name, middle_name, birthdate, year_level, tribe, password_hash),
            )
            return int(cur.lastrowid)

    def count_students(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
