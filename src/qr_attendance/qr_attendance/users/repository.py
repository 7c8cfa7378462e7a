from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ..core.enums import Role
from .model import StaffAccount, Student


class StaffRepository(Protocol):
    def get_by_username(self, username: str, *, role: Role) -> Optional[StaffAccount]:
        raise NotImplementedError


class StudentRepository(Protocol):
    def get_by_school_id(self, school_id: str) -> Optional[Student]:
        raise NotImplementedError

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
        raise NotImplementedError

    def count_students(self) -> int:
        raise NotImplementedError
