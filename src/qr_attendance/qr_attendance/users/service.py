from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_fields, require_non_empty
from ..core.enums import STAFF_ROLES, Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..session.model import Identity
from .model import StaffAccount, Student
from .repository import StaffRepository, StudentRepository

logger = logging.getLogger(__name__)

YEAR_LEVELS = ("y1", "y2", "y3", "y4")
REGISTRATION_FIELDS = ("school_id", "last_name", "first_name", "year_level", "tribe", "birthdate")


def initial_student_password(last_name: str, birthdate: str) -> str:
    """Students start with their last name followed by their YYYY-MM-DD birthdate."""
    return f"{last_name}{birthdate}"


def staff_identity(account: StaffAccount) -> Identity:
    return Identity.of(
        id=account.id,
        username=account.username,
        full_name=account.full_name,
        email=account.email,
        position=account.position,
        role=account.role.value,
    )


def student_identity(student: Student) -> Identity:
    return Identity.of(
        id=student.id,
        school_id=student.school_id,
        first_name=student.first_name,
        last_name=student.last_name,
        birthdate=student.birthdate.isoformat(),
        year_level=student.year_level,
        tribe=student.tribe,
        role=Role.STUDENT.value,
    )


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use case: turn credentials into an Identity (login and student sign-up)."""

    def __init__(self, staff: StaffRepository, students: StudentRepository):
        self._staff = staff
        self._students = students

    def authenticate(self, username: str, password: str) -> Identity:
        """Try admin, faculty and SBO accounts by username, then students by school ID."""
        username = (username or "").strip()
        if not username or not password:
            raise AuthenticationError("Invalid credentials")

        for role in STAFF_ROLES:
            account = self._staff.get_by_username(username, role=role)
            if account and _password_matches(account.password_hash, password):
                logger.info("Login succeeded for %s account %s", role.value, username)
                return staff_identity(account)

        student = self._students.get_by_school_id(username)
        if student and _password_matches(student.password_hash, password):
            logger.info("Login succeeded for student %s", username)
            return student_identity(student)

        logger.info("Login failed for %s", username)
        raise AuthenticationError("Invalid credentials")

    def register_student(
        self,
        *,
        school_id: str,
        last_name: str,
        first_name: str,
        birthdate: str,
        year_level: str,
        tribe: str,
        middle_name: Optional[str] = None,
    ) -> Identity:
        """Create a student account and log it in right away."""
        require_fields(
            {
                "school_id": school_id,
                "last_name": last_name,
                "first_name": first_name,
                "year_level": year_level,
                "tribe": tribe,
                "birthdate": birthdate,
            },
            REGISTRATION_FIELDS,
        )
        school_id = require_non_empty(school_id, "School ID")
        last_name = last_name.strip()
        first_name = first_name.strip()
        birthdate = birthdate.strip()

        if year_level not in YEAR_LEVELS:
            raise ValidationError("Invalid year level")
        try:
            born = parse_iso_date(birthdate)
        except ValueError:
            raise ValidationError("Birthdate must use the YYYY-MM-DD format")

        if self._students.get_by_school_id(school_id):
            raise ValidationError("Student with this School ID already exists")

        password = initial_student_password(last_name, birthdate)
        self._students.create_student(
            school_id=school_id,
            first_name=first_name,
            last_name=last_name,
            middle_name=(middle_name or "").strip() or None,
            birthdate=born,
            year_level=year_level,
            tribe=tribe.strip(),
            password_hash=generate_password_hash(password),
        )
        logger.info("Registered student %s", school_id)
        return self.authenticate(school_id, password)
