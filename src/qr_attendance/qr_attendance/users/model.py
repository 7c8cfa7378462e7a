from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class StaffAccount:
    """Admin, faculty or SBO officer account (pure data, no DB access)."""

    id: int
    username: str
    full_name: str
    password_hash: str
    role: Role
    email: Optional[str] = None
    position: Optional[str] = None


@dataclass(frozen=True)
class Student:
    id: int
    school_id: str
    first_name: str
    last_name: str
    birthdate: date
    year_level: str
    password_hash: str
    middle_name: Optional[str] = None
    tribe: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
