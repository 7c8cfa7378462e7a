from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Wrapped so tests can patch it.
    """
    return datetime.now()


def format_clock(value: Optional[time]) -> str:
    return value.strftime("%H:%M:%S") if value else ""
