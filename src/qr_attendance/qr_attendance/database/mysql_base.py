from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .connection import DatabaseConnection


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection, *, dictionary: bool = True, with_database: bool = True
) -> Iterator[Tuple[Any, Any]]:
    """Yield ``(conn, cursor)``; commit when the block succeeds, roll back when it raises."""
    conn = conn_factory.connect(with_database=with_database)
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or ())


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns come back as time, timedelta or 'HH:MM[:SS]' text depending on the connector."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        minutes, seconds = divmod(int(value.total_seconds()) % 86400, 60)
        hours, minutes = divmod(minutes, 60)
        return time(hours, minutes, seconds)
    if isinstance(value, str):
        fields = [int(p) for p in value.strip().split(":") if p]
        if len(fields) not in (2, 3):
            raise ValueError(f"Invalid time string: {value!r}")
        return time(*fields)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def normalize_mysql_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
