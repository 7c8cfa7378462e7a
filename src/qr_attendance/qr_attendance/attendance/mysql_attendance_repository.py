from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_time
from .model import AttendanceRecord, RecordFilters
from .repository import AttendanceRepository

_COLUMNS = """
    id, student_id, school_id, student_name, year_level, date,
    time_in, time_out, recorded_by, status, created_at
"""


def _to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(row["id"]),
        student_id=int(row["student_id"]),
        school_id=row["school_id"],
        student_name=row["student_name"],
        year_level=row.get("year_level"),
        date=normalize_mysql_date(row["date"]),
        time_in=normalize_mysql_time(row.get("time_in")),
        time_out=normalize_mysql_time(row.get("time_out")),
        recorded_by=row.get("recorded_by"),
        status=AttendanceStatus(row["status"]),
        created_at=row.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_by_id(self, cur, record_id: int) -> Optional[AttendanceRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE id=%s", (record_id,))
        row = fetchone(cur)
        return _to_record(row) if row else None

    def get_for_student_and_date(self, student_id: int, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE student_id=%s AND date=%s",
                (student_id, day),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_recent_for_student(self, student_id: int, *, since: date, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE student_id=%s AND date >= %s
                ORDER BY date DESC
                LIMIT %s
                """,
                (student_id, since, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_time_in(
        self,
        *,
        student_id: int,
        school_id: str,
        student_name: str,
        year_level: Optional[str],
        day: date,
        time_in: time,
        recorded_by: Optional[int],
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(student_id, school_id, student_name, year_level,
                                               date, time_in, recorded_by, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student_id,
                    school_id,
                    student_name,
                    year_level,
                    day,
                    time_in,
                    recorded_by,
                    AttendanceStatus.PARTIAL.value,
                ),
            )
            return self._get_by_id(cur, int(cur.lastrowid))

    def set_time_out(self, *, record_id: int, time_out: time, status: AttendanceStatus) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET time_out=%s, status=%s WHERE id=%s AND time_out IS NULL",
                (time_out, status.value, record_id),
            )
            if cur.rowcount == 0:
                return None
            return self._get_by_id(cur, record_id)

    def search(self, filters: RecordFilters) -> Sequence[AttendanceRecord]:
        where: List[str] = []
        params: List[Any] = []

        if filters.date:
            where.append("date = %s")
            params.append(filters.date)
        if filters.school_id:
            where.append("school_id LIKE %s")
            params.append(f"%{filters.school_id}%")
        if filters.student_name:
            where.append("student_name LIKE %s")
            params.append(f"%{filters.student_name}%")
        if filters.year_level:
            where.append("year_level = %s")
            params.append(filters.year_level)

        sql = f"SELECT {_COLUMNS} FROM attendance_records"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC"
        if filters.limit:
            sql += " LIMIT %s"
            params.append(int(filters.limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def count_attendees(self, *, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(DISTINCT student_id) AS n FROM attendance_records WHERE date BETWEEN %s AND %s",
                (start, end),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0
