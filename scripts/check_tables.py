"""Print the columns of the portal tables, flagging the ones that are missing."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.qr_attendance.qr_attendance.database.bootstrap import describe_table

TABLES = ("staff_accounts", "students", "attendance_records")


def main() -> int:
    db_config = dict(load_settings().DB_CONFIG)
    missing = 0
    for table in TABLES:
        try:
            columns = describe_table(db_config, table)
        except LookupError as e:
            print(f"MISSING: {e}")
            missing += 1
            continue
        print(f"{table}: {', '.join(columns)}")
    return 1 if missing else 0


if __name__ == "__main__":
    raise SystemExit(main())
