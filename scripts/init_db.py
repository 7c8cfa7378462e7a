"""Create the configured database and apply database/schema.sql (safe to re-run)."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.qr_attendance.qr_attendance.database.bootstrap import apply_schema, list_tables
from src.qr_attendance.qr_attendance.main import SCHEMA_PATH


def main() -> None:
    db_config = dict(load_settings().DB_CONFIG)
    applied = apply_schema(db_config, schema_path=SCHEMA_PATH)
    tables = list_tables(db_config)
    print(f"OK: {applied} statements applied to {db_config.get('database')} ({', '.join(sorted(tables))})")


if __name__ == "__main__":
    main()
