from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.qr_attendance.qr_attendance.database.bootstrap import DEMO_STAFF, ensure_demo_accounts


def main() -> None:
    db_config = dict(load_settings().DB_CONFIG)
    ensure_demo_accounts(db_config)

    print(f"OK: Demo accounts ready in {db_config.get('database')}:")
    for username, password, role, *_ in DEMO_STAFF:
        print(f"  {role:<8} {username} / {password}")


if __name__ == "__main__":
    main()
