from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.latecomers.latecomers import load_settings

from src.latecomers.latecomers.database.bootstrap import ensure_demo_accounts
from src.latecomers.latecomers.database.connection import DatabaseConnection, StoreConfig


def main() -> None:
    settings = load_settings()
    conn = DatabaseConnection(StoreConfig(uri=settings.MONGODB_URI, database=settings.MONGODB_DB))
    try:
        created = ensure_demo_accounts(conn)
        print(f"OK: Seeded database -> {settings.MONGODB_DB} (new accounts={created})")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
