"""Clear attendance fields across the late-comers collection, page by page.

Same operation as POST /api/clear-monthly, run from a shell.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.latecomers.latecomers import configure_logging, load_settings

from src.latecomers.latecomers.container import build_container


def main() -> None:
    settings = load_settings()
    configure_logging(settings)
    container = build_container(settings=settings)
    try:
        result = container.field_clear_service.clear(settings.CRON_SECRET_TOKEN)
        print(f"OK: {result.message} (batches={result.batch_sizes})")
    finally:
        container.conn.close()


if __name__ == "__main__":
    main()
