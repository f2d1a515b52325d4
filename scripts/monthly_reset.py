"""Monthly late-comers reset.

Schedule with cron at 00:00 on day 1 of every month, e.g.:

    CRON_TZ=Asia/Kolkata
    0 0 1 * * cd /srv/late-comers && python scripts/monthly_reset.py

Exits non-zero on failure so the scheduler can retry/alert.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.latecomers.latecomers import configure_logging, load_settings

from src.latecomers.latecomers.container import build_container
from src.latecomers.latecomers.core.exceptions import StoreError


def main() -> int:
    settings = load_settings()
    configure_logging(settings)
    container = build_container(settings=settings)
    try:
        container.monthly_reset_job.run()
    except StoreError:
        return 1
    finally:
        container.conn.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
