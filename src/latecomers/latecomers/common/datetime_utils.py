from __future__ import annotations

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo


def now_local(timezone: Optional[str] = None) -> datetime:
    """Current time, in `timezone` when given.

    Note: Wrapped so tests can patch/mocked easier.
    """
    if timezone:
        return datetime.now(ZoneInfo(timezone))
    return datetime.now()


def period_tag(month: int, year: int) -> str:
    """Billing period tag stored in `createdAt`, e.g. "3 2025"."""
    return f"{int(month)} {int(year)}"


def period_tag_for(moment: datetime) -> str:
    return period_tag(moment.month, moment.year)


def month_key(month: int, year: int) -> str:
    """MM-YYYY key used by the reports page and export file names."""
    return f"{int(month):02d}-{int(year)}"


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "N/A"
    return value.strftime("%Y-%m-%d %H:%M:%S")
