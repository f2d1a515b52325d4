from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..ledger.model import Notice


def account_key(account_id: str, roll_number: str) -> str:
    """Back-reference from an archive record to the ledger it came from."""
    return f"{account_id}_{roll_number}"


@dataclass(frozen=True)
class ArchiveRecord:
    """Snapshot of a settled fine. Written once, never updated."""

    archive_id: str
    account_key: str
    roll_number: str
    dept: str
    count: int
    fine: int
    total_amount: int
    status: bool
    created_at: Optional[str]
    archived_at: Optional[datetime] = None


@dataclass(frozen=True)
class SettlementResult:
    record: ArchiveRecord
    amount: int
    notice: Notice
