from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..core.enums import NoticeVariant


@dataclass(frozen=True)
class LedgerEntry:
    """Domain entity: one student's late record inside an account document."""

    roll_number: str
    count: int
    fine: int
    status: bool
    created_at: Optional[str]
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class Account:
    """A scanning-station account and the ledger it owns."""

    account_id: str
    dept: str
    entries: Dict[str, LedgerEntry] = field(default_factory=dict)


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.DEFAULT

    def as_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "variant": self.variant.value}


@dataclass(frozen=True)
class MarkResult:
    entry: LedgerEntry
    fined: bool
    notice: Notice


@dataclass(frozen=True)
class FinedOverview:
    """Read-model for the fined students table."""

    dept: str
    entries: List[LedgerEntry]
    total_pending: int
