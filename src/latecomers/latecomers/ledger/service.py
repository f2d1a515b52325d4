from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local, period_tag_for
from ..common.validators import require_non_empty, validate_roll_number
from ..core.constants import DEFAULT_MAX_LEDGER_ENTRIES
from ..core.enums import NoticeVariant
from ..core.exceptions import AuthorizationError, LedgerFullError
from .model import Account, FinedOverview, LedgerEntry, MarkResult, Notice
from .policy import FinePolicy
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(
        self,
        ledger: LedgerRepository,
        *,
        policy: FinePolicy | None = None,
        max_entries: int = DEFAULT_MAX_LEDGER_ENTRIES,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._ledger = ledger
        self._policy = policy or FinePolicy()
        self._max_entries = int(max_entries)
        self._clock = clock or now_local

    def open_session(self, account_id: str) -> Account:
        """Resolve the scanning account a browser session will act for."""
        account_id = require_non_empty(account_id, "Account id")
        account = self._ledger.get_account(account_id)
        if account is None:
            raise AuthorizationError("Unknown scanning account")
        logger.info("session opened account=%s dept=%s", account.account_id, account.dept)
        return account

    def mark_late(self, account_id: str, roll_number: str) -> MarkResult:
        roll = validate_roll_number(roll_number)
        self._ensure_capacity(account_id, roll)

        entry = self._ledger.record_late(
            account_id=account_id,
            roll_number=roll,
            period_tag=period_tag_for(self._clock()),
            threshold=self._policy.threshold,
        )
        fined = self._policy.is_fined(entry.count)
        logger.info("late mark account=%s roll=%s count=%s fine=%s", account_id, roll, entry.count, entry.fine)
        return MarkResult(entry=entry, fined=fined, notice=self._notice_for(entry, fined))

    def fined_overview(self, account_id: str, *, search: str = "") -> FinedOverview:
        account = self._ledger.get_account(account_id)
        if not account:
            return FinedOverview(dept="", entries=[], total_pending=0)

        fined = [e for e in account.entries.values() if self._policy.is_fined(e.count)]
        total_pending = sum(self._policy.amount_for(e.fine) for e in fined)

        needle = (search or "").strip().lower()
        if needle:
            fined = [e for e in fined if needle in e.roll_number.lower()]
        fined.sort(key=lambda e: (-e.count, e.roll_number))

        return FinedOverview(dept=account.dept, entries=fined, total_pending=total_pending)

    def _ensure_capacity(self, account_id: str, roll: str) -> None:
        account = self._ledger.get_account(account_id)
        if not account or roll in account.entries:
            return
        if len(account.entries) >= self._max_entries:
            raise LedgerFullError(f"This account already tracks {self._max_entries} roll numbers")

    def _notice_for(self, entry: LedgerEntry, fined: bool) -> Notice:
        if fined:
            return Notice(
                title="⚠️ Collect ID! Late comer",
                description=f"Roll number {entry.roll_number} has been late {entry.count} times. Fine will be applied.",
                variant=NoticeVariant.DESTRUCTIVE,
            )
        return Notice(
            title="✅ Attendance Marked",
            description=f"Roll number {entry.roll_number} marked as late ({entry.count}/{self._policy.threshold})",
        )
