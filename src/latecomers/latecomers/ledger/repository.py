from __future__ import annotations

from typing import Optional, Protocol

from .model import Account, LedgerEntry


class LedgerRepository(Protocol):
    """Repository interface for the per-account late ledger.

    Note (DIP): the service depends on this interface, not on a concrete store.
    """

    def get_account(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def record_late(self, *, account_id: str, roll_number: str, period_tag: str, threshold: int) -> LedgerEntry:
        """Atomically count one late arrival and accrue a fine past `threshold`.

        Returns the entry as it stands after the write.
        """

        raise NotImplementedError
