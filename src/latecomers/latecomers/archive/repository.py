from __future__ import annotations

from typing import Protocol, Sequence

from .model import ArchiveRecord


class ArchiveRepository(Protocol):
    def settle(
        self,
        *,
        account_id: str,
        roll_number: str,
        archive_id: str,
        threshold: int,
        unit_price: int,
    ) -> ArchiveRecord:
        """Archive the live entry and reset it, as one unit of work.

        Raises ValidationError when the entry has no outstanding fine
        (count not above `threshold`); nothing is written in that case.
        """

        raise NotImplementedError

    def list_for_period(self, period_tag: str) -> Sequence[ArchiveRecord]:
        """Archived records whose `createdAt` equals `period_tag`, by roll number."""

        raise NotImplementedError
