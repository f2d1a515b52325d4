from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..core.constants import DEFAULT_RESET_PAGE_SIZE
from ..core.exceptions import AuthorizationError, StoreError
from .repository import LateComersRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClearResult:
    processed_count: int
    batch_sizes: List[int]

    @property
    def message(self) -> str:
        return f"Successfully cleared fields in {self.processed_count} documents"


class MonthlyResetJob:
    """Runs at 00:00 on the first of each month and empties every late-comers document."""

    def __init__(self, late_comers: LateComersRepository):
        self._late_comers = late_comers

    def run(self) -> None:
        try:
            count = self._late_comers.reset_all()
        except StoreError:
            logger.exception("Error resetting late-comers collection")
            raise
        logger.info("Successfully reset late-comers collection for the new month (%s documents)", count)
        return None


class FieldClearService:
    """On-demand variant of the monthly reset: clears attendance fields page by page.

    Each page commits on its own, so a failure part-way leaves earlier pages
    cleared. Running it again is safe.
    """

    def __init__(
        self,
        late_comers: LateComersRepository,
        *,
        secret_token: Optional[str],
        page_size: int = DEFAULT_RESET_PAGE_SIZE,
    ):
        self._late_comers = late_comers
        self._secret_token = secret_token or ""
        self._page_size = int(page_size)

    def authorize(self, token: Optional[str]) -> None:
        if not self._secret_token or not token:
            raise AuthorizationError("Unauthorized")
        if not hmac.compare_digest(str(token).encode("utf-8"), self._secret_token.encode("utf-8")):
            raise AuthorizationError("Unauthorized")

    def clear(self, token: Optional[str]) -> ClearResult:
        self.authorize(token)

        processed = 0
        batches: List[int] = []
        after_id = None
        while True:
            ids = list(self._late_comers.fetch_page_ids(after_id=after_id, limit=self._page_size))
            if not ids:
                break

            self._late_comers.clear_fields(ids)
            processed += len(ids)
            batches.append(len(ids))
            after_id = ids[-1]

            if len(ids) < self._page_size:
                break

        logger.info("cleared late-comers fields in %s documents (%s batches)", processed, len(batches))
        return ClearResult(processed_count=processed, batch_sizes=batches)
