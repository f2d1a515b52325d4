from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import validate_roll_number
from ..core.exceptions import ValidationError
from ..ledger.model import Notice
from ..ledger.policy import FinePolicy
from .model import SettlementResult, account_key
from .repository import ArchiveRepository

logger = logging.getLogger(__name__)


class SettlementService:
    """Archive-and-settle: record a paid fine and clear the student's ledger entry."""

    def __init__(
        self,
        archive: ArchiveRepository,
        *,
        policy: FinePolicy | None = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._archive = archive
        self._policy = policy or FinePolicy()
        self._clock = clock or now_local

    def settle(self, account_id: str, roll_number: str, *, confirmed: bool) -> SettlementResult:
        roll = validate_roll_number(roll_number)
        if not confirmed:
            raise ValidationError(f"Please confirm marking Roll No. {roll} as paid")

        stamp = self._clock().strftime("%Y%m%d%H%M%S%f")
        record = self._archive.settle(
            account_id=account_id,
            roll_number=roll,
            archive_id=f"{account_key(account_id, roll)}_{stamp}",
            threshold=self._policy.threshold,
            unit_price=self._policy.unit_price,
        )

        amount = record.total_amount
        logger.info("fine settled account=%s roll=%s amount=%s archive=%s", account_id, roll, amount, record.archive_id)
        return SettlementResult(
            record=record,
            amount=amount,
            notice=Notice(
                title="Payment recorded",
                description=f"Payment of {self._policy.format_amount(amount)} recorded successfully for Roll No. {roll}",
            ),
        )
