from __future__ import annotations

from enum import Enum


class NoticeVariant(str, Enum):
    """How the scanner UI should present a notice."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class PaymentStatus(str, Enum):
    """Label shown for an archived fine in reports and exports."""

    PAID = "Paid"
    UNPAID = "Unpaid"

    @classmethod
    def from_flag(cls, paid: bool) -> "PaymentStatus":
        return cls.PAID if paid else cls.UNPAID
