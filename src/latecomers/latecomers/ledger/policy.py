from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_CURRENCY_SYMBOL, DEFAULT_FINE_UNIT_PRICE, DEFAULT_LATE_THRESHOLD


@dataclass(frozen=True)
class FinePolicy:
    """Late-count threshold and fine pricing, shared by every feature module."""

    threshold: int = DEFAULT_LATE_THRESHOLD
    unit_price: int = DEFAULT_FINE_UNIT_PRICE
    currency: str = DEFAULT_CURRENCY_SYMBOL

    def is_fined(self, count: int) -> bool:
        return int(count) > self.threshold

    def amount_for(self, fine: int) -> int:
        return int(fine) * self.unit_price

    def format_amount(self, amount: int) -> str:
        return f"{self.currency}{int(amount)}"
