from __future__ import annotations

from typing import Optional, Tuple

from ..core.constants import ROLL_NUMBER_LENGTH
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def validate_roll_number(value: Optional[str]) -> str:
    """Return the roll number unchanged if it is a non-zero, 5-digit string.

    Runs before any write so a rejected scan never touches the store.
    """

    roll = "" if value is None else str(value)
    if not roll.isascii() or not roll.isdigit() or int(roll) == 0:
        raise ValidationError("Invalid Roll Number: please enter a valid roll number")
    if len(roll) != ROLL_NUMBER_LENGTH:
        raise ValidationError(f"Invalid Roll Number Format: roll number must be exactly {ROLL_NUMBER_LENGTH} digits")
    return roll


def parse_month_key(value: Optional[str]) -> Tuple[int, int]:
    """Parse a report month key of the form MM-YYYY into (month, year)."""

    raw = require_non_empty(value, "Month")
    parts = raw.split("-")
    if len(parts) != 2 or not all(p.isdigit() for p in parts) or len(parts[1]) != 4:
        raise ValidationError("Month must look like MM-YYYY")

    month, year = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 01 and 12")
    return month, year
