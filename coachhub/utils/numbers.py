"""CoachHub API - Numeric Helpers."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union


def round_half_up(value: Union[int, float, Decimal], digits: int = 1) -> float:
    """Round to ``digits`` decimals, halves away from zero (0.25 -> 0.3)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
