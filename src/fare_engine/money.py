"""Decimal helpers shared by every place that produces a monetary amount."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import Field

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Platform fee is charged on every booking regardless of payment mode
PLATFORM_FEE_RATE = Decimal("0.02")

# Prices configured or loaded from a catalog are whole cents
Price = Annotated[Decimal, Field(ge=0, decimal_places=2)]


def as_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a number to Decimal without inheriting binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def platform_fee(subtotal: Decimal) -> Decimal:
    """2% of the subtotal, rounded to cents."""
    return round2(subtotal * PLATFORM_FEE_RATE)


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount (rupees) to the gateway's minor unit (paise)."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
