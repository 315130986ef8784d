"""Coupon discounts applied on top of a computed fare."""

from decimal import Decimal
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fare_engine.models import FareBreakdown
from fare_engine.money import ZERO, platform_fee, round2


class Discount(BaseModel):
    """A known discount: exactly one of a percentage or a flat amount."""

    model_config = ConfigDict(frozen=True)

    code: str | None = None
    percent: Decimal | None = Field(default=None, gt=0, le=100)
    flat_amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)

    @model_validator(mode="after")
    def exactly_one_kind(self) -> Self:
        if (self.percent is None) == (self.flat_amount is None):
            raise ValueError("Discount needs exactly one of percent or flat_amount")
        return self

    def amount_for(self, subtotal: Decimal) -> Decimal:
        """Discount on the given subtotal, capped so it never goes negative."""
        if self.percent is not None:
            amount = subtotal * self.percent / 100
        else:
            assert self.flat_amount is not None
            amount = self.flat_amount
        return round2(min(amount, subtotal))


class DiscountedFare(BaseModel):
    """A fare breakdown with a coupon applied."""

    model_config = ConfigDict(frozen=True)

    breakdown: FareBreakdown
    discount_code: str | None
    discount: Decimal
    subtotal: Decimal
    platform_fee: Decimal
    total_payable: Decimal


def apply_discount(
    breakdown: FareBreakdown,
    discount: Discount,
    fee_on_discounted_subtotal: bool = False,
) -> DiscountedFare:
    """Subtract a discount from the base fare plus add-ons.

    By default the platform fee stays as computed on the undiscounted subtotal,
    so even a 100% coupon leaves the fee payable.
    """
    subtotal = breakdown.subtotal
    amount = discount.amount_for(subtotal) if subtotal > 0 else ZERO
    discounted = subtotal - amount

    fee = breakdown.platform_fee
    if fee_on_discounted_subtotal and amount:
        fee = platform_fee(discounted)

    return DiscountedFare(
        breakdown=breakdown,
        discount_code=discount.code,
        discount=amount,
        subtotal=discounted,
        platform_fee=fee,
        total_payable=discounted + fee,
    )
