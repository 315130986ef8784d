"""Fare computation for bike rentals."""

from fare_engine.calculator import compute_fare, decompose_duration
from fare_engine.discounts import Discount, DiscountedFare, apply_discount
from fare_engine.models import (
    DEFAULT_ADDON_PRICES,
    AddonSelection,
    DurationUnit,
    FareBreakdown,
    PaymentMode,
    RateTable,
    RentalWindow,
    TierCharge,
)

__all__ = [
    "DEFAULT_ADDON_PRICES",
    "AddonSelection",
    "Discount",
    "DiscountedFare",
    "DurationUnit",
    "FareBreakdown",
    "PaymentMode",
    "RateTable",
    "RentalWindow",
    "TierCharge",
    "apply_discount",
    "compute_fare",
    "decompose_duration",
]
