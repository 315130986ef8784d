"""Fare computation shared by the live quote and booking creation paths.

The duration is split greedily, largest tier first: whole years and quarters
(only when the rate table prices them), then whole months, weeks and days. The
remainder, always under a day, is billed per started hour.
"""

from collections.abc import Mapping
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from zoneinfo import ZoneInfo

from fare_engine.core.exceptions import ValidationError
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
from fare_engine.money import platform_fee, round2

DEFAULT_TIMEZONE = "Asia/Kolkata"

OPTIONAL_TIERS = frozenset({DurationUnit.YEAR, DurationUnit.QUARTER})
WHOLE_BLOCK_TIERS = (
    DurationUnit.YEAR,
    DurationUnit.QUARTER,
    DurationUnit.MONTH,
    DurationUnit.WEEK,
    DurationUnit.DAY,
)

_ONE_DAY = timedelta(days=1)
_ONE_MICROSECOND = timedelta(microseconds=1)


def decompose_duration(rate_table: RateTable, elapsed: timedelta) -> list[TierCharge]:
    """Split an elapsed time into billed tier units, largest unit first."""
    charges: list[TierCharge] = []
    remaining = elapsed

    for unit in WHOLE_BLOCK_TIERS:
        rate = rate_table.rate_for(unit)
        if unit in OPTIONAL_TIERS and not rate:
            continue
        assert rate is not None
        units, remaining = divmod(remaining, unit.block)
        if units:
            charges.append(_charge(unit, units, rate))

    # Any started hour is billed as a full hour
    hours, leftover = divmod(remaining, DurationUnit.HOUR.block)
    if leftover:
        hours += 1
    if hours:
        charges.append(_charge(DurationUnit.HOUR, hours, rate_table.hour))

    return charges


def _charge(unit: DurationUnit, units: int, rate: Decimal) -> TierCharge:
    return TierCharge(unit=unit, units=units, rate=rate, amount=rate * units)


def addons_total(addons: AddonSelection, prices: Mapping[str, Decimal]) -> Decimal:
    unknown = sorted(addons.enabled - prices.keys())
    if unknown:
        raise ValidationError(
            f"Unknown add-on: {', '.join(unknown)}",
            details={"addons": unknown, "available": sorted(prices)},
        )
    invalid = sorted(name for name in addons.enabled if not _is_whole_cents(prices[name]))
    if invalid:
        raise ValidationError(
            f"Add-on price must be a non-negative whole-cent amount: {', '.join(invalid)}",
            details={"addons": invalid},
        )
    return sum((prices[name] for name in addons.enabled), Decimal(0))


def _is_whole_cents(amount: Decimal) -> bool:
    return amount >= 0 and amount == round2(amount)


def duration_text(elapsed: timedelta) -> str:
    days = Decimal(elapsed // _ONE_MICROSECOND) / Decimal(_ONE_DAY // _ONE_MICROSECOND)
    return f"{days.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)} days"


def compute_fare(
    rate_table: RateTable,
    window: RentalWindow,
    addons: AddonSelection,
    payment_mode: PaymentMode,
    addon_prices: Mapping[str, Decimal] | None = None,
    tz: ZoneInfo | None = None,
) -> FareBreakdown:
    """Price a rental window against a bike's rate table.

    Returns the zero breakdown when the window is incomplete or drop-off is not
    strictly after pickup. Amounts accumulate unrounded; each output field is
    rounded to cents once. The fee is 2% of the rounded base fare plus add-ons
    and the total is the sum of the rounded fields.

    Args:
        rate_table: The bike's tier prices.
        window: Pickup and drop-off date/time fields.
        addons: Enabled optional services.
        payment_mode: Echoed on the result; does not change any amount.
        addon_prices: Price list for add-ons, defaults to helmet/insurance.
        tz: Zone the window's local times are read in.

    Raises:
        ValidationError: An enabled add-on is missing from the price list or
            its price is not a non-negative whole-cent amount.
    """
    elapsed = window.elapsed(tz or ZoneInfo(DEFAULT_TIMEZONE))
    if elapsed is None:
        return FareBreakdown.zero(payment_mode)

    tiers = decompose_duration(rate_table, elapsed)
    base = sum((tier.amount for tier in tiers), Decimal(0))
    addons_cost = addons_total(
        addons, DEFAULT_ADDON_PRICES if addon_prices is None else addon_prices
    )

    base_fare = round2(base)
    addons_fare = round2(addons_cost)
    fee = platform_fee(base_fare + addons_fare)
    return FareBreakdown(
        base_fare=base_fare,
        addons_cost=addons_fare,
        platform_fee=fee,
        total_payable=base_fare + addons_fare + fee,
        duration_text=duration_text(elapsed),
        payment_mode=payment_mode,
        tiers=tuple(tiers),
    )
