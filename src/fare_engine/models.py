"""Rate tables, rental windows and fare breakdown models."""

from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fare_engine.core.exceptions import ValidationError
from fare_engine.money import ZERO


class DurationUnit(str, Enum):
    """Billable duration tiers, largest first."""

    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"

    @property
    def hours(self) -> int:
        return _UNIT_HOURS[self]

    @property
    def block(self) -> timedelta:
        return timedelta(hours=self.hours)

    @property
    def rate_field(self) -> str:
        """Name of the RateTable field holding this tier's price."""
        return _UNIT_RATE_FIELDS[self]

    @property
    def label(self) -> str:
        return _UNIT_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "DurationUnit":
        """Resolve a tariff label such as "Hourly" (or a unit value such as "hour")."""
        key = label.strip().lower()
        for unit in cls:
            if key in (unit.value, unit.label.lower()):
                return unit
        raise ValidationError(f"Unknown tariff: {label}", details={"tariff": label})


_UNIT_HOURS: dict[DurationUnit, int] = {
    DurationUnit.YEAR: 365 * 24,
    DurationUnit.QUARTER: 90 * 24,
    DurationUnit.MONTH: 30 * 24,
    DurationUnit.WEEK: 7 * 24,
    DurationUnit.DAY: 24,
    DurationUnit.HOUR: 1,
}

_UNIT_RATE_FIELDS: dict[DurationUnit, str] = {
    DurationUnit.YEAR: "yearly",
    DurationUnit.QUARTER: "quarterly",
    DurationUnit.MONTH: "month",
    DurationUnit.WEEK: "week",
    DurationUnit.DAY: "day",
    DurationUnit.HOUR: "hour",
}

_UNIT_LABELS: dict[DurationUnit, str] = {
    DurationUnit.YEAR: "Yearly",
    DurationUnit.QUARTER: "Quarterly",
    DurationUnit.MONTH: "Monthly",
    DurationUnit.WEEK: "Weekly",
    DurationUnit.DAY: "Daily",
    DurationUnit.HOUR: "Hourly",
}


class PaymentMode(str, Enum):
    """How the renter pays. Carried through to receipts, does not affect pricing."""

    CASH = "CASH"
    ONLINE = "ONLINE"


class RateTable(BaseModel):
    """Per-tier prices attached to a rentable bike, in major currency units."""

    model_config = ConfigDict(frozen=True)

    hour: Decimal = Field(ge=0, decimal_places=2)
    day: Decimal = Field(ge=0, decimal_places=2)
    week: Decimal = Field(ge=0, decimal_places=2)
    month: Decimal = Field(ge=0, decimal_places=2)
    quarterly: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    yearly: Decimal | None = Field(default=None, ge=0, decimal_places=2)

    def rate_for(self, unit: DurationUnit) -> Decimal | None:
        rate: Decimal | None = getattr(self, unit.rate_field)
        return rate


class RentalWindow(BaseModel):
    """Pickup and drop-off, each a calendar date plus a local clock time.

    Fields may be missing while a booking form is still being filled in.
    """

    model_config = ConfigDict(frozen=True)

    pickup_date: date | None = None
    pickup_time: time | None = None
    drop_date: date | None = None
    drop_time: time | None = None

    @field_validator("pickup_date", "pickup_time", "drop_date", "drop_time", mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def is_complete(self) -> bool:
        return None not in (self.pickup_date, self.pickup_time, self.drop_date, self.drop_time)

    def instants(self, tz: ZoneInfo) -> tuple[datetime, datetime] | None:
        """Pickup and drop-off as aware datetimes, or None if incomplete."""
        if not self.is_complete():
            return None
        assert self.pickup_date and self.pickup_time and self.drop_date and self.drop_time
        start = datetime.combine(self.pickup_date, self.pickup_time, tzinfo=tz)
        end = datetime.combine(self.drop_date, self.drop_time, tzinfo=tz)
        return start, end

    def elapsed(self, tz: ZoneInfo) -> timedelta | None:
        """Positive elapsed time, or None when the window cannot be priced."""
        instants = self.instants(tz)
        if instants is None:
            return None
        start, end = instants
        # Subtract in UTC so DST transitions count as real elapsed time
        delta = end.astimezone(UTC) - start.astimezone(UTC)
        if delta <= timedelta(0):
            return None
        return delta


class AddonSelection(BaseModel):
    """Names of the optional services the renter switched on."""

    model_config = ConfigDict(frozen=True)

    enabled: frozenset[str] = frozenset()

    @classmethod
    def from_flags(cls, flags: dict[str, bool]) -> "AddonSelection":
        """Build from toggle state, e.g. {"helmet": True, "insurance": False}."""
        return cls(enabled=frozenset(name for name, on in flags.items() if on))


DEFAULT_ADDON_PRICES: dict[str, Decimal] = {
    "helmet": Decimal("50"),
    "insurance": Decimal("100"),
}


class TierCharge(BaseModel):
    """One line of the duration decomposition."""

    model_config = ConfigDict(frozen=True)

    unit: DurationUnit
    units: int
    rate: Decimal
    amount: Decimal


class FareBreakdown(BaseModel):
    """Priced result of a fare computation."""

    model_config = ConfigDict(frozen=True)

    base_fare: Decimal
    addons_cost: Decimal
    platform_fee: Decimal
    total_payable: Decimal
    duration_text: str
    payment_mode: PaymentMode
    tiers: tuple[TierCharge, ...] = ()

    @classmethod
    def zero(cls, payment_mode: PaymentMode) -> "FareBreakdown":
        """The breakdown returned while a window cannot be priced yet."""
        return cls(
            base_fare=ZERO,
            addons_cost=ZERO,
            platform_fee=ZERO,
            total_payable=ZERO,
            duration_text="0 days",
            payment_mode=payment_mode,
        )

    @property
    def subtotal(self) -> Decimal:
        return self.base_fare + self.addons_cost
