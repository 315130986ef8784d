"""Quote and booking flows built on compute_fare.

The live quote and the booking confirmation go through quote_fare, so the
amount a renter accepted on screen is the amount sent for payment.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from fare_engine.calculator import compute_fare
from fare_engine.catalog import Bike, BikeCatalog
from fare_engine.core.exceptions import FareMismatchError, ValidationError
from fare_engine.discounts import Discount, DiscountedFare, apply_discount
from fare_engine.fare_logging import log_booking_context
from fare_engine.models import AddonSelection, FareBreakdown, PaymentMode, RentalWindow
from fare_engine.money import as_decimal, round2, to_minor_units
from fare_engine.settings import PricingSettings

logger = logging.getLogger(__name__)

BookingIdFactory = Callable[[], str]


def time_based_booking_id() -> str:
    """Booking reference in the BK<epoch millis> format the gateway receipts use."""
    return f"BK{int(time.time() * 1000)}"


@dataclass(frozen=True)
class Quote:
    bike: Bike
    window: RentalWindow
    breakdown: FareBreakdown
    discounted: DiscountedFare | None = None
    priced: bool = True

    @property
    def discount(self) -> Decimal:
        return self.discounted.discount if self.discounted else Decimal("0.00")

    @property
    def total_payable(self) -> Decimal:
        if self.discounted is not None:
            return self.discounted.total_payable
        return self.breakdown.total_payable


@dataclass(frozen=True)
class BookingCharge:
    """What the payment gateway is asked to collect for a new booking."""

    booking_id: str
    bike_id: int
    payment_mode: PaymentMode
    breakdown: FareBreakdown
    discount: Decimal
    total_payable: Decimal
    amount_minor: int
    currency: str


def quote_fare(
    catalog: BikeCatalog,
    pricing: PricingSettings,
    bike_id: int,
    window: RentalWindow,
    addons: AddonSelection,
    payment_mode: PaymentMode,
    discount: Discount | None = None,
) -> Quote:
    """Price a rental for a catalog bike, applying a coupon when given."""
    bike = catalog.get(bike_id)
    breakdown = compute_fare(
        bike.price,
        window,
        addons,
        payment_mode,
        addon_prices=pricing.addon_prices(),
        tz=pricing.zone,
    )
    discounted = None
    if discount is not None:
        discounted = apply_discount(
            breakdown,
            discount,
            fee_on_discounted_subtotal=pricing.fee_on_discounted_subtotal,
        )

    quote = Quote(
        bike=bike,
        window=window,
        breakdown=breakdown,
        discounted=discounted,
        priced=window.elapsed(pricing.zone) is not None,
    )
    logger.debug(
        "Quoted bike %d: %s for %s (%s)",
        bike.id,
        quote.total_payable,
        breakdown.duration_text,
        payment_mode.value,
    )
    return quote


def confirm_booking(
    quote: Quote,
    expected_total: Decimal | int | float | str,
    currency: str,
    booking_id_factory: BookingIdFactory = time_based_booking_id,
) -> BookingCharge:
    """Turn a recomputed quote into a charge, refusing any price drift.

    Raises:
        ValidationError: The bike cannot be booked or the window is not priceable.
        FareMismatchError: expected_total differs from the recomputed total.
    """
    if not quote.bike.bookable:
        raise ValidationError(
            f"Bike is not available for booking: {quote.bike.name}",
            details={"bike_id": quote.bike.id, "availability": quote.bike.availability},
        )
    if not quote.priced:
        raise ValidationError(
            "Rental window is incomplete or drop-off is not after pickup",
            details={"window": quote.window.model_dump(mode="json")},
        )

    total = quote.total_payable
    expected = round2(as_decimal(expected_total))
    if expected != total:
        logger.warning(
            "Fare mismatch for bike %d: client %s, server %s",
            quote.bike.id,
            expected,
            total,
        )
        raise FareMismatchError(
            "Displayed total does not match the recomputed fare",
            details={"expected_total": str(expected), "total_payable": str(total)},
        )

    booking_id = booking_id_factory()
    payment_mode = quote.breakdown.payment_mode
    with log_booking_context(booking_id, bike_id=quote.bike.id, payment_mode=payment_mode.value):
        charge = BookingCharge(
            booking_id=booking_id,
            bike_id=quote.bike.id,
            payment_mode=payment_mode,
            breakdown=quote.breakdown,
            discount=quote.discount,
            total_payable=total,
            amount_minor=to_minor_units(total),
            currency=currency,
        )
        logger.info("Booking created: %s %s (%d minor units)", total, currency, charge.amount_minor)
    return charge
