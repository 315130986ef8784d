from decimal import Decimal

from pydantic import BaseModel, Field

from fare_engine.discounts import Discount, DiscountedFare
from fare_engine.models import AddonSelection, FareBreakdown, PaymentMode, RentalWindow


class FareRequest(BaseModel):
    bike_id: int
    window: RentalWindow = Field(default_factory=RentalWindow)
    addons: dict[str, bool] = Field(
        default_factory=dict,
        description='Add-on toggles, e.g. {"helmet": true, "insurance": false}',
    )
    payment_mode: PaymentMode = PaymentMode.ONLINE
    discount: Discount | None = None

    def addon_selection(self) -> AddonSelection:
        return AddonSelection.from_flags(self.addons)


class QuoteResponse(BaseModel):
    bike_id: int
    priced: bool
    breakdown: FareBreakdown
    discounted: DiscountedFare | None = None
    total_payable: Decimal


class BookingRequest(FareRequest):
    expected_total: Decimal = Field(
        ge=0, description="Total payable the renter was shown and accepted"
    )


class BookingResponse(BaseModel):
    booking_id: str
    bike_id: int
    payment_mode: PaymentMode
    breakdown: FareBreakdown
    discount: Decimal
    total_payable: Decimal
    amount_minor: int
    currency: str
