from fastapi import APIRouter, Depends

from fare_engine.api.auth import verify_api_key
from fare_engine.api.dependencies import BookingIdFactoryDep, CatalogDep, SettingsDep
from fare_engine.api.models import BookingRequest, BookingResponse
from fare_engine.quotes import confirm_booking, quote_fare

router = APIRouter(dependencies=[Depends(verify_api_key)])


@router.post("", response_model=BookingResponse, status_code=201)
def create_booking(
    body: BookingRequest,
    catalog: CatalogDep,
    settings: SettingsDep,
    booking_id_factory: BookingIdFactoryDep,
) -> BookingResponse:
    """Recompute the fare server-side and produce the amount to charge."""
    result = quote_fare(
        catalog,
        settings.pricing,
        body.bike_id,
        body.window,
        body.addon_selection(),
        body.payment_mode,
        discount=body.discount,
    )
    charge = confirm_booking(
        result,
        body.expected_total,
        settings.pricing.currency,
        booking_id_factory=booking_id_factory,
    )
    return BookingResponse(
        booking_id=charge.booking_id,
        bike_id=charge.bike_id,
        payment_mode=charge.payment_mode,
        breakdown=charge.breakdown,
        discount=charge.discount,
        total_payable=charge.total_payable,
        amount_minor=charge.amount_minor,
        currency=charge.currency,
    )
