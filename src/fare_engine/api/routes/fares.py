from fastapi import APIRouter

from fare_engine.api.dependencies import CatalogDep, SettingsDep
from fare_engine.api.models import FareRequest, QuoteResponse
from fare_engine.quotes import quote_fare

router = APIRouter()


@router.post("/quote", response_model=QuoteResponse)
def quote(body: FareRequest, catalog: CatalogDep, settings: SettingsDep) -> QuoteResponse:
    """Live fare preview for the booking summary.

    An incomplete or inverted window is not an error here: the zero breakdown
    is returned with priced=false while the renter is still choosing dates.
    """
    result = quote_fare(
        catalog,
        settings.pricing,
        body.bike_id,
        body.window,
        body.addon_selection(),
        body.payment_mode,
        discount=body.discount,
    )
    return QuoteResponse(
        bike_id=result.bike.id,
        priced=result.priced,
        breakdown=result.breakdown,
        discounted=result.discounted,
        total_payable=result.total_payable,
    )
