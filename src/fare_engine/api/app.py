"""FastAPI application factory for the fare and booking service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fare_engine.api.middleware.correlation import CorrelationIdMiddleware
from fare_engine.api.routes import bikes, bookings, fares
from fare_engine.catalog import BikeCatalog
from fare_engine.core.exceptions import (
    ConfigurationError,
    FareEngineError,
    FareMismatchError,
    NotFoundError,
    ValidationError,
)
from fare_engine.quotes import BookingIdFactory, time_based_booking_id
from fare_engine.settings import Settings, get_settings

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[FareEngineError], int] = {
    ValidationError: 422,
    NotFoundError: 404,
    FareMismatchError: 409,
    ConfigurationError: 500,
}


def status_code_for(exc: FareEngineError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


async def fare_engine_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render domain errors as {"detail": message, **details}."""
    assert isinstance(exc, FareEngineError)
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({**exc.details, "detail": exc.message}),
    )


def create_app(
    settings: Settings | None = None,
    catalog: BikeCatalog | None = None,
    booking_id_factory: BookingIdFactory | None = None,
) -> FastAPI:
    """Create FastAPI application with injected dependencies.

    Args:
        settings: Service settings; loaded from the environment when omitted
        catalog: Bike catalog; loaded from settings.catalog.path when omitted
        booking_id_factory: Booking reference generator (BK<epoch millis> by default)
    """
    if settings is None:
        settings = get_settings()
    if catalog is None:
        catalog = BikeCatalog.load(settings.catalog.path)

    app = FastAPI(
        title="Bike Rental Fare API",
        version="1.0.0",
        description="Fare quotes and booking charge computation for bike rentals",
    )

    app.state.settings = settings
    app.state.catalog = catalog
    app.state.booking_id_factory = booking_id_factory or time_based_booking_id

    app.add_exception_handler(FareEngineError, fare_engine_error_handler)

    origins = settings.cors.origins.split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(bikes.router, prefix="/bikes", tags=["bikes"])
    app.include_router(fares.router, prefix="/fares", tags=["fares"])
    app.include_router(bookings.router, prefix="/bookings", tags=["bookings"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint for monitoring (unauthenticated for infrastructure)."""
        return {"status": "healthy"}

    return app
