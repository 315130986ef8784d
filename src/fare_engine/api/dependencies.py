"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request

from fare_engine.catalog import BikeCatalog
from fare_engine.quotes import BookingIdFactory
from fare_engine.settings import Settings


def get_settings(request: Request) -> Settings:
    """Retrieve Settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_catalog(request: Request) -> BikeCatalog:
    """Retrieve BikeCatalog from app state."""
    catalog: BikeCatalog = request.app.state.catalog
    return catalog


def get_booking_id_factory(request: Request) -> BookingIdFactory:
    """Retrieve the booking reference generator from app state."""
    factory: BookingIdFactory = request.app.state.booking_id_factory
    return factory


SettingsDep = Annotated[Settings, Depends(get_settings)]
CatalogDep = Annotated[BikeCatalog, Depends(get_catalog)]
BookingIdFactoryDep = Annotated[BookingIdFactory, Depends(get_booking_id_factory)]
