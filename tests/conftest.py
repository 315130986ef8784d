import os

# APISettings has no default key (the service must fail without one).
# Provide a test value so Settings() can be constructed in tests.
os.environ.setdefault("API_KEY", "test-api-key")

from datetime import date, time
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from fare_engine.api.app import create_app
from fare_engine.catalog import BikeCatalog
from fare_engine.models import RateTable, RentalWindow
from fare_engine.settings import Settings


@pytest.fixture
def rate_table() -> RateTable:
    """Reference scooter tariff: 35/hr, 550/day, 3500/week, 11000/month."""
    return RateTable(
        hour=Decimal("35"),
        day=Decimal("550"),
        week=Decimal("3500"),
        month=Decimal("11000"),
    )


@pytest.fixture
def long_term_rate_table() -> RateTable:
    """Tariff that also prices quarters and years."""
    return RateTable(
        hour=Decimal("60"),
        day=Decimal("900"),
        week=Decimal("5000"),
        month=Decimal("15000"),
        quarterly=Decimal("40000"),
        yearly=Decimal("140000"),
    )


@pytest.fixture
def one_day_window() -> RentalWindow:
    """2024-01-01 10:00 to 2024-01-02 10:00, exactly 24 hours."""
    return RentalWindow(
        pickup_date=date(2024, 1, 1),
        pickup_time=time(10, 0),
        drop_date=date(2024, 1, 2),
        drop_time=time(10, 0),
    )


@pytest.fixture
def catalog() -> BikeCatalog:
    """The bundled fleet."""
    return BikeCatalog.load()


@pytest.fixture
def settings() -> Settings:
    return Settings(api={"key": "test-api-key"})


@pytest.fixture
def booking_ids():
    """Deterministic booking reference generator."""
    counter = iter(range(1, 1000))
    return lambda: f"BK-TEST-{next(counter):04d}"


@pytest.fixture
def test_client(settings: Settings, catalog: BikeCatalog, booking_ids) -> TestClient:
    app = create_app(settings=settings, catalog=catalog, booking_id_factory=booking_ids)
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Pre-configured API key headers for authenticated requests."""
    return {"X-API-Key": "test-api-key"}
