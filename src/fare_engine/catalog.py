"""Rentable bikes and their rate tables."""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Literal

import pydantic
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from fare_engine.core.exceptions import ConfigurationError, NotFoundError
from fare_engine.models import DurationUnit, RateTable

logger = logging.getLogger(__name__)

BUNDLED_CATALOG_PATH = Path(__file__).parent / "data" / "bikes.json"

Availability = Literal["Available", "Limited", "Coming Soon"]
BikeType = Literal["Scooter", "Fuel", "Electric", "Superbike"]


class Bike(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    type: BikeType
    price: RateTable
    deposit: Decimal = Field(default=Decimal(0), ge=0)
    availability: Availability = "Available"

    @property
    def bookable(self) -> bool:
        return self.availability != "Coming Soon"


_BIKE_LIST = TypeAdapter(list[Bike])


class BikeCatalog:
    """In-memory fleet keyed by bike id."""

    def __init__(self, bikes: list[Bike]) -> None:
        self._bikes: dict[int, Bike] = {}
        for bike in bikes:
            if bike.id in self._bikes:
                raise ConfigurationError(
                    f"Duplicate bike id in catalog: {bike.id}", details={"bike_id": bike.id}
                )
            self._bikes[bike.id] = bike

    @classmethod
    def load(cls, path: Path | None = None) -> "BikeCatalog":
        """Load a catalog from a JSON file, defaulting to the bundled fleet."""
        source = path or BUNDLED_CATALOG_PATH
        try:
            bikes = _BIKE_LIST.validate_json(source.read_bytes())
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read bike catalog: {source}", details={"path": str(source)}
            ) from e
        except pydantic.ValidationError as e:
            raise ConfigurationError(
                f"Invalid bike catalog: {source}",
                details={"path": str(source), "errors": e.error_count()},
            ) from e

        logger.info("Loaded %d bikes from %s", len(bikes), source)
        return cls(bikes)

    def __len__(self) -> int:
        return len(self._bikes)

    def get(self, bike_id: int) -> Bike:
        try:
            return self._bikes[bike_id]
        except KeyError:
            raise NotFoundError(
                f"Bike not found: {bike_id}", details={"bike_id": bike_id}
            ) from None

    def all(self) -> list[Bike]:
        return list(self._bikes.values())

    def sorted_by_tariff(
        self,
        unit: DurationUnit,
        bike_type: BikeType | None = None,
        descending: bool = False,
    ) -> list[Bike]:
        """Bikes ordered by the given tier's rate, optionally of one type only.

        Bikes without a rate for the tier and bikes that are not bookable yet
        sort last in either direction. Equal rates keep id order.
        """

        def sort_key(bike: Bike) -> tuple[bool, bool, Decimal, int]:
            rate = bike.price.rate_for(unit)
            amount = rate or Decimal(0)
            return (not bike.bookable, rate is None, -amount if descending else amount, bike.id)

        bikes = [b for b in self._bikes.values() if bike_type is None or b.type == bike_type]
        return sorted(bikes, key=sort_key)
