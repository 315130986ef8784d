from typing import Literal

from fastapi import APIRouter, Query

from fare_engine.api.dependencies import CatalogDep
from fare_engine.catalog import Bike, BikeType
from fare_engine.models import DurationUnit

router = APIRouter()


@router.get("", response_model=list[Bike])
def list_bikes(
    catalog: CatalogDep,
    tariff: str = "Daily",
    bike_type: BikeType | None = Query(default=None, alias="type"),
    order: Literal["asc", "desc"] = "asc",
) -> list[Bike]:
    """Fleet sorted by the selected tariff, "Coming Soon" bikes last."""
    return catalog.sorted_by_tariff(
        DurationUnit.from_label(tariff),
        bike_type=bike_type,
        descending=order == "desc",
    )


@router.get("/{bike_id}", response_model=Bike)
def get_bike(bike_id: int, catalog: CatalogDep) -> Bike:
    return catalog.get(bike_id)
