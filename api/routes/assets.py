"""Static asset catalog routes."""

from enum import Enum

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class AssetCategory(str, Enum):
    """Catalog groups."""

    FURNITURE = "furniture"
    VEGETATION = "vegetation"
    VEHICLES = "vehicles"
    PEOPLE = "people"


class Asset(BaseModel):
    """Placeable asset definition."""

    id: str
    name: str
    type: str


# Predefined asset catalog
ASSETS: dict[AssetCategory, list[Asset]] = {
    AssetCategory.FURNITURE: [
        Asset(id="chair", name="Chair", type="furniture"),
        Asset(id="table", name="Table", type="furniture"),
        Asset(id="bed", name="Bed", type="furniture"),
        Asset(id="sofa", name="Sofa", type="furniture"),
    ],
    AssetCategory.VEGETATION: [
        Asset(id="tree_oak", name="Oak", type="tree"),
        Asset(id="tree_pine", name="Pine", type="tree"),
        Asset(id="bush", name="Bush", type="vegetation"),
        Asset(id="flower", name="Flower", type="vegetation"),
    ],
    AssetCategory.VEHICLES: [
        Asset(id="car_sedan", name="Car", type="vehicle"),
        Asset(id="bicycle", name="Bicycle", type="vehicle"),
    ],
    AssetCategory.PEOPLE: [
        Asset(id="person_standing", name="Standing person", type="person"),
        Asset(id="person_sitting", name="Sitting person", type="person"),
    ],
}


@router.get("/assets")
async def get_assets():
    """Get the asset catalog grouped by category."""
    return {
        category.value: [asset.model_dump() for asset in assets]
        for category, assets in ASSETS.items()
    }
