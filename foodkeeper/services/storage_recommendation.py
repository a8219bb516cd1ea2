"""Storage-location recommendation and shelf-life estimation."""

import logging
from datetime import date, timedelta

from foodkeeper.models.enums import FoodCategory, StorageLocation
from foodkeeper.services.classification_data import load_table

logger = logging.getLogger(__name__)

# Index into the [freezer, refrigerator, pantry] triples of the data tables
LOCATION_INDEX = {
    StorageLocation.FREEZER: 0,
    StorageLocation.REFRIGERATOR: 1,
    StorageLocation.PANTRY: 2,
}


def _normalize_name(food_name: str) -> str:
    return food_name.lower().strip()


def _specific_location(name: str) -> StorageLocation | None:
    rules = load_table("storage_rules")
    # Freezer wins over refrigerator, which wins over pantry
    for location in (StorageLocation.FREEZER, StorageLocation.REFRIGERATOR, StorageLocation.PANTRY):
        for keyword in rules[location.value.lower()]:
            if keyword in name:
                return location
    for fruit in rules["room_temperature_fruits"]:
        if fruit in name:
            return StorageLocation.PANTRY
    return None


def recommend_storage_location(food_name: str, category: FoodCategory) -> StorageLocation:
    """Recommend where to keep a food, by keyword scan with a per-category fallback."""
    name = _normalize_name(food_name)
    location = _specific_location(name)
    if location is not None:
        return location
    category_locations = load_table("storage_rules")["category_locations"]
    return StorageLocation(category_locations.get(FoodCategory(category).value, "Pantry"))


def _specific_shelf_life(name: str, location: StorageLocation) -> int | None:
    table: dict[str, list[int]] = load_table("shelf_life")
    matches = [key for key in table if key in name]
    if not matches:
        return None
    # Longest key is the most specific ("切开的西瓜" over "西瓜")
    best = max(matches, key=len)
    return table[best][LOCATION_INDEX[location]]


def get_shelf_life_days(
    food_name: str, category: FoodCategory, location: StorageLocation
) -> int:
    """Estimated days a food stays usable in the given location."""
    name = _normalize_name(food_name)
    days = _specific_shelf_life(name, StorageLocation(location))
    if days is not None:
        return days
    category_table = load_table("storage_rules")["category_shelf_life"]
    triple = category_table.get(FoodCategory(category).value, category_table["Other"])
    return triple[LOCATION_INDEX[StorageLocation(location)]]


def estimate_expiration_date(
    food_name: str,
    category: FoodCategory,
    location: StorageLocation,
    purchase_date: date,
) -> date:
    days = get_shelf_life_days(food_name, category, location)
    logger.debug(f"Shelf life for '{food_name}' in {location.value}: {days} days")
    return purchase_date + timedelta(days=days)
