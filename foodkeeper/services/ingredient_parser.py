"""Free-text ingredient parsing and keyword-based category guessing."""

import re

from foodkeeper.models.enums import FoodCategory
from foodkeeper.services.classification_data import load_table
from foodkeeper.services.unit_display import DEFAULT_UNIT

QUANTITY_PATTERN = re.compile(r"^(.+?)\s+(\d+)(\w+)$")
LEADING_NUMBER = re.compile(r"(\d+)(.*)")

WEIGHT_UNIT_CATEGORIES = {FoodCategory.MEAT, FoodCategory.SEAFOOD, FoodCategory.GRAINS}


def parse_ingredient_with_quantity(ingredient: str) -> tuple[str, int, str]:
    """Split text like "鸡蛋 2个" or "pasta 200g" into (name, quantity, unit).

    Falls back to (text, 1, "个") when no quantity can be found.
    """
    trimmed = ingredient.strip()

    match = QUANTITY_PATTERN.match(trimmed)
    if match:
        return match.group(1).strip(), int(match.group(2)), match.group(3)

    parts = trimmed.split(" ")
    if len(parts) >= 2:
        last = parts[-1]
        number = LEADING_NUMBER.search(last)
        if number:
            return parts[0], int(number.group(1)), number.group(2)

    return trimmed, 1, DEFAULT_UNIT


def is_condiment_or_basic_seasoning(ingredient: str) -> bool:
    lowered = ingredient.lower()
    seasonings = load_table("ingredient_categories")["basic_seasonings"]
    return any(seasoning in lowered for seasoning in seasonings)


def guess_ingredient_category(ingredient: str) -> FoodCategory:
    """Guess a category with ordered keyword rules; eggs are checked before meat."""
    lowered = ingredient.lower()
    for rule in load_table("ingredient_categories")["rules"]:
        if any(word in lowered for word in rule.get("exclude", [])):
            continue
        if lowered in rule.get("exact", []) or any(word in lowered for word in rule["keywords"]):
            return FoodCategory(rule["category"])
    return FoodCategory.OTHER


def default_unit_for_category(category: FoodCategory) -> str:
    if category in (FoodCategory.DAIRY, FoodCategory.BEVERAGES, FoodCategory.CONDIMENTS):
        return "mL"
    if category in (FoodCategory.EGGS, FoodCategory.OTHER):
        return DEFAULT_UNIT
    return "g"


def needs_weight_unit(food_name: str) -> bool:
    """Foods usually bought by weight rather than by the piece."""
    return guess_ingredient_category(food_name) in WEIGHT_UNIT_CATEGORIES
