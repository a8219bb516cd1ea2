"""Tests for storage recommendation, shelf life and ingredient parsing."""

from datetime import date

import pytest

from foodkeeper.models.enums import FoodCategory, StorageLocation
from foodkeeper.services.classification_data import load_table
from foodkeeper.services.ingredient_parser import (
    default_unit_for_category,
    guess_ingredient_category,
    is_condiment_or_basic_seasoning,
    needs_weight_unit,
    parse_ingredient_with_quantity,
)
from foodkeeper.services.storage_recommendation import (
    estimate_expiration_date,
    get_shelf_life_days,
    recommend_storage_location,
)


class TestRecommendStorageLocation:
    def test_meat_goes_to_freezer(self):
        assert recommend_storage_location("牛肉", FoodCategory.MEAT) == StorageLocation.FREEZER

    def test_dairy_goes_to_refrigerator(self):
        assert recommend_storage_location("牛奶", FoodCategory.DAIRY) == StorageLocation.REFRIGERATOR
        assert recommend_storage_location("Milk ", FoodCategory.DAIRY) == StorageLocation.REFRIGERATOR

    def test_pantry_foods(self):
        assert recommend_storage_location("大米", FoodCategory.GRAINS) == StorageLocation.PANTRY
        assert recommend_storage_location("香蕉", FoodCategory.FRUITS) == StorageLocation.PANTRY

    def test_unknown_name_uses_category(self):
        assert recommend_storage_location("zzz", FoodCategory.DAIRY) == StorageLocation.REFRIGERATOR
        assert recommend_storage_location("zzz", FoodCategory.MEAT) == StorageLocation.FREEZER


class TestShelfLife:
    def test_specific_food(self):
        assert get_shelf_life_days("牛奶", FoodCategory.DAIRY, StorageLocation.REFRIGERATOR) == 6
        assert get_shelf_life_days("鸡蛋", FoodCategory.EGGS, StorageLocation.REFRIGERATOR) == 28

    def test_longest_key_wins(self):
        assert get_shelf_life_days("切开的西瓜", FoodCategory.FRUITS, StorageLocation.REFRIGERATOR) == 2
        assert get_shelf_life_days("西瓜", FoodCategory.FRUITS, StorageLocation.REFRIGERATOR) == 7
        assert get_shelf_life_days("eggplant", FoodCategory.VEGETABLES, StorageLocation.FREEZER) == 365

    def test_category_fallback(self):
        assert get_shelf_life_days("zzz", FoodCategory.DAIRY, StorageLocation.PANTRY) == 0
        assert get_shelf_life_days("zzz", FoodCategory.CANNED, StorageLocation.PANTRY) == 1095

    def test_estimate_expiration_date(self):
        result = estimate_expiration_date(
            "牛奶", FoodCategory.DAIRY, StorageLocation.REFRIGERATOR, date(2026, 10, 1)
        )
        assert result == date(2026, 10, 7)


class TestIngredientParser:
    def test_chinese_quantity(self):
        assert parse_ingredient_with_quantity("鸡蛋 2个") == ("鸡蛋", 2, "个")

    def test_english_quantity(self):
        assert parse_ingredient_with_quantity("pasta 200g") == ("pasta", 200, "g")

    def test_no_quantity(self):
        assert parse_ingredient_with_quantity("salt") == ("salt", 1, "个")

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("鸡蛋", FoodCategory.EGGS),
            ("牛肉", FoodCategory.MEAT),
            ("三文鱼", FoodCategory.SEAFOOD),
            ("苹果", FoodCategory.FRUITS),
            ("milk", FoodCategory.DAIRY),
            ("xyz", FoodCategory.OTHER),
        ],
    )
    def test_guess_category(self, name, expected):
        assert guess_ingredient_category(name) == expected

    def test_needs_weight_unit(self):
        assert needs_weight_unit("牛肉") is True
        assert needs_weight_unit("苹果") is False

    def test_default_unit(self):
        assert default_unit_for_category(FoodCategory.DAIRY) == "mL"
        assert default_unit_for_category(FoodCategory.EGGS) == "个"
        assert default_unit_for_category(FoodCategory.MEAT) == "g"

    def test_basic_seasoning(self):
        assert is_condiment_or_basic_seasoning("盐") is True
        assert is_condiment_or_basic_seasoning("牛肉") is False


FREEZER_TOKENS = load_table("storage_rules")["freezer"]
OTHER_TOKENS = [load_table("storage_rules")[key][0] for key in ("refrigerator", "pantry", "room_temperature_fruits")]


@pytest.mark.parametrize("category", list(FoodCategory))
@pytest.mark.parametrize("token", FREEZER_TOKENS)
def test_freezer_keywords_always_win(token, category):
    assert recommend_storage_location(token, category) == StorageLocation.FREEZER
    assert recommend_storage_location(f" {token.upper()} ", category) == StorageLocation.FREEZER
    for other in OTHER_TOKENS:
        assert recommend_storage_location(f"{other} {token}", category) == StorageLocation.FREEZER
