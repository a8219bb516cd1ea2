"""Tests for assembling the recipe request."""

import random
from datetime import date

from foodkeeper.models.enums import DietaryRestriction
from foodkeeper.services.recipe_prompt import (
    COOKING_STYLES,
    CREATIVE_FOCUS,
    HouseholdMember,
    PantryEntry,
    Season,
    available_ingredients,
    build_prompt,
    calorie_info,
    creative_focus,
    current_season,
    dietary_restrictions_info,
    dish_count_for_request,
    expiring_ingredients_info,
    extract_dish_names,
    family_info,
    recommended_dish_count,
)

TODAY = date(2026, 10, 19)


def _member(name="Dad", age=40, calories=2000.0, restrictions=None, allergies=None):
    return HouseholdMember(
        name=name,
        age=age,
        daily_calorie_target=calories,
        dietary_restrictions=restrictions or [],
        custom_allergies=allergies or [],
    )


def _family(size):
    return [_member(name=f"Member {i}") for i in range(size)]


class TestDishCount:
    def test_recommended_by_family_size(self):
        assert recommended_dish_count([]) == 0
        assert recommended_dish_count(_family(2)) == 2
        assert recommended_dish_count(_family(4)) == 3
        assert recommended_dish_count(_family(5)) == 4

    def test_request_types(self):
        family = _family(5)
        assert dish_count_for_request("Baby food please", family) == 1
        assert dish_count_for_request("Summer dishes", family) == 3
        assert dish_count_for_request("Summer dishes", _family(3)) == 2
        assert dish_count_for_request("Something for the elderly", _family(2)) == 2
        assert dish_count_for_request("Weight loss meal", family) == 1
        assert dish_count_for_request("Dinner tonight", family) == 4


def test_current_season():
    assert current_season(date(2026, 4, 1)) == Season.SPRING
    assert current_season(date(2026, 7, 1)) == Season.SUMMER
    assert current_season(TODAY) == Season.AUTUMN
    assert current_season(date(2026, 1, 1)) == Season.WINTER


class TestCalorieInfo:
    def test_regular_request(self):
        members = [_member(calories=2000.6), _member(calories=1800.0)]
        assert calorie_info("Dinner", members) == " Total family daily calorie target: 3800 kcal for 2 members."
        assert calorie_info("晚餐", members, "zh-Hans") == " 家庭日均总卡路里需求：3800千卡（2人）。"

    def test_special_requests_skip_calories(self):
        members = [_member()]
        assert calorie_info("Breakfast ideas", members) == ""
        assert calorie_info("Low-calorie dinner for weight loss", members) == ""
        assert calorie_info("Dinner", []) == ""


class TestDietaryRestrictions:
    def test_adults_for_regular_requests(self):
        members = [
            _member(restrictions=[DietaryRestriction.VEGETARIAN], allergies=["kiwi"]),
            _member(name="Baby", age=1, restrictions=[DietaryRestriction.EGG_ALLERGY]),
        ]
        assert dietary_restrictions_info("Dinner", members) == " (Vegetarian, Allergy: kiwi)"

    def test_babies_for_baby_requests(self):
        members = [
            _member(restrictions=[DietaryRestriction.VEGETARIAN]),
            _member(name="Baby", age=1, restrictions=[DietaryRestriction.EGG_ALLERGY]),
        ]
        assert dietary_restrictions_info("Baby puree", members) == " (Egg Allergy)"

    def test_none(self):
        assert dietary_restrictions_info("Dinner", [_member()]) == ""


class TestIngredients:
    def test_available_ingredients_notes(self):
        entries = [
            PantryEntry("Milk", 1.0, "L", date(2026, 10, 18)),
            PantryEntry("Eggs", 6.0, "个", date(2026, 10, 20)),
            PantryEntry("Bread", 1.0, "个", date(2026, 10, 24)),
            PantryEntry("Rice", 2.0, "kg", date(2027, 1, 1)),
            PantryEntry("Salt", 500.0, "g"),
        ]
        text = available_ingredients(entries, today=TODAY)
        assert text == (
            "Milk: 1L (expired on Oct 18, 2026), "
            "Eggs: 6个 (expires in 1 day), "
            "Bread: 1个 (expires Oct 24, 2026), "
            "Rice: 2kg, Salt: 500g"
        )

    def test_expiring_sections(self):
        entries = [
            PantryEntry("Bread", 1.0, "个", date(2026, 10, 24)),
            PantryEntry("Eggs", 6.0, "个", date(2026, 10, 20)),
            PantryEntry("Milk", 1.0, "L", date(2026, 10, 18)),
            PantryEntry("Rice", 2.0, "kg", date(2027, 1, 1)),
        ]
        text = expiring_ingredients_info(entries, today=TODAY)
        assert text.startswith("[🚨 URGENT PRIORITY INGREDIENTS]:\n- Eggs: 6个 (expires TOMORROW)\n")
        assert "[⚠️ SOON EXPIRING]:\n- Bread: 1个 (expires in 5 days)\n" in text
        assert "Milk" not in text
        assert "Rice" not in text
        assert "**IMPORTANT**" in text

    def test_nothing_expiring(self):
        assert expiring_ingredients_info([PantryEntry("Rice", 2.0, "kg", date(2027, 1, 1))], today=TODAY) == ""


def test_creative_focus_follows_language():
    rng = random.Random(1)
    assert creative_focus("en", rng) in CREATIVE_FOCUS["en"]
    assert creative_focus("zh-Hans", rng) in CREATIVE_FOCUS["zh-Hans"]
    assert len(COOKING_STYLES["en"]) == len(COOKING_STYLES["zh-Hans"]) == 8


class TestExtractDishNames:
    def test_legacy_lines(self):
        content = "[Dish Name] Tomato Egg\n[Cuisine] Home\n[菜名] 清炒青菜\n"
        assert extract_dish_names(content) == "Tomato Egg, 清炒青菜"

    def test_xml_names(self):
        content = "<RecipeResponse><Dish><Name>Soup</Name></Dish><Dish><Name> Salad </Name></Dish></RecipeResponse>"
        assert extract_dish_names(content) == "Soup, Salad"

    def test_nothing_found(self):
        assert extract_dish_names("no dishes here") == ""


class TestFamilyInfo:
    def test_english(self):
        members = [_member(restrictions=[DietaryRestriction.HALAL]), _member(), _member(name="Kid", age=8)]
        assert family_info(members) == "Family: 3 members (2 adults, 1 children), Dietary restrictions: Halal"

    def test_children_only(self):
        assert family_info([_member(name="Kid", age=8)]) == "Family: 1 members (1 children)"

    def test_chinese(self):
        assert family_info(_family(2), "zh-Hans") == "家庭成员：2人（2位成人）"


class TestBuildPrompt:
    members = [_member(calories=2000.0), _member(calories=1800.0)]
    entries = [PantryEntry("Eggs", 6.0, "个", date(2026, 10, 20))]

    def test_new_request(self):
        prompt = build_prompt("Dinner", self.members, self.entries, "en", "Color Harmony", "Quick", today=TODAY)
        assert prompt.startswith("[DISH_COUNT]: 2\n[Dietary Restrictions]: None\n")
        assert "[CALORIE_INFO]:  Total family daily calorie target: 3800 kcal for 2 members.\n" in prompt
        assert "[Creative Focus]: Color Harmony\n[Cooking Style]: Quick\n" in prompt
        assert "[Available Ingredients]:\nEggs: 6个 (expires in 1 day)\n" in prompt
        assert prompt.endswith("[Other Requests]:\nDinner")

    def test_chinese_request(self):
        prompt = build_prompt("早餐", self.members, [], "zh-Hans", "营养均衡", "简单", today=TODAY)
        assert "[饮食限制]: 无\n" in prompt
        assert "[CALORIE_INFO]: 标准分量\n" in prompt
        assert prompt.endswith("[其他需求]:\n早餐")

    def test_adjustment_of_preset(self):
        prompt = build_prompt(
            "Less spicy",
            self.members,
            self.entries,
            "en",
            "Color Harmony",
            "Quick",
            previous_dishes="Mapo Tofu",
            previous_requirement="Sichuan dinner",
            previous_button_id="sichuan",
            button_id="custom_input",
            today=TODAY,
        )
        assert prompt.endswith(
            "[Previous Dishes]: Mapo Tofu\n\n[Previous Requirement]:\nSichuan dinner\n\n[Adjustment Request]:\nLess spicy"
        )

    def test_same_button_regenerates(self):
        prompt = build_prompt(
            "Sichuan dinner",
            self.members,
            self.entries,
            "en",
            "Color Harmony",
            "Quick",
            previous_dishes="Mapo Tofu",
            previous_requirement="Sichuan dinner",
            previous_button_id="sichuan",
            button_id="sichuan",
            today=TODAY,
        )
        assert prompt.endswith("[Previous Dishes]: Mapo Tofu\n\n[Regenerate Request]:\nSichuan dinner")

    def test_adjustment_without_previous_requirement(self):
        prompt = build_prompt(
            "Less salt",
            self.members,
            self.entries,
            "en",
            "Color Harmony",
            "Quick",
            previous_dishes="Soup",
            today=TODAY,
        )
        assert prompt.endswith("[Previous Dishes]: Soup\n\n[Adjustment Request]:\nLess salt")
