"""Enums for model fields."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class FoodCategory(str, Enum):
    """Food categories used for classification and shelf-life fallbacks."""

    DAIRY = "Dairy"
    EGGS = "Eggs"
    MEAT = "Meat"
    SEAFOOD = "Seafood"
    VEGETABLES = "Vegetables"
    FRUITS = "Fruits"
    GRAINS = "Grains"
    BEVERAGES = "Beverages"
    CONDIMENTS = "Condiments"
    FROZEN = "Frozen"
    CANNED = "Canned"
    SNACKS = "Snacks"
    OTHER = "Other"

    @classmethod
    def _missing_(cls, value):
        # Lower-case and legacy values from older data
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "produce":
                return cls.VEGETABLES
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        logger.warning(f"Unknown food category '{value}', defaulting to Other")
        return cls.OTHER

    @property
    def icon(self) -> str:
        return CATEGORY_ICONS[self]


CATEGORY_ICONS = {
    FoodCategory.DAIRY: "🥛",
    FoodCategory.EGGS: "🥚",
    FoodCategory.MEAT: "🥩",
    FoodCategory.SEAFOOD: "🐟",
    FoodCategory.VEGETABLES: "🥬",
    FoodCategory.FRUITS: "🍎",
    FoodCategory.GRAINS: "🌾",
    FoodCategory.BEVERAGES: "🥤",
    FoodCategory.CONDIMENTS: "🧂",
    FoodCategory.FROZEN: "🧊",
    FoodCategory.CANNED: "🥫",
    FoodCategory.SNACKS: "🍿",
    FoodCategory.OTHER: "📦",
}


class StorageLocation(str, Enum):
    """Where an item is kept at home."""

    FREEZER = "Freezer"
    REFRIGERATOR = "Refrigerator"
    PANTRY = "Pantry"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return cls.REFRIGERATOR

    @property
    def icon(self) -> str:
        return {"Freezer": "❄️", "Refrigerator": "🧊", "Pantry": "🏠"}[self.value]


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class ActivityLevel(str, Enum):
    """Activity level with its Harris-Benedict multiplier."""

    SEDENTARY = "Sedentary"
    LIGHT = "Light"
    MODERATE = "Moderate"
    ACTIVE = "Active"
    VERY_ACTIVE = "Very Active"

    @property
    def multiplier(self) -> float:
        return {
            ActivityLevel.SEDENTARY: 1.2,
            ActivityLevel.LIGHT: 1.375,
            ActivityLevel.MODERATE: 1.55,
            ActivityLevel.ACTIVE: 1.725,
            ActivityLevel.VERY_ACTIVE: 1.9,
        }[self]


class AgeCategory(str, Enum):
    BABY = "Baby"  # 0-2
    CHILD = "Child"  # 3-12
    YOUTH = "Youth"  # 13-35
    ADULT = "Adult"  # 36-64
    SENIOR = "Senior"  # 65+

    @classmethod
    def for_age(cls, age: int) -> "AgeCategory":
        if age <= 2:
            return cls.BABY
        if age <= 12:
            return cls.CHILD
        if age <= 35:
            return cls.YOUTH
        if age <= 64:
            return cls.ADULT
        return cls.SENIOR


class BabyFoodStage(str, Enum):
    STAGE1 = "Stage1"  # 6-8 months, purees
    STAGE2 = "Stage2"  # 9-12 months, soft chunks


class DietaryRestrictionCategory(str, Enum):
    LIFESTYLE = "Lifestyle"
    DIETARY = "Dietary"
    HEALTH = "Health"
    RELIGIOUS = "Religious"
    ALLERGY = "Allergy"


class DietaryRestriction(str, Enum):
    """Dietary restrictions and allergies a family member can declare."""

    VEGETARIAN = "Vegetarian"
    VEGAN = "Vegan"
    GLUTEN_FREE = "Gluten-Free"
    DAIRY_FREE = "Dairy-Free"
    NUT_FREE = "Nut-Free"
    LOW_SODIUM = "Low Sodium"
    DIABETIC = "Diabetic"
    KOSHER = "Kosher"
    HALAL = "Halal"

    SHELLFISH_ALLERGY = "Shellfish Allergy"
    EGG_ALLERGY = "Egg Allergy"
    FISH_ALLERGY = "Fish Allergy"
    SOY_ALLERGY = "Soy Allergy"
    WHEAT_ALLERGY = "Wheat Allergy"
    SESAME_ALLERGY = "Sesame Allergy"
    SULFITE_ALLERGY = "Sulfite Allergy"
    MUSHROOM_ALLERGY = "Mushroom Allergy"

    @property
    def category(self) -> DietaryRestrictionCategory:
        if self in (DietaryRestriction.VEGETARIAN, DietaryRestriction.VEGAN):
            return DietaryRestrictionCategory.LIFESTYLE
        if self in (
            DietaryRestriction.GLUTEN_FREE,
            DietaryRestriction.DAIRY_FREE,
            DietaryRestriction.NUT_FREE,
        ):
            return DietaryRestrictionCategory.DIETARY
        if self in (DietaryRestriction.LOW_SODIUM, DietaryRestriction.DIABETIC):
            return DietaryRestrictionCategory.HEALTH
        if self in (DietaryRestriction.KOSHER, DietaryRestriction.HALAL):
            return DietaryRestrictionCategory.RELIGIOUS
        return DietaryRestrictionCategory.ALLERGY

    def localized_name(self, language: str = "en") -> str:
        if language == "zh-Hans":
            return RESTRICTION_NAMES_ZH[self]
        return self.value


RESTRICTION_NAMES_ZH = {
    DietaryRestriction.VEGETARIAN: "素食",
    DietaryRestriction.VEGAN: "纯素",
    DietaryRestriction.GLUTEN_FREE: "无麸质",
    DietaryRestriction.DAIRY_FREE: "无乳制品",
    DietaryRestriction.NUT_FREE: "无坚果",
    DietaryRestriction.LOW_SODIUM: "低钠",
    DietaryRestriction.DIABETIC: "糖尿病饮食",
    DietaryRestriction.KOSHER: "犹太洁食",
    DietaryRestriction.HALAL: "清真",
    DietaryRestriction.SHELLFISH_ALLERGY: "贝类过敏",
    DietaryRestriction.EGG_ALLERGY: "鸡蛋过敏",
    DietaryRestriction.FISH_ALLERGY: "鱼类过敏",
    DietaryRestriction.SOY_ALLERGY: "大豆过敏",
    DietaryRestriction.WHEAT_ALLERGY: "小麦过敏",
    DietaryRestriction.SESAME_ALLERGY: "芝麻过敏",
    DietaryRestriction.SULFITE_ALLERGY: "亚硫酸盐过敏",
    DietaryRestriction.MUSHROOM_ALLERGY: "蘑菇过敏",
}


class HistoryRecordType(str, Enum):
    """Kinds of inventory history entries."""

    PURCHASE = "purchase"
    CONSUMPTION = "consumption"
    EXPIRATION = "expiration"
    ADJUSTMENT = "adjustment"
    RECIPE_TRIAL = "recipeTrial"
