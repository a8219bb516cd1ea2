"""SQLAlchemy models."""

from foodkeeper.models.ai_usage import AIUsage
from foodkeeper.models.family import FamilyMember, FamilyProfile
from foodkeeper.models.food_group import FoodGroup
from foodkeeper.models.food_item import FoodItem
from foodkeeper.models.history_record import FoodHistoryRecord
from foodkeeper.models.shopping_list_item import ShoppingListItem

__all__ = [
    "FoodItem",
    "FoodGroup",
    "FamilyProfile",
    "FamilyMember",
    "ShoppingListItem",
    "FoodHistoryRecord",
    "AIUsage",
]
