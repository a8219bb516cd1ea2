"""Pydantic schemas for API requests and responses."""

from foodkeeper.schemas.family import (
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMemberUpdate,
    FamilyProfileResponse,
    FamilyProfileUpdate,
)
from foodkeeper.schemas.food import FoodGroupResponse, FoodItemCreate, FoodItemResponse, FoodItemUpdate
from foodkeeper.schemas.history import HistoryRecordResponse, HistoryStatisticsResponse
from foodkeeper.schemas.shopping import ShoppingItemCreate, ShoppingItemResponse, ShoppingItemUpdate

__all__ = [
    "FoodItemCreate",
    "FoodItemUpdate",
    "FoodItemResponse",
    "FoodGroupResponse",
    "FamilyMemberCreate",
    "FamilyMemberUpdate",
    "FamilyMemberResponse",
    "FamilyProfileUpdate",
    "FamilyProfileResponse",
    "ShoppingItemCreate",
    "ShoppingItemUpdate",
    "ShoppingItemResponse",
    "HistoryRecordResponse",
    "HistoryStatisticsResponse",
]
