"""History schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from foodkeeper.models.enums import FoodCategory, HistoryRecordType


class HistoryRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime
    type: HistoryRecordType
    item_name: str
    quantity: float
    unit: str
    category: FoodCategory
    recipe_name: str | None
    notes: str | None
    formatted_quantity: str
    display_icon: str
    description: str


class CategoryStatisticResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: FoodCategory
    count: int
    total_quantity: float


class HistoryStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_purchase_count: int
    total_consumption_count: int
    total_expiration_count: int
    total_adjustment_count: int
    unique_recipes_count: int
    top_categories: list[CategoryStatisticResponse]
    recent_activity: list[HistoryRecordResponse]


class RecipeTrialCreate(BaseModel):
    recipe_name: str
    notes: str | None = None


class CleanupResponse(BaseModel):
    deleted: int
