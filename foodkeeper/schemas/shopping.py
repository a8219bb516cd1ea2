"""Shopping list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from foodkeeper.models.enums import FoodCategory


class ShoppingItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: FoodCategory = FoodCategory.OTHER
    unit: str = Field("个", max_length=20)
    min_quantity: float = Field(1, ge=0)
    alert_enabled: bool = True
    estimated_price: float | None = Field(None, ge=0)


class ShoppingItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: FoodCategory | None = None
    unit: str | None = Field(None, max_length=20)
    min_quantity: float | None = Field(None, ge=0)
    alert_enabled: bool | None = None
    estimated_price: float | None = Field(None, ge=0)


class ShoppingItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: FoodCategory
    unit: str
    min_quantity: float
    alert_enabled: bool
    created_date: datetime
    estimated_price: float | None
    is_urgent: bool
    formatted_quantity_with_unit: str


class ShortageResponse(BaseModel):
    """A shopping item whose stock at home is below its minimum."""

    item: ShoppingItemResponse
    current_stock: float
    missing_quantity: float
    warning: str
