"""Inventory schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from foodkeeper.models.enums import FoodCategory, StorageLocation


class FoodItemCreate(BaseModel):
    """Add a purchase. Category, storage location and expiry are filled in when omitted."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(1, gt=0)
    unit: str = Field("个", max_length=20)
    category: FoodCategory | None = None
    purchase_date: date | None = None
    expiration_date: date | None = None
    storage_location: StorageLocation | None = None
    barcode: str | None = Field(None, max_length=64)
    stock_alert_enabled: bool = False
    specific_emoji: str | None = Field(None, max_length=16)
    image_base64: str | None = None


class FoodItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, gt=0)
    unit: str | None = Field(None, max_length=20)
    category: FoodCategory | None = None
    purchase_date: date | None = None
    expiration_date: date | None = None
    storage_location: StorageLocation | None = None
    barcode: str | None = Field(None, max_length=64)
    stock_alert_enabled: bool | None = None
    specific_emoji: str | None = Field(None, max_length=16)


class QuantityAdjustment(BaseModel):
    """New absolute quantity; zero or less removes the item."""

    quantity: float


class FoodItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    barcode: str | None
    purchase_date: date
    expiration_date: date | None
    category: FoodCategory
    quantity: float
    unit: str
    stock_alert_enabled: bool
    specific_emoji: str | None
    storage_location: StorageLocation | None
    safe_storage_location: StorageLocation
    group_id: int | None
    is_expired: bool
    days_until_expiration: int | None
    display_icon: str
    formatted_quantity_with_unit: str
    needs_unit_guidance: bool
    suggested_units: list[str]
    created_at: datetime
    updated_at: datetime


class FoodGroupUpdate(BaseModel):
    display_name: str | None = Field(None, min_length=1, max_length=255)
    custom_emoji: str | None = Field(None, max_length=16)


class FoodGroupResponse(BaseModel):
    """A group of variants of one food, with totals across its items."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    base_name: str
    display_name: str
    category: FoodCategory
    custom_emoji: str | None
    created_date: datetime
    last_updated: datetime
    total_quantity: float
    primary_unit: str
    formatted_total_quantity_with_unit: str
    has_items_needing_unit_guidance: bool
    earliest_expiration_date: date | None
    earliest_purchase_date: date
    is_expired: bool
    days_until_expiration: int | None
    display_icon: str
    items: list[FoodItemResponse]


class DiscardExpiredResponse(BaseModel):
    removed: list[str]
