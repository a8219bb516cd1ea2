"""Schemas for the classification and unit helpers."""

from datetime import date

from pydantic import BaseModel, Field

from foodkeeper.models.enums import FoodCategory, StorageLocation
from foodkeeper.services.unit_display import UnitType


class StorageRecommendation(BaseModel):
    name: str
    category: FoodCategory
    storage_location: StorageLocation
    shelf_life_days: int
    estimated_expiration_date: date


class UnitFormatRequest(BaseModel):
    quantity: float
    unit: str = Field(..., max_length=20)
    language: str = "en"


class UnitFormatResponse(BaseModel):
    unit_type: UnitType
    formatted: str
    display_unit: str
    conversion_explanation: str | None


class UnitGuidance(BaseModel):
    name: str
    unit: str
    needs_unit_guidance: bool
    suggested_units: list[str]


class ParsedIngredient(BaseModel):
    text: str
    name: str
    quantity: int
    unit: str
    category: FoodCategory
    is_condiment: bool


class SimilarityResponse(BaseModel):
    first: str
    second: str
    first_base_name: str
    second_base_name: str
    similarity: float
    should_group: bool
