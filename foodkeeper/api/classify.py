"""Classification, storage and unit helper endpoints."""

from datetime import date

from fastapi import APIRouter, Query

from foodkeeper.models.enums import FoodCategory, StorageLocation
from foodkeeper.schemas.classify import (
    ParsedIngredient,
    SimilarityResponse,
    StorageRecommendation,
    UnitFormatRequest,
    UnitFormatResponse,
    UnitGuidance,
)
from foodkeeper.services import food_grouping, ingredient_parser, storage_recommendation, unit_display

router = APIRouter(prefix="/api/v1/classify", tags=["classify"])


@router.get("/storage", response_model=StorageRecommendation)
def recommend_storage(
    name: str,
    category: FoodCategory | None = None,
    location: StorageLocation | None = None,
    purchase_date: date | None = None,
):
    """Where to keep a food and how long it lasts there."""
    category = category or ingredient_parser.guess_ingredient_category(name)
    location = location or storage_recommendation.recommend_storage_location(name, category)
    purchase_date = purchase_date or date.today()
    return StorageRecommendation(
        name=name,
        category=category,
        storage_location=location,
        shelf_life_days=storage_recommendation.get_shelf_life_days(name, category, location),
        estimated_expiration_date=storage_recommendation.estimate_expiration_date(
            name, category, location, purchase_date
        ),
    )


@router.post("/units/format", response_model=UnitFormatResponse)
def format_units(data: UnitFormatRequest):
    return UnitFormatResponse(
        unit_type=unit_display.get_unit_type(data.unit),
        formatted=unit_display.format_quantity_with_unit(data.quantity, data.unit, data.language),
        display_unit=unit_display.display_unit(data.unit, data.language),
        conversion_explanation=unit_display.get_conversion_explanation(data.quantity, data.unit, data.language),
    )


@router.get("/units/guidance", response_model=UnitGuidance)
def unit_guidance(name: str, unit: str = unit_display.DEFAULT_UNIT, language: str = "en"):
    return UnitGuidance(
        name=name,
        unit=unit,
        needs_unit_guidance=unit_display.needs_unit_guidance(name, unit),
        suggested_units=unit_display.get_suggested_units(name, language),
    )


@router.get("/ingredient", response_model=ParsedIngredient)
def parse_ingredient(text: str = Query(..., min_length=1)):
    """Split "鸡蛋 3个" style text into name, quantity and unit."""
    name, quantity, unit = ingredient_parser.parse_ingredient_with_quantity(text)
    return ParsedIngredient(
        text=text,
        name=name,
        quantity=quantity,
        unit=unit,
        category=ingredient_parser.guess_ingredient_category(name),
        is_condiment=ingredient_parser.is_condiment_or_basic_seasoning(name),
    )


@router.get("/similarity", response_model=SimilarityResponse)
def similarity(first: str, second: str):
    """Whether two food names belong in the same inventory group."""
    return SimilarityResponse(
        first=first,
        second=second,
        first_base_name=food_grouping.get_base_food_name(first),
        second_base_name=food_grouping.get_base_food_name(second),
        similarity=food_grouping.calculate_similarity(first, second),
        should_group=food_grouping.should_group(first, second),
    )
