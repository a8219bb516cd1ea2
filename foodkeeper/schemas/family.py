"""Family profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from foodkeeper.models.enums import (
    ActivityLevel,
    AgeCategory,
    BabyFoodStage,
    DietaryRestriction,
    Gender,
)


class FamilyMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    age: int = Field(30, ge=0, le=150)
    months_for_baby: int = Field(0, ge=0, le=36)
    gender: Gender = Gender.MALE
    height_cm: float = Field(170.0, gt=0)
    weight_kg: float = Field(70.0, gt=0)
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    dietary_restrictions: list[DietaryRestriction] = Field(default_factory=list)
    custom_allergies: list[str] = Field(default_factory=list)


class FamilyMemberUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    age: int | None = Field(None, ge=0, le=150)
    months_for_baby: int | None = Field(None, ge=0, le=36)
    gender: Gender | None = None
    height_cm: float | None = Field(None, gt=0)
    weight_kg: float | None = Field(None, gt=0)
    activity_level: ActivityLevel | None = None
    dietary_restrictions: list[DietaryRestriction] | None = None
    custom_allergies: list[str] | None = None


class FamilyMemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    profile_id: int
    name: str
    age: int
    months_for_baby: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    dietary_restrictions: list[DietaryRestriction]
    custom_allergies: list[str]
    daily_calorie_target: float
    age_category: AgeCategory
    baby_food_stage: BabyFoodStage | None
    created_at: datetime
    updated_at: datetime


class FamilyProfileUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    dietary_restrictions: list[DietaryRestriction] | None = None
    preferences: list[str] | None = None


class FamilyProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    dietary_restrictions: list[DietaryRestriction]
    preferences: list[str]
    total_daily_calories: float
    members: list[FamilyMemberResponse]


class FamilySummary(BaseModel):
    """What the recipe assistant knows about the household."""

    member_count: int
    adult_count: int
    child_count: int
    total_daily_calories: int
    recommended_dish_count: int
    description: str
