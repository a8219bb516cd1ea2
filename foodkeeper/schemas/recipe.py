"""Recipe assistant schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from foodkeeper.services.recipe_parser import IngredientGroupType, IngredientStatus


class RecipeIngredientSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    quantity: str
    unit: str
    status: IngredientStatus = IngredientStatus.AVAILABLE


class IngredientGroupSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: IngredientGroupType
    items: list[RecipeIngredientSchema] = Field(default_factory=list)


class CookingStepSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    index: int
    description: str


class DishSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    cuisine: str = ""
    nutrition_highlight: str = ""
    ingredients: list[IngredientGroupSchema] = Field(default_factory=list)
    steps: list[CookingStepSchema] = Field(default_factory=list)
    healthy_tip: str = ""
    pairing_suggestion: str = ""


class RecipeResponseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    dishes: list[DishSchema] = Field(default_factory=list)
    is_error: bool = False
    error_code: str | None = None
    error_message: str | None = None


class RecipeParseRequest(BaseModel):
    text: str
    language: str | None = None


class RecipeSendRequest(BaseModel):
    """A quick-button or typed request to the assistant."""

    message: str = Field(..., min_length=1)
    is_preset_button: bool = True
    button_id: str | None = None


class ChatMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    is_user: bool
    timestamp: datetime


class AssistantStateResponse(BaseModel):
    is_loading: bool
    loading_button_id: str | None
    stage: str | None
    progress: float
    stage_message: str | None
    showing_family_setup: bool
    message_count: int
    language: str
    messages: list[ChatMessageResponse] = Field(default_factory=list)
    last_recommendation: str | None = None


class LanguageChange(BaseModel):
    language: str = Field(..., pattern="^(en|zh-Hans)$")


class ConsumeRequest(BaseModel):
    """Take a chosen recipe's ingredients out of the inventory."""

    recipe: RecipeResponseSchema
    language: str | None = None


class ConsumedIngredientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    consumed_amount: float
    unit: str
    original_requirement: str


class ConsumeResponse(BaseModel):
    recipe_name: str | None
    consumed: list[ConsumedIngredientResponse]
    warnings: list[str]
    restock_needed: list[str]


class UsageResponse(BaseModel):
    daily_limit: int
    used_count: int
    remaining: int
    usage_percentage: float
    time_until_reset: str
