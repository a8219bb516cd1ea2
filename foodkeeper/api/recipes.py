"""Recipe assistant API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from foodkeeper.config import get_settings
from foodkeeper.database import get_db
from foodkeeper.exceptions import RecipeRequestInProgressError
from foodkeeper.models.family import FamilyMember
from foodkeeper.models.food_item import FoodItem
from foodkeeper.schemas.recipe import (
    AssistantStateResponse,
    ChatMessageResponse,
    LanguageChange,
    RecipeParseRequest,
    RecipeResponseSchema,
    RecipeSendRequest,
    UsageResponse,
)
from foodkeeper.services.llm import get_ai_service
from foodkeeper.services.realtime import publish_recipe_event
from foodkeeper.services.recipe_assistant import RecipeAssistant
from foodkeeper.services.recipe_parser import parse_recipe_response
from foodkeeper.services.recipe_prompt import HouseholdMember, PantryEntry
from foodkeeper.services.usage import DailyUsageService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])

_assistant: RecipeAssistant | None = None


def get_assistant() -> RecipeAssistant:
    """The process-wide assistant; one conversation per household."""
    global _assistant
    if _assistant is None:
        _assistant = RecipeAssistant(
            ai_service=get_ai_service(),
            language=get_settings().language,
            on_event=publish_recipe_event,
        )
    return _assistant


def shutdown_assistant() -> None:
    if _assistant is not None and _assistant.is_loading:
        _assistant.cancel_current_request()


def refresh_assistant_data(assistant: RecipeAssistant, db: Session) -> None:
    members = db.query(FamilyMember).order_by(FamilyMember.id).all()
    items = db.query(FoodItem).order_by(FoodItem.id).all()
    assistant.update_data(
        [HouseholdMember.from_model(m) for m in members],
        [PantryEntry.from_model(i) for i in items],
    )


def _state(assistant: RecipeAssistant) -> AssistantStateResponse:
    return AssistantStateResponse(
        **assistant.state(),
        language=assistant.language,
        messages=[ChatMessageResponse.model_validate(m) for m in assistant.messages],
        last_recommendation=assistant.last_recommendation,
    )


@router.get("/state", response_model=AssistantStateResponse)
async def read_state(assistant: Annotated[RecipeAssistant, Depends(get_assistant)]):
    return _state(assistant)


@router.post("/send", response_model=AssistantStateResponse, status_code=status.HTTP_202_ACCEPTED)
async def send_message(
    data: RecipeSendRequest,
    assistant: Annotated[RecipeAssistant, Depends(get_assistant)],
    db: Annotated[Session, Depends(get_db)],
):
    """Start a recipe request; follow progress through /state or the websocket."""
    try:
        assistant.ensure_idle()
    except RecipeRequestInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None
    refresh_assistant_data(assistant, db)
    if data.is_preset_button:
        assistant.send_quick_message(data.message, is_preset_button=True, button_id=data.button_id)
    else:
        assistant.send_message(data.message)
    return _state(assistant)


@router.post("/cancel", response_model=AssistantStateResponse)
async def cancel_request(assistant: Annotated[RecipeAssistant, Depends(get_assistant)]):
    assistant.cancel_current_request()
    return _state(assistant)


@router.post("/family-setup/dismiss", response_model=AssistantStateResponse)
async def dismiss_family_setup(assistant: Annotated[RecipeAssistant, Depends(get_assistant)]):
    assistant.dismiss_family_setup()
    return _state(assistant)


@router.post("/language", response_model=AssistantStateResponse)
async def change_language(data: LanguageChange, assistant: Annotated[RecipeAssistant, Depends(get_assistant)]):
    """Switch language; the conversation starts over."""
    assistant.clear_chat_on_language_change(data.language)
    return _state(assistant)


@router.post("/parse", response_model=RecipeResponseSchema)
def parse_recipe(data: RecipeParseRequest):
    """Turn AI output into structured dishes."""
    return parse_recipe_response(data.text, data.language or get_settings().language)


@router.get("/usage", response_model=UsageResponse)
def read_usage(db: Annotated[Session, Depends(get_db)]):
    """Free AI requests left today."""
    usage = DailyUsageService(db)
    return UsageResponse(
        daily_limit=usage.daily_limit,
        used_count=usage.used_count,
        remaining=usage.remaining,
        usage_percentage=usage.usage_percentage,
        time_until_reset=DailyUsageService.time_until_reset(),
    )


@router.get("/provider-health")
async def provider_health(assistant: Annotated[RecipeAssistant, Depends(get_assistant)]):
    """Whether the configured AI provider answers."""
    ai = assistant.ai_service or get_ai_service()
    return {"provider": ai.provider, "healthy": await ai.health_check()}
