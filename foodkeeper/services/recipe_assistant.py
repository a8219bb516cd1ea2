"""Recipe chat assistant: loading stages, chat history and request lifecycle."""

import asyncio
import logging
import random
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from foodkeeper.exceptions import AIServiceError, RecipeRequestInProgressError
from foodkeeper.i18n import ENGLISH, translate
from foodkeeper.services.llm import AIService, get_ai_service
from foodkeeper.services.realtime import RecipeEventType
from foodkeeper.services.recipe_prompt import (
    HouseholdMember,
    PantryEntry,
    build_prompt,
    creative_focus,
    extract_dish_names,
    random_cooking_style,
)

logger = logging.getLogger(__name__)

MAX_CHAT_MESSAGES = 10
CUSTOM_INPUT_BUTTON = "custom_input"
SIMULATED_FAST_STEPS = 6
SIMULATION_CAP = 0.95


class StageName(str, Enum):
    PREPARING = "preparing"
    ANALYZING = "analyzing"
    GENERATING = "generating"
    GENERATING_PROGRESS = "generating_progress"
    FORMATTING = "formatting"
    COMPLETED = "completed"


STAGE_PROGRESS = {
    StageName.PREPARING: 0.1,
    StageName.ANALYZING: 0.25,
    StageName.GENERATING: 0.4,
    StageName.FORMATTING: 0.9,
    StageName.COMPLETED: 1.0,
}


@dataclass(frozen=True)
class LoadingStage:
    name: StageName
    fraction: float = 0.0  # only meaningful while generating

    @property
    def progress(self) -> float:
        if self.name == StageName.GENERATING_PROGRESS:
            return 0.4 + 0.45 * self.fraction
        return STAGE_PROGRESS[self.name]

    def message(self, language: str = ENGLISH) -> str:
        if self.name == StageName.GENERATING_PROGRESS:
            return translate("loading.generating_progress", language, percent=int(self.fraction * 100))
        return translate(f"loading.{self.name.value}", language)


@dataclass
class ChatMessage:
    content: str
    is_user: bool
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class AssistantDelays:
    """Pauses between stages, in seconds."""

    analyzing: float = 0.2
    formatting: float = 0.3
    completed: float = 0.5
    progress_interval: float = 0.8
    progress_slowdown: float = 1.2

    @classmethod
    def none(cls) -> "AssistantDelays":
        return cls(0, 0, 0, 0, 0)


class RecipeAssistant:
    """One conversation with the recipe AI.

    A request runs as a background task through preparing, analyzing,
    generating, formatting and completed, then returns to idle. Progress only
    moves forward within a request, and only one request runs at a time.
    """

    def __init__(
        self,
        ai_service: AIService | None = None,
        language: str = ENGLISH,
        delays: AssistantDelays | None = None,
        on_event: Callable[[RecipeEventType, dict], None] | None = None,
        rng: random.Random | None = None,
    ):
        self.ai_service = ai_service
        self.language = language
        self.delays = delays or AssistantDelays()
        self.on_event = on_event
        self.rng = rng or random.Random()

        self.messages: list[ChatMessage] = []
        self.is_loading = False
        self.loading_button_id: str | None = None
        self.loading_stage: LoadingStage | None = None
        self.showing_family_setup = False
        self.last_recommendation: str | None = None
        self.last_requirement = ""
        self.last_button_id = ""
        self.current_style: str | None = None

        self.members: list[HouseholdMember] = []
        self.pantry: list[PantryEntry] = []
        self._task: asyncio.Task | None = None
        self._simulation: asyncio.Task | None = None

    @property
    def progress(self) -> float:
        return self.loading_stage.progress if self.loading_stage else 0.0

    def state(self) -> dict:
        stage = self.loading_stage
        return {
            "is_loading": self.is_loading,
            "loading_button_id": self.loading_button_id,
            "stage": stage.name.value if stage else None,
            "progress": self.progress,
            "stage_message": stage.message(self.language) if stage else None,
            "showing_family_setup": self.showing_family_setup,
            "message_count": len(self.messages),
        }

    def _emit(self, event_type: RecipeEventType, data: dict | None = None) -> None:
        if self.on_event is not None:
            self.on_event(event_type, data if data is not None else self.state())

    def update_data(self, members: list[HouseholdMember], pantry: list[PantryEntry]) -> None:
        """Refresh the household and inventory the next prompt is built from."""
        self.members = list(members)
        self.pantry = list(pantry)
        if self.is_loading and not self.pantry:
            logger.info("Inventory emptied during a recipe request, cancelling")
            self.cancel_current_request()

    def _ai(self) -> AIService:
        if self.ai_service is None:
            self.ai_service = get_ai_service()
        return self.ai_service

    def _set_stage(self, stage: LoadingStage) -> None:
        if self.loading_stage is not None and stage.progress < self.loading_stage.progress:
            return
        self.loading_stage = stage
        self._emit(RecipeEventType.STAGE_CHANGED)

    def _append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self._emit(RecipeEventType.MESSAGE_ADDED, {"content": message.content, "is_user": message.is_user})

    def ensure_idle(self) -> None:
        if self.is_loading:
            raise RecipeRequestInProgressError("A recipe request is already in progress")

    def send_message(self, text: str) -> asyncio.Task | None:
        """Send free text typed by the user."""
        text = text.strip()
        if not text:
            return None
        return self.send_quick_message(text, is_preset_button=False, button_id=CUSTOM_INPUT_BUTTON)

    def send_quick_message(
        self, message: str, is_preset_button: bool = True, button_id: str | None = None
    ) -> asyncio.Task | None:
        """Start a recipe request in the background.

        Returns the running task, or None when a request is already in flight
        or the household has no members yet. Must be called from a running loop.
        """
        if self.is_loading:
            return None
        if not self.members:
            self.showing_family_setup = True
            self._emit(RecipeEventType.STAGE_CHANGED)
            return None

        if len(self.messages) >= MAX_CHAT_MESSAGES:
            # Drop the oldest question and answer before asking again
            del self.messages[:2]
        self._append(ChatMessage(content=message, is_user=True))
        self.is_loading = True
        self.loading_button_id = button_id
        self.loading_stage = None
        self._set_stage(LoadingStage(StageName.PREPARING))
        self._task = asyncio.create_task(self._run(message, is_preset_button, button_id))
        return self._task

    async def _run(self, message: str, is_preset_button: bool, button_id: str | None) -> None:
        task = asyncio.current_task()
        language = self.language
        try:
            await asyncio.sleep(self.delays.analyzing)
            self._set_stage(LoadingStage(StageName.ANALYZING))

            if is_preset_button:
                self.last_requirement = message
                self.last_button_id = button_id or ""
            prompt = self.create_full_prompt(message, is_preset_button, button_id)

            self._set_stage(LoadingStage(StageName.GENERATING))
            simulation = self._simulation = asyncio.create_task(self.simulate_progress())
            try:
                response = await self._ai().generate_recipe(prompt, language)
            finally:
                simulation.cancel()

            self._set_stage(LoadingStage(StageName.FORMATTING))
            await asyncio.sleep(self.delays.formatting)
            self._set_stage(LoadingStage(StageName.COMPLETED))
            self._append(ChatMessage(content=response, is_user=False))
            self.last_recommendation = response
            await asyncio.sleep(self.delays.completed)
            self.reset_loading_state()
        except asyncio.CancelledError:
            if self._task is task:
                self.reset_loading_state()
            raise
        except AIServiceError as e:
            logger.warning(f"Recipe request failed: {e}")
            self._finish_with_error(e.localized_message(language))
        except Exception as e:
            logger.error(f"Unexpected error during recipe request: {e}", exc_info=True)
            self._finish_with_error(translate("recipe.error.message", language))

    def _finish_with_error(self, text: str) -> None:
        self._append(ChatMessage(content=text, is_user=False))
        self.reset_loading_state()

    async def simulate_progress(self) -> None:
        """Advance the generating fraction while the AI call runs, never passing 0.95."""
        fraction = 0.0
        for _ in range(SIMULATED_FAST_STEPS):
            await asyncio.sleep(self.delays.progress_interval)
            fraction = min(fraction + 0.1, SIMULATION_CAP)
            self._set_stage(LoadingStage(StageName.GENERATING_PROGRESS, fraction))
        while fraction < SIMULATION_CAP:
            await asyncio.sleep(self.delays.progress_interval + fraction * self.delays.progress_slowdown)
            fraction = min(fraction + 0.05, SIMULATION_CAP)
            self._set_stage(LoadingStage(StageName.GENERATING_PROGRESS, fraction))

    def create_full_prompt(self, message: str, is_preset_button: bool, button_id: str | None = None) -> str:
        """Build the request, as a fresh ask or as an adjustment of the last recommendation."""
        focus = creative_focus(self.language, self.rng)
        is_adjustment = self.last_recommendation is not None

        # A follow-up that is not a preset keeps the previous cooking style
        if is_adjustment and not is_preset_button and self.current_style:
            style = self.current_style
        else:
            style = random_cooking_style(self.language, self.rng)
            self.current_style = style

        previous_dishes = extract_dish_names(self.last_recommendation) if is_adjustment else None
        return build_prompt(
            message,
            self.members,
            self.pantry,
            self.language,
            focus=focus,
            style=style,
            previous_dishes=previous_dishes,
            previous_requirement=self.last_requirement,
            previous_button_id=self.last_button_id,
            button_id=button_id,
        )

    def cancel_current_request(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        # Stop simulated progress right away so no stage lands after the reset
        if self._simulation is not None:
            self._simulation.cancel()
        self._task = None
        self._simulation = None
        self.reset_loading_state()

    def reset_loading_state(self) -> None:
        self.is_loading = False
        self.loading_button_id = None
        self.loading_stage = None
        self._emit(RecipeEventType.RESET)

    def dismiss_family_setup(self) -> None:
        self.showing_family_setup = False

    def clear_chat_on_language_change(self, language: str) -> None:
        """Start a fresh conversation in another language."""
        if language == self.language:
            return
        self.cancel_current_request()
        self.language = language
        self.messages.clear()
        self.last_recommendation = None
        self.last_requirement = ""
        self.last_button_id = ""
        self.current_style = None
        self._emit(RecipeEventType.CHAT_CLEARED)
