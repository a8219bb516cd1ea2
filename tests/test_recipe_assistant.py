"""Tests for the recipe assistant request lifecycle."""

import asyncio
import random
from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from foodkeeper.exceptions import DailyLimitExceededError, RecipeRequestInProgressError
from foodkeeper.services.realtime import RecipeEventType
from foodkeeper.services.recipe_assistant import (
    CUSTOM_INPUT_BUTTON,
    AssistantDelays,
    ChatMessage,
    LoadingStage,
    RecipeAssistant,
    StageName,
)
from foodkeeper.services.recipe_prompt import HouseholdMember, PantryEntry

FIRST_RESPONSE = "[Dish Name] Mapo Tofu\n[Cuisine] Sichuan\n- Main: tofu 300g"


def _members():
    return [HouseholdMember(name="Dad", age=40, daily_calorie_target=2000.0)]


def _pantry():
    return [PantryEntry("tofu", 300.0, "g", date.today() + timedelta(days=10))]


def _assistant(ai_service, events=None, language="en"):
    assistant = RecipeAssistant(
        ai_service=ai_service,
        language=language,
        delays=AssistantDelays.none(),
        on_event=(lambda event_type, data: events.append((event_type, data))) if events is not None else None,
        rng=random.Random(42),
    )
    assistant.update_data(_members(), _pantry())
    return assistant


def _ai(response=FIRST_RESPONSE):
    ai = MagicMock()
    ai.generate_recipe = AsyncMock(return_value=response)
    return ai


def _blocking_ai():
    release = asyncio.Event()

    async def generate(prompt, language):
        await release.wait()
        return FIRST_RESPONSE

    ai = MagicMock()
    ai.generate_recipe = AsyncMock(side_effect=generate)
    return ai, release


async def _let_run(times=5):
    for _ in range(times):
        await asyncio.sleep(0)


class TestLoadingStage:
    def test_fixed_stage_progress(self):
        assert LoadingStage(StageName.PREPARING).progress == 0.1
        assert LoadingStage(StageName.GENERATING).progress == 0.4
        assert LoadingStage(StageName.COMPLETED).progress == 1.0

    def test_generating_progress(self):
        stage = LoadingStage(StageName.GENERATING_PROGRESS, 0.5)
        assert stage.progress == pytest.approx(0.625)
        assert stage.message("en") == "AI is thinking... 50%"
        assert stage.message("zh-Hans") == "AI正在思考... 50%"

    def test_messages(self):
        assert LoadingStage(StageName.ANALYZING).message() == "Analyzing ingredients..."
        assert LoadingStage(StageName.COMPLETED).message("zh-Hans") == "完成！"


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_full_request(self):
        ai = _ai()
        events = []
        assistant = _assistant(ai, events)

        task = assistant.send_quick_message("Sichuan dinner", is_preset_button=True, button_id="sichuan")
        await task

        assert [m.is_user for m in assistant.messages] == [True, False]
        assert assistant.messages[0].content == "Sichuan dinner"
        assert assistant.messages[1].content == FIRST_RESPONSE
        assert assistant.last_recommendation == FIRST_RESPONSE
        assert assistant.last_requirement == "Sichuan dinner"
        assert assistant.last_button_id == "sichuan"
        assert assistant.is_loading is False
        assert assistant.loading_stage is None

        prompt, language = ai.generate_recipe.await_args.args
        assert language == "en"
        assert prompt.endswith("[Other Requests]:\nSichuan dinner")
        assert "tofu: 300g" in prompt

        stages = [data["stage"] for event_type, data in events if event_type == RecipeEventType.STAGE_CHANGED]
        assert stages == ["preparing", "analyzing", "generating", "formatting", "completed"]
        assert events[-1][0] == RecipeEventType.RESET

    @pytest.mark.asyncio
    async def test_progress_never_moves_backwards(self):
        events = []
        assistant = _assistant(_ai(), events)

        await assistant.send_quick_message("Dinner", button_id="dinner")

        progress = [data["progress"] for event_type, data in events if event_type == RecipeEventType.STAGE_CHANGED]
        assert progress == sorted(progress)

    def test_set_stage_ignores_lower_progress(self):
        assistant = _assistant(_ai())
        assistant._set_stage(LoadingStage(StageName.GENERATING_PROGRESS, 0.5))

        assistant._set_stage(LoadingStage(StageName.GENERATING))

        assert assistant.loading_stage.name == StageName.GENERATING_PROGRESS

    @pytest.mark.asyncio
    async def test_simulated_progress_stops_below_formatting(self):
        assistant = _assistant(_ai())
        assistant._set_stage(LoadingStage(StageName.GENERATING))

        await assistant.simulate_progress()

        assert assistant.loading_stage.name == StageName.GENERATING_PROGRESS
        assert assistant.progress == pytest.approx(0.4 + 0.45 * 0.95)
        assert assistant.progress < LoadingStage(StageName.FORMATTING).progress

    @pytest.mark.asyncio
    async def test_without_members_shows_family_setup(self):
        ai = _ai()
        assistant = _assistant(ai)
        assistant.update_data([], _pantry())

        assert assistant.send_quick_message("Dinner") is None

        assert assistant.showing_family_setup is True
        assert assistant.messages == []
        ai.generate_recipe.assert_not_awaited()

        assistant.dismiss_family_setup()
        assert assistant.showing_family_setup is False

    @pytest.mark.asyncio
    async def test_blank_text_is_ignored(self):
        assistant = _assistant(_ai())
        assert assistant.send_message("   ") is None
        assert assistant.messages == []

    @pytest.mark.asyncio
    async def test_only_one_request_at_a_time(self):
        ai, release = _blocking_ai()
        assistant = _assistant(ai)

        task = assistant.send_quick_message("Dinner", button_id="dinner")
        await _let_run()

        assert assistant.is_loading is True
        assert assistant.loading_button_id == "dinner"
        assert assistant.send_quick_message("Lunch") is None
        with pytest.raises(RecipeRequestInProgressError):
            assistant.ensure_idle()

        release.set()
        await task
        assert ai.generate_recipe.await_count == 1
        assert assistant.is_loading is False

    @pytest.mark.asyncio
    async def test_follow_up_adjusts_previous_recommendation(self):
        ai = _ai()
        assistant = _assistant(ai)
        await assistant.send_quick_message("Sichuan dinner", button_id="sichuan")
        first_style = assistant.current_style

        await assistant.send_message("  less spicy  ")

        prompt = ai.generate_recipe.await_args.args[0]
        assert f"[Cooking Style]: {first_style}\n" in prompt
        assert prompt.endswith(
            "[Previous Dishes]: Mapo Tofu\n\n[Previous Requirement]:\nSichuan dinner\n\n"
            "[Adjustment Request]:\nless spicy"
        )
        assert assistant.messages[2].content == "less spicy"
        # Typed text does not replace the stored preset requirement
        assert assistant.last_requirement == "Sichuan dinner"
        assert assistant.last_button_id == "sichuan"

    @pytest.mark.asyncio
    async def test_same_preset_regenerates(self):
        ai = _ai()
        assistant = _assistant(ai)
        await assistant.send_quick_message("Sichuan dinner", button_id="sichuan")

        await assistant.send_quick_message("Sichuan dinner", button_id="sichuan")

        prompt = ai.generate_recipe.await_args.args[0]
        assert prompt.endswith("[Previous Dishes]: Mapo Tofu\n\n[Regenerate Request]:\nSichuan dinner")

    @pytest.mark.asyncio
    async def test_custom_input_button(self):
        ai = _ai()
        assistant = _assistant(ai)

        task = assistant.send_message("Something light")
        assert assistant.loading_button_id == CUSTOM_INPUT_BUTTON
        await task

        assert assistant.last_requirement == ""


class TestErrors:
    @pytest.mark.asyncio
    async def test_service_error_becomes_chat_message(self):
        ai = MagicMock()
        ai.generate_recipe = AsyncMock(side_effect=DailyLimitExceededError())
        assistant = _assistant(ai)

        await assistant.send_quick_message("Dinner")

        assert assistant.messages[-1].is_user is False
        assert assistant.messages[-1].content == (
            "You have used all of today's free AI recommendations.\n\n"
            "Configure your own API key to keep generating recipes, or come back tomorrow."
        )
        assert assistant.is_loading is False
        assert assistant.last_recommendation is None

    @pytest.mark.asyncio
    async def test_unexpected_error_uses_generic_message(self):
        ai = MagicMock()
        ai.generate_recipe = AsyncMock(side_effect=RuntimeError("boom"))
        assistant = _assistant(ai, language="zh-Hans")

        await assistant.send_quick_message("晚餐")

        assert assistant.messages[-1].content == "抱歉，生成食谱时出现问题，请重试。"
        assert assistant.is_loading is False


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_resets_state(self):
        ai, _ = _blocking_ai()
        events = []
        assistant = _assistant(ai, events)
        task = assistant.send_quick_message("Dinner")
        await _let_run()

        assistant.cancel_current_request()

        assert assistant.is_loading is False
        assert assistant.loading_stage is None
        with pytest.raises(asyncio.CancelledError):
            await task
        assert [m.is_user for m in assistant.messages] == [True]
        assert assistant.last_recommendation is None
        assert events[-1][0] == RecipeEventType.RESET

    @pytest.mark.asyncio
    async def test_emptied_inventory_cancels_request(self):
        ai, _ = _blocking_ai()
        assistant = _assistant(ai)
        task = assistant.send_quick_message("Dinner")
        await _let_run()

        assistant.update_data(_members(), [])

        assert assistant.is_loading is False
        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_language_change_clears_chat(self):
        events = []
        assistant = _assistant(_ai(), events)
        await assistant.send_quick_message("Dinner", button_id="dinner")

        assistant.clear_chat_on_language_change("en")
        assert len(assistant.messages) == 2

        assistant.clear_chat_on_language_change("zh-Hans")
        assert assistant.messages == []
        assert assistant.language == "zh-Hans"
        assert assistant.last_recommendation is None
        assert assistant.last_requirement == ""
        assert assistant.current_style is None
        assert events[-1][0] == RecipeEventType.CHAT_CLEARED


@pytest.mark.asyncio
async def test_chat_history_keeps_ten_messages():
    assistant = _assistant(_ai())

    for i in range(5):
        await assistant.send_quick_message(f"Request {i}", is_preset_button=False, button_id=CUSTOM_INPUT_BUTTON)
    assert len(assistant.messages) == 10
    assert assistant.messages[0].content == "Request 0"

    await assistant.send_quick_message("Request 5", is_preset_button=False, button_id=CUSTOM_INPUT_BUTTON)

    assert len(assistant.messages) == 10
    assert assistant.messages[0].content == "Request 1"
    assert assistant.messages[-2].content == "Request 5"
    assert assistant.messages[-1].is_user is False


def test_replies_are_appended_without_trimming():
    assistant = _assistant(_ai())

    for i in range(11):
        assistant._append(ChatMessage(content=str(i), is_user=i % 2 == 0))

    assert len(assistant.messages) == 11
    assert assistant.messages[0].content == "0"


def test_state_snapshot():
    assistant = _assistant(_ai(), language="zh-Hans")
    assistant._set_stage(LoadingStage(StageName.ANALYZING))

    state = assistant.state()

    assert state["stage"] == "analyzing"
    assert state["progress"] == 0.25
    assert state["stage_message"] == "正在分析食材..."
    assert state["message_count"] == 0
