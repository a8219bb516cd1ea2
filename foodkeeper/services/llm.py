"""AI text-generation service for recipe recommendations."""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import anthropic
import httpx
from fastapi.concurrency import run_in_threadpool

from foodkeeper.config import Settings, get_settings
from foodkeeper.database import SessionLocal
from foodkeeper.exceptions import (
    AIAPIError,
    DailyLimitExceededError,
    InvalidAIResponseError,
    InvalidConfigurationError,
    MissingAPIKeyError,
)
from foodkeeper.i18n import CHINESE
from foodkeeper.services.llm_prompts import get_recipe_system_prompt
from foodkeeper.services.usage import DailyUsageService

logger = logging.getLogger(__name__)


@dataclass
class CachedResponse:
    content: str
    created_at: float

    def is_expired(self, max_age: float) -> bool:
        return time.monotonic() - self.created_at > max_age


class AIService:
    """Generate text through Anthropic or a local Ollama server.

    Recipe responses are cached per (message, language, provider), provider calls
    run one at a time, and every call counts against the free daily quota.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: Callable = SessionLocal,
    ) -> None:
        self.settings = settings or get_settings()
        self.provider = self.settings.llm_provider
        self.session_factory = session_factory
        self.timeout = 120.0  # 2 minutes for LLM responses
        self._cache: dict[str, CachedResponse] = {}
        self._lock = asyncio.Lock()

    @property
    def cache_seconds(self) -> float:
        return float(self.settings.recipe_cache_seconds)

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> dict[str, int]:
        valid = [entry for entry in self._cache.values() if not entry.is_expired(self.cache_seconds)]
        return {"count": len(self._cache), "valid_count": len(valid)}

    async def generate_recipe(self, message: str, language: str = CHINESE) -> str:
        """Generate recipes for an assembled prompt, in the prompt's language."""
        cache_key = f"{message}_{language}_{self.provider}"
        cached = self._cache.get(cache_key)
        if cached and not cached.is_expired(self.cache_seconds):
            logger.info("Recipe response served from cache")
            return cached.content

        self._cache = {k: v for k, v in self._cache.items() if not v.is_expired(self.cache_seconds)}

        async with self._lock:
            await run_in_threadpool(self._check_quota)
            result = await self._call_provider(message, get_recipe_system_prompt(language))
            await run_in_threadpool(self._record_usage)

        self._cache[cache_key] = CachedResponse(content=result, created_at=time.monotonic())
        return result

    async def simple_text_generation(self, message: str, system_prompt: str | None = None) -> str:
        async with self._lock:
            await run_in_threadpool(self._check_quota)
            result = await self._call_provider(message, system_prompt or "")
            await run_in_threadpool(self._record_usage)
        return result

    async def health_check(self) -> bool:
        """Check that the configured provider is reachable."""
        if self.provider == "ollama":
            try:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await client.get(f"{self.settings.ollama_base_url}/api/tags")
                    response.raise_for_status()
                    data = response.json()
                    models = [m["name"] for m in data.get("models", [])]
                    return any(self.settings.llm_model in m for m in models)
            except httpx.HTTPError:
                return False
        try:
            await self._anthropic_client().models.list(limit=1)
            return True
        except (anthropic.APIError, MissingAPIKeyError) as e:
            logger.warning(f"Anthropic health check failed: {e}")
            return False

    def _usage(self, db) -> DailyUsageService:
        return DailyUsageService(db, self.settings.ai_daily_limit)

    def _check_quota(self) -> None:
        db = self.session_factory()
        try:
            if not self._usage(db).can_use():
                logger.info("Daily AI limit reached")
                raise DailyLimitExceededError()
        finally:
            db.close()

    def _record_usage(self) -> None:
        db = self.session_factory()
        try:
            self._usage(db).increment()
        finally:
            db.close()

    async def _call_provider(self, message: str, system_prompt: str) -> str:
        if self.provider == "anthropic":
            return await self._call_anthropic(message, system_prompt)
        if self.provider == "ollama":
            return await self._call_ollama(message, system_prompt)
        raise InvalidConfigurationError(f"Unknown LLM provider '{self.provider}'")

    def _anthropic_client(self) -> anthropic.AsyncAnthropic:
        if not self.settings.anthropic_api_key:
            raise MissingAPIKeyError()
        return anthropic.AsyncAnthropic(api_key=self.settings.anthropic_api_key, timeout=self.timeout)

    async def _call_anthropic(self, message: str, system_prompt: str) -> str:
        client = self._anthropic_client()
        logger.debug(f"Anthropic request ({self.settings.anthropic_model}):\n{message}")
        try:
            response = await client.messages.create(
                model=self.settings.anthropic_model,
                max_tokens=self.settings.llm_max_tokens,
                temperature=self.settings.llm_temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": message}],
            )
        except anthropic.APIStatusError as e:
            logger.error(f"Anthropic API error {e.status_code}: {e}")
            raise AIAPIError(e.status_code) from e
        except anthropic.APIConnectionError as e:
            logger.error(f"Could not reach Anthropic: {e}")
            raise AIAPIError(0, str(e)) from e

        texts = [block.text for block in response.content if getattr(block, "type", None) == "text"]
        if not texts or not texts[0].strip():
            raise InvalidAIResponseError()
        logger.debug(f"Anthropic response:\n{texts[0]}")
        return texts[0]

    async def _call_ollama(self, message: str, system_prompt: str) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": message})

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.settings.ollama_base_url}/api/chat",
                    json={
                        "model": self.settings.llm_model,
                        "messages": messages,
                        "stream": False,
                        "options": {
                            "temperature": self.settings.llm_temperature,
                            "num_predict": self.settings.llm_max_tokens,
                        },
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error calling Ollama: {e}")
            raise AIAPIError(e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Ollama: {e}")
            raise AIAPIError(0, str(e)) from e
        except ValueError as e:
            logger.error(f"Ollama returned invalid JSON: {e}")
            raise InvalidAIResponseError() from e

        try:
            content = data["message"]["content"]
        except (KeyError, TypeError) as e:
            raise InvalidAIResponseError() from e
        if not content or not content.strip():
            raise InvalidAIResponseError()
        return content


def get_ai_service() -> AIService:
    """Get an AI service instance."""
    return AIService()
