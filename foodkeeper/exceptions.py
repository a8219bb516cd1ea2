"""Domain exceptions raised by the services."""

from foodkeeper.i18n import ENGLISH, translate


class AIServiceError(Exception):
    """Base error for the AI text-generation service."""

    code = "ai_error"
    message_key = "recipe.error.message"

    def __init__(self, message: str | None = None):
        super().__init__(message or translate(self.message_key))
        self.message = message or translate(self.message_key)

    def localized_message(self, language: str = ENGLISH) -> str:
        """User-facing text for a chat message."""
        return translate(self.message_key, language)


class MissingAPIKeyError(AIServiceError):
    """No API key is configured for the selected provider."""

    code = "missing_api_key"
    message_key = "ai.error.missing.api.key"


class InvalidConfigurationError(AIServiceError):
    """The provider configuration is unusable."""

    code = "invalid_configuration"
    message_key = "ai.error.invalid.configuration"


class InvalidAIResponseError(AIServiceError):
    """The provider answered with an empty or malformed payload."""

    code = "invalid_response"
    message_key = "ai.error.invalid.response"


class AIAPIError(AIServiceError):
    """The provider returned a non-success status, or could not be reached (status 0)."""

    code = "api_error"
    message_key = "ai.error.api.error"

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(message or f"AI API request failed with status {status_code}")
        self.status_code = status_code

    def localized_message(self, language: str = ENGLISH) -> str:
        return f"{translate(self.message_key, language)} ({self.status_code})"


class DailyLimitExceededError(AIServiceError):
    """The free daily AI quota is used up."""

    code = "daily_limit_exceeded"
    message_key = "ai.error.daily.limit.exceeded"

    def localized_message(self, language: str = ENGLISH) -> str:
        return f"{translate(self.message_key, language)}\n\n{translate('ai.upgrade.tip.description', language)}"


class RecipeRequestInProgressError(Exception):
    """A recipe request is already running."""
