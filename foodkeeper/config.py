"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./foodkeeper.db")

    # Redis
    redis_url: str = Field(default="redis://localhost:6379/0")

    # Display language for generated text ("en" | "zh-Hans")
    language: str = Field(default="en")

    # LLM
    llm_provider: str = Field(default="anthropic")  # "anthropic" | "ollama"
    anthropic_api_key: str | None = Field(default=None)
    anthropic_model: str = Field(default="claude-3-5-haiku-latest")
    ollama_base_url: str = Field(default="http://localhost:11434")
    llm_model: str = Field(default="gemma3:12b")
    llm_temperature: float = Field(default=0.7)
    llm_max_tokens: int = Field(default=2000)

    # Free AI quota per calendar day
    ai_daily_limit: int = Field(default=10)
    recipe_cache_seconds: int = Field(default=3600)

    # Optional directory overriding the packaged classification tables
    classification_data_dir: str | None = Field(default=None)

    history_retention_days: int = Field(default=30)
    log_level: str = Field(default="INFO")

    # API
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has sane settings."""
        if self.environment == "production":
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not use SQLite in production")
            if self.llm_provider == "anthropic" and not self.anthropic_api_key:
                raise ValueError("ANTHROPIC_API_KEY must be set in production")
        if self.language not in ("en", "zh-Hans"):
            raise ValueError("LANGUAGE must be 'en' or 'zh-Hans'")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
