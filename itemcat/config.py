"""Runtime settings for ItemCat.

Values come from environment variables or a local .env file. A missing
ANTHROPIC_API_KEY is not an error: the service then runs on the keyword
fallback alone.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote classifier
    ANTHROPIC_API_KEY: Optional[str] = None
    ANTHROPIC_API_URL: str = "https://api.anthropic.com/v1/messages"
    ANTHROPIC_MODEL: str = "claude-3-haiku-20240307"
    ANTHROPIC_VERSION: str = "2023-06-01"
    ANTHROPIC_MAX_TOKENS: int = 100
    # None keeps the HTTP client's default timeout
    ANTHROPIC_TIMEOUT: Optional[float] = None

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def classifier_configured(self) -> bool:
        return bool(self.ANTHROPIC_API_KEY and self.ANTHROPIC_API_KEY.strip())


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
