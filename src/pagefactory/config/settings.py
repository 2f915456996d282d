"""Library settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """pagefactory configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PAGEFACTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Logging
    debug: bool = Field(default=False, description="Pretty console logs instead of JSON")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum log level"
    )

    # Element lookup (Playwright driver)
    element_timeout_ms: float | None = Field(
        default=None,
        ge=0,
        description="Max wait for an element lookup; None uses the page default",
    )
    element_state: Literal["attached", "visible"] = Field(
        default="attached", description="State an element must reach to be returned by a lookup"
    )

    # Interception
    intercept_controls: bool = Field(
        default=True,
        description="Route control construction through the interceptor chain too",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
