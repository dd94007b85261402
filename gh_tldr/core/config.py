"""Configuration management using Pydantic Settings."""

from typing import ClassVar

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gh_tldr.shared.exceptions import ConfigError

# Singleton instance
_settings: "Settings | None" = None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        populate_by_name=True,
    )

    # GitHub configuration
    github_token: str = Field("", validation_alias=AliasChoices("GITHUB_TOKEN", "GH_TOKEN"))
    github_api_url: str = "https://api.github.com"
    max_search_pages: int = 10

    # Summary generation
    claude_command: str = "claude"
    claude_model: str | None = None

    # Timeouts
    request_timeout_seconds: int = 30
    invocation_timeout_seconds: int = 300

    # Application settings
    log_level: str = "WARNING"

    # Valid log levels
    VALID_LOG_LEVELS: ClassVar[set[str]] = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        v_upper = v.upper()
        if v_upper not in cls.VALID_LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level: {v}. Must be one of {', '.join(sorted(cls.VALID_LOG_LEVELS))}"
            )
        return v_upper

    @field_validator("github_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize API base URL so paths can be appended with a slash."""
        return v.rstrip("/")

    @field_validator("max_search_pages")
    @classmethod
    def validate_max_search_pages(cls, v: int) -> int:
        """Validate search page cap (1-10, GitHub serves at most 1000 results)."""
        if not 1 <= v <= 10:
            raise ConfigError(f"Max search pages must be between 1 and 10, got {v}")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_request_timeout(cls, v: int) -> int:
        """Validate per-request timeout (1-300 seconds)."""
        if not 1 <= v <= 300:
            raise ConfigError(f"Request timeout must be between 1 and 300 seconds, got {v}")
        return v

    @field_validator("invocation_timeout_seconds")
    @classmethod
    def validate_invocation_timeout(cls, v: int) -> int:
        """Validate whole-run deadline (10-3600 seconds)."""
        if not 10 <= v <= 3600:
            raise ConfigError(f"Invocation timeout must be between 10 and 3600 seconds, got {v}")
        return v


def get_settings() -> Settings:
    """Get or create the global Settings instance (cached singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
