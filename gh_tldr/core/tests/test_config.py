"""Tests for gh_tldr.core.config module."""

import pytest

from gh_tldr.core.config import Settings, get_settings
from gh_tldr.shared.exceptions import ConfigError


def test_settings_load_from_env(clean_env: pytest.MonkeyPatch) -> None:
    """Test that settings load correctly from environment variables."""
    clean_env.setenv("GITHUB_TOKEN", "test_token")
    clean_env.setenv("CLAUDE_COMMAND", "/opt/bin/claude")
    clean_env.setenv("CLAUDE_MODEL", "sonnet")

    settings = Settings()

    assert settings.github_token == "test_token"
    assert settings.claude_command == "/opt/bin/claude"
    assert settings.claude_model == "sonnet"


def test_settings_gh_token_alias(clean_env: pytest.MonkeyPatch) -> None:
    """Test that GH_TOKEN is accepted as the GitHub token."""
    clean_env.setenv("GH_TOKEN", "gh_cli_token")

    assert Settings().github_token == "gh_cli_token"


def test_settings_token_optional(clean_env: pytest.MonkeyPatch) -> None:
    """Test that a missing token is allowed (resolved later from the gh CLI)."""
    assert Settings().github_token == ""


def test_settings_default_values(clean_env: pytest.MonkeyPatch) -> None:
    """Test that default values are applied correctly."""
    settings = Settings()

    assert settings.github_api_url == "https://api.github.com"
    assert settings.claude_command == "claude"
    assert settings.claude_model is None
    assert settings.log_level == "WARNING"
    assert settings.request_timeout_seconds == 30
    assert settings.invocation_timeout_seconds == 300
    assert settings.max_search_pages == 10


def test_settings_api_url_trailing_slash(clean_env: pytest.MonkeyPatch) -> None:
    """Test that a trailing slash on the API URL is removed."""
    clean_env.setenv("GITHUB_API_URL", "https://github.example.com/api/v3/")

    assert Settings().github_api_url == "https://github.example.com/api/v3"


def test_settings_log_level_validation_valid(clean_env: pytest.MonkeyPatch) -> None:
    """Test that valid log levels are accepted and upper-cased."""
    for level in ["debug", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        clean_env.setenv("LOG_LEVEL", level)
        assert Settings().log_level == level.upper()


def test_settings_log_level_validation_invalid(clean_env: pytest.MonkeyPatch) -> None:
    """Test that invalid log level raises ConfigError."""
    clean_env.setenv("LOG_LEVEL", "INVALID")

    with pytest.raises(ConfigError, match="Invalid log level"):
        Settings()


def test_settings_request_timeout_validation(clean_env: pytest.MonkeyPatch) -> None:
    """Test that request timeout outside 1-300 raises ConfigError."""
    clean_env.setenv("REQUEST_TIMEOUT_SECONDS", "0")

    with pytest.raises(ConfigError, match="Request timeout must be between 1 and 300"):
        Settings()


def test_settings_invocation_timeout_validation(clean_env: pytest.MonkeyPatch) -> None:
    """Test that invocation timeout outside 10-3600 raises ConfigError."""
    clean_env.setenv("INVOCATION_TIMEOUT_SECONDS", "5000")

    with pytest.raises(ConfigError, match="Invocation timeout must be between 10 and 3600"):
        Settings()


def test_settings_max_search_pages_validation(clean_env: pytest.MonkeyPatch) -> None:
    """Test that search page cap above 10 raises ConfigError."""
    clean_env.setenv("MAX_SEARCH_PAGES", "11")

    with pytest.raises(ConfigError, match="Max search pages must be between 1 and 10"):
        Settings()


def test_settings_env_file(clean_env: pytest.MonkeyPatch, tmp_path) -> None:
    """Test that values are read from a .env file in the working directory."""
    (tmp_path / ".env").write_text("GITHUB_TOKEN=from_dotenv\nLOG_LEVEL=info\n")

    settings = Settings()

    assert settings.github_token == "from_dotenv"
    assert settings.log_level == "INFO"


def test_get_settings_caching(clean_env: pytest.MonkeyPatch) -> None:
    """Test that get_settings() returns cached instance."""
    clean_env.setenv("GITHUB_TOKEN", "test_token")

    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
