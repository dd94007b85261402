"""Shared pytest fixtures for gh-tldr tests."""

from collections.abc import Iterator

import pytest

from gh_tldr.core.config import Settings


@pytest.fixture
def mock_settings() -> Settings:
    """Create Settings instance with test values.

    Returns:
        Settings instance configured for testing
    """
    return Settings(
        github_token="test_github_token",
        github_api_url="https://api.github.com",
        claude_command="claude",
        log_level="WARNING",
        request_timeout_seconds=5,
        invocation_timeout_seconds=60,
    )


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """Reset the global settings cache before and after each test.

    This ensures tests don't interfere with each other via cached settings.
    """
    import gh_tldr.core.config

    gh_tldr.core.config._settings = None

    yield

    gh_tldr.core.config._settings = None
