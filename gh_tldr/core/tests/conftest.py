"""Shared fixtures for core tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """Remove settings-related environment variables and any local .env file.

    Returns:
        The monkeypatch fixture for further environment changes
    """
    for name in (
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GITHUB_API_URL",
        "CLAUDE_COMMAND",
        "CLAUDE_MODEL",
        "LOG_LEVEL",
        "REQUEST_TIMEOUT_SECONDS",
        "INVOCATION_TIMEOUT_SECONDS",
        "MAX_SEARCH_PAGES",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """Reset the global settings cache around each test."""
    import gh_tldr.core.config

    gh_tldr.core.config._settings = None
    yield
    gh_tldr.core.config._settings = None
