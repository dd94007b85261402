"""Shared test fixtures for GitHub integration tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from gh_tldr.github.client import GitHubClient


def mock_response_context(
    status: int = 200,
    json_data: Any = None,
    headers: dict[str, str] | None = None,
) -> MagicMock:
    """Build an async context manager yielding a fake aiohttp response."""
    response = AsyncMock()
    response.status = status
    response.json = AsyncMock(return_value=json_data)
    response.headers = headers or {}

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=None)
    return context


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for fake aiohttp response context managers."""
    return mock_response_context


@pytest.fixture
def github_client() -> GitHubClient:
    """Create a GitHub client instance with a mocked session.

    Returns:
        GitHubClient instance with test token
    """
    client = GitHubClient("test_token_12345")
    client.session = AsyncMock()
    client.session.get = MagicMock()
    return client


def raw_issue_item(
    org: str = "octocat",
    repo: str = "hello-world",
    number: int = 1,
    title: str = "Fix the parser",
    state: str = "open",
) -> dict[str, Any]:
    """search/issues result item for a PR or issue."""
    return {
        "repository_url": f"https://api.github.com/repos/{org}/{repo}",
        "title": title,
        "number": number,
        "state": state,
        "html_url": f"https://github.com/{org}/{repo}/pull/{number}",
    }


def raw_commit_item(
    org: str = "octocat",
    repo: str = "hello-world",
    message: str = "Fix bug in parser\n\nAdded validation logic",
    date: str = "2025-01-09T12:00:00Z",
    sha: str = "abc123def456",
) -> dict[str, Any]:
    """search/commits result item."""
    return {
        "repository": {"name": repo, "owner": {"login": org}},
        "commit": {"message": message, "author": {"date": date}},
        "html_url": f"https://github.com/{org}/{repo}/commit/{sha}",
    }


def raw_repo(org: str, name: str, created_at: str) -> dict[str, Any]:
    """Repository listing item."""
    return {
        "name": name,
        "owner": {"login": org},
        "created_at": created_at,
        "html_url": f"https://github.com/{org}/{name}",
    }


@pytest.fixture
def issue_item() -> Callable[..., dict[str, Any]]:
    """Factory for search/issues result items."""
    return raw_issue_item


@pytest.fixture
def commit_item() -> Callable[..., dict[str, Any]]:
    """Factory for search/commits result items."""
    return raw_commit_item


@pytest.fixture
def repo_item() -> Callable[..., dict[str, Any]]:
    """Factory for repository listing items."""
    return raw_repo
