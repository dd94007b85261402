"""Normalization of raw GitHub API records into activity entities."""

from typing import Any

from gh_tldr.shared.models import Commit, Issue, PullRequest, RepoInfo


def split_repository_url(repository_url: str) -> tuple[str, str]:
    """Extract (org, repo) from the last two segments of a repository URL.

    Positional only: a URL with fewer than two segments yields whatever
    segments exist rather than an error.

    Example:
        >>> split_repository_url("https://api.github.com/repos/octocat/hello")
        ('octocat', 'hello')
    """
    parts = repository_url.split("/")
    repo = parts[-1]
    org = parts[-2] if len(parts) > 1 else ""
    return org, repo


def first_line(message: str) -> str:
    """Return the text before the first newline."""
    return message.split("\n", 1)[0]


def normalize_pr(item: dict[str, Any]) -> PullRequest:
    """Build a PullRequest from a search/issues result item."""
    org, repo = split_repository_url(item["repository_url"])
    return PullRequest(
        repo=repo,
        org=org,
        title=item["title"],
        number=item["number"],
        state=item.get("state"),
        url=item["html_url"],
    )


def normalize_issue(item: dict[str, Any]) -> Issue:
    """Build an Issue from a search/issues result item."""
    org, repo = split_repository_url(item["repository_url"])
    return Issue(
        repo=repo,
        org=org,
        title=item["title"],
        number=item["number"],
        url=item["html_url"],
    )


def normalize_commit(item: dict[str, Any]) -> Commit:
    """Build a Commit from a search/commits result item."""
    repository = item["repository"]
    commit = item["commit"]
    return Commit(
        repo=repository["name"],
        org=repository["owner"]["login"],
        message=first_line(commit["message"]),
        url=item["html_url"],
        date=commit["author"]["date"],
    )


def normalize_repo(item: dict[str, Any]) -> RepoInfo:
    """Build a RepoInfo from a repository listing item."""
    return RepoInfo(name=item["name"], org=item["owner"]["login"])
