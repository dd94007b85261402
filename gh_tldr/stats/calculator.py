"""Deduplication and aggregate statistics over activity entities."""

from collections.abc import Iterable, Sequence
from typing import Protocol

from gh_tldr.shared.models import CodeStats, PullRequest, RepoInfo


class _RepoScoped(Protocol):
    org: str
    repo: str


def dedupe_prs(prs: Iterable[PullRequest]) -> list[PullRequest]:
    """Keep the first occurrence of each pull request by org/repo#number."""
    seen: set[str] = set()
    unique: list[PullRequest] = []
    for pr in prs:
        if pr.identity in seen:
            continue
        seen.add(pr.identity)
        unique.append(pr)
    return unique


def compute_code_stats(prs: Iterable[PullRequest]) -> CodeStats:
    """Sum change statistics over unique pull requests.

    Call this with created and merged PRs together so a PR that was both
    opened and merged in the window is counted once. Missing stats count
    as zero.

    Args:
        prs: Pull requests, possibly containing duplicates

    Returns:
        CodeStats totals with net lines (additions - deletions)
    """
    unique = dedupe_prs(prs)
    return CodeStats(
        total_additions=sum(pr.additions or 0 for pr in unique),
        total_deletions=sum(pr.deletions or 0 for pr in unique),
        total_changed_files=sum(pr.changed_files or 0 for pr in unique),
    )


def dedupe_repos(repos: Iterable[RepoInfo]) -> list[RepoInfo]:
    """Keep the first occurrence of each repository by org/name, in order."""
    seen: set[str] = set()
    unique: list[RepoInfo] = []
    for repo in repos:
        key = f"{repo.org}/{repo.name}"
        if key in seen:
            continue
        seen.add(key)
        unique.append(repo)
    return unique


def collect_repos_touched(
    *collections: Sequence[_RepoScoped], repos_created: Sequence[RepoInfo] = ()
) -> list[str]:
    """Distinct org/repo identifiers in order of first appearance.

    Args:
        *collections: PR, issue and commit collections
        repos_created: Newly created repositories (identified by org/name)

    Returns:
        List of "org/repo" strings without duplicates
    """
    keys = [f"{item.org}/{item.repo}" for collection in collections for item in collection]
    keys.extend(f"{repo.org}/{repo.name}" for repo in repos_created)
    return list(dict.fromkeys(keys))


def distinct_repo_names(items: Iterable[_RepoScoped]) -> list[str]:
    """Distinct repository names (without org) in order of first appearance."""
    return list(dict.fromkeys(item.repo for item in items))
