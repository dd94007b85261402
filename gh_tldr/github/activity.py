"""Activity gathering: concurrent category searches assembled into a snapshot."""

import asyncio
from collections.abc import Coroutine
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from gh_tldr.core.logging import get_logger
from gh_tldr.github.enrich import enrich_prs_with_stats
from gh_tldr.github.normalize import (
    normalize_commit,
    normalize_issue,
    normalize_pr,
    normalize_repo,
)
from gh_tldr.github.query import (
    ExplicitOrgList,
    OrgScope,
    SearchQuery,
    scope_orgs,
)
from gh_tldr.shared.exceptions import GitHubAPIError
from gh_tldr.shared.models import ActivitySnapshot, RepoInfo
from gh_tldr.stats.calculator import (
    collect_repos_touched,
    compute_code_stats,
    dedupe_repos,
)

if TYPE_CHECKING:
    from gh_tldr.github.client import GitHubClient

logger = get_logger(__name__)

ISSUES_ENDPOINT = "search/issues"
COMMITS_ENDPOINT = "search/commits"


def get_since(window_days: int, now: datetime | None = None) -> datetime:
    """Lower bound of the window as an absolute UTC instant."""
    now = now or datetime.now(UTC)
    return now - timedelta(days=window_days)


def format_date(value: datetime) -> str:
    """Format a date as DD.MM.YYYY in local time."""
    return value.astimezone().strftime("%d.%m.%Y")


def period_label(window_days: int) -> str:
    """Human-readable label for the window, e.g. "last 7 days"."""
    if window_days == 1:
        return "last 24 hours"
    return f"last {window_days} days"


def build_category_queries(
    username: str, since: datetime, public_only: bool, org_scope: OrgScope
) -> dict[str, tuple[str, SearchQuery]]:
    """Build the six search-backed category queries.

    Returns:
        Mapping of category name to (endpoint, query)
    """
    orgs = scope_orgs(org_scope)
    common: dict[str, Any] = {"since": since, "public_only": public_only, "orgs": orgs}

    return {
        "prs_created": (
            ISSUES_ENDPOINT,
            SearchQuery(author=username, item_type="pr", date_field="created", **common),
        ),
        "prs_merged": (
            ISSUES_ENDPOINT,
            SearchQuery(author=username, item_type="pr", date_field="merged", **common),
        ),
        "prs_reviewed": (
            ISSUES_ENDPOINT,
            SearchQuery(
                reviewed_by=username,
                item_type="pr",
                date_field="created",
                exclude_authors=(username,),
                **common,
            ),
        ),
        "issues_created": (
            ISSUES_ENDPOINT,
            SearchQuery(author=username, item_type="issue", date_field="created", **common),
        ),
        "issues_closed": (
            ISSUES_ENDPOINT,
            SearchQuery(author=username, item_type="issue", date_field="closed", **common),
        ),
        # no is:public predicate for commit search
        "commits": (
            COMMITS_ENDPOINT,
            SearchQuery(author=username, date_field="committer-date", since=since, orgs=orgs),
        ),
    }


async def gather_or_cancel(*coros: Coroutine[Any, Any, Any]) -> list[Any]:
    """Run coroutines concurrently and return their results in order.

    The first failure cancels every sibling still running and is re-raised
    as-is, not wrapped in an ``ExceptionGroup``.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
    except ExceptionGroup as group:
        error: BaseException = group
        while isinstance(error, BaseExceptionGroup):
            error = error.exceptions[0]
        raise error from None
    return [task.result() for task in tasks]


async def fetch_user_orgs(client: "GitHubClient", username: str) -> list[str]:
    """List organizations of a user.

    Private memberships are visible only when ``username`` is the token's
    own account; otherwise public memberships are used. Lookup failures
    yield an empty list.
    """
    try:
        if await client.get_authenticated_user() == username:
            return await client.list_authenticated_user_orgs()
    except GitHubAPIError as e:
        logger.warning("github.orgs.auth_lookup_failed", username=username, error=str(e))

    try:
        return await client.list_public_orgs(username)
    except GitHubAPIError as e:
        logger.warning("github.orgs.public_lookup_failed", username=username, error=str(e))
        return []


async def _list_owner_repos_since(
    client: "GitHubClient",
    owner: str,
    username: str,
    since: datetime,
    public_only: bool,
) -> list[RepoInfo]:
    try:
        raw_repos = await client.list_repositories(
            owner, is_user=owner == username, public_only=public_only
        )
        return [
            normalize_repo(raw)
            for raw in raw_repos
            if datetime.fromisoformat(raw["created_at"].replace("Z", "+00:00")) >= since
        ]
    except Exception as e:
        # failures stay confined to this owner
        logger.warning("github.repos.list_failed", owner=owner, error=str(e))
        return []


async def fetch_repos_created_since(
    client: "GitHubClient",
    username: str,
    since: datetime,
    public_only: bool,
    org_scope: OrgScope,
) -> list[RepoInfo]:
    """Repositories created since ``since`` across the scanned owners.

    Owners are the user plus all their organizations for ``AllOrgsForUser``,
    or exactly the listed owners for ``ExplicitOrgList``. An owner whose
    listing fails contributes nothing.
    """
    if isinstance(org_scope, ExplicitOrgList):
        owners = list(org_scope.orgs)
    else:
        owners = [username, *await fetch_user_orgs(client, username)]

    per_owner = await gather_or_cancel(
        *(
            _list_owner_repos_since(client, owner, username, since, public_only)
            for owner in owners
        )
    )
    return dedupe_repos(repo for repos in per_owner for repo in repos)


async def gather_activity(
    client: "GitHubClient",
    username: str,
    window_days: int,
    public_only: bool,
    org_scope: OrgScope,
    now: datetime | None = None,
) -> ActivitySnapshot:
    """Collect all activity of a user in the window into a snapshot.

    All seven categories are fetched concurrently. A failing category search
    aborts the whole call and cancels the searches still in flight; repo
    listing failures for single owners and PR stats failures only drop data.

    Args:
        client: GitHub API client (open session)
        username: GitHub username
        window_days: Window length in days, counted back from now
        public_only: Restrict to public repositories
        org_scope: Organizations to scan (AllOrgsForUser or ExplicitOrgList)
        now: Reference instant (defaults to current time)

    Returns:
        Immutable ActivitySnapshot

    Raises:
        GitHubAPIError: If a category search fails
    """
    now = now or datetime.now(UTC)
    since = get_since(window_days, now)
    queries = build_category_queries(username, since, public_only, org_scope)

    logger.info(
        "activity.gather.started",
        username=username,
        since=since.isoformat(),
        public_only=public_only,
        orgs=list(scope_orgs(org_scope)),
    )

    (
        prs_created_items,
        prs_merged_items,
        prs_reviewed_items,
        issues_created_items,
        issues_closed_items,
        commit_items,
        repos_created,
    ) = await gather_or_cancel(
        *(client.search(endpoint, query.to_params()) for endpoint, query in queries.values()),
        fetch_repos_created_since(client, username, since, public_only, org_scope),
    )

    prs_reviewed = [normalize_pr(item) for item in prs_reviewed_items]
    issues_created = [normalize_issue(item) for item in issues_created_items]
    issues_closed = [normalize_issue(item) for item in issues_closed_items]
    commits = [normalize_commit(item) for item in commit_items]

    prs_created, prs_merged = await gather_or_cancel(
        enrich_prs_with_stats(client, [normalize_pr(item) for item in prs_created_items]),
        enrich_prs_with_stats(client, [normalize_pr(item) for item in prs_merged_items]),
    )

    stats = compute_code_stats([*prs_created, *prs_merged])
    repos_touched = collect_repos_touched(
        prs_created,
        prs_merged,
        prs_reviewed,
        issues_created,
        issues_closed,
        commits,
        repos_created=repos_created,
    )

    snapshot = ActivitySnapshot(
        user=username,
        date=format_date(now),
        period=period_label(window_days),
        prs_created=tuple(prs_created),
        prs_merged=tuple(prs_merged),
        prs_reviewed=tuple(prs_reviewed),
        issues_created=tuple(issues_created),
        issues_closed=tuple(issues_closed),
        commits=tuple(commits),
        repos_created=tuple(repos_created),
        repos_touched=tuple(repos_touched),
        stats=stats,
    )

    logger.info(
        "activity.gather.complete",
        username=username,
        prs_created=len(prs_created),
        prs_merged=len(prs_merged),
        prs_reviewed=len(prs_reviewed),
        issues_created=len(issues_created),
        issues_closed=len(issues_closed),
        commits=len(commits),
        repos_created=len(repos_created),
        repos_touched=len(repos_touched),
    )
    return snapshot
