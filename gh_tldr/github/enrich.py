"""Pull request enrichment with code-change statistics."""

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING

from gh_tldr.core.logging import get_logger
from gh_tldr.shared.models import PullRequest

if TYPE_CHECKING:
    from gh_tldr.github.client import GitHubClient

logger = get_logger(__name__)


async def enrich_prs_with_stats(
    client: "GitHubClient", prs: Sequence[PullRequest]
) -> list[PullRequest]:
    """Attach additions/deletions/changed_files to each pull request.

    One detail request per PR, all in flight at once. A PR whose request
    fails is returned unchanged, so the result always has the same length
    and order as the input.

    Args:
        client: GitHub API client
        prs: Pull requests to enrich

    Returns:
        Pull requests with stats where the detail fetch succeeded
    """
    if not prs:
        return []

    results = await asyncio.gather(
        *(client.get_pull_request_detail(pr.org, pr.repo, pr.number) for pr in prs),
        return_exceptions=True,
    )

    enriched: list[PullRequest] = []
    failures = 0
    for pr, result in zip(prs, results, strict=True):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            failures += 1
            logger.warning(
                "github.enrich.failed",
                pr=pr.identity,
                error=str(result),
            )
            enriched.append(pr)
        else:
            enriched.append(pr.model_copy(update=result))

    logger.info(
        "github.enrich.complete",
        total=len(prs),
        enriched=sum(pr.is_enriched for pr in enriched),
        failed=failures,
    )
    return enriched
