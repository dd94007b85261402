"""Search query builder and organization scope types.

GitHub search queries are space-joined predicates. ``SearchQuery`` keeps each
predicate in an explicit field and serializes them in a fixed order, so the
same query always yields the same string.
"""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DateQualifier = Literal["created", "merged", "closed", "committer-date"]


def format_since(since: datetime) -> str:
    """Format an instant for a search date predicate (``2025-01-09T12:00:00Z``)."""
    if since.tzinfo is None:
        since = since.replace(tzinfo=UTC)
    return since.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


class SearchQuery(BaseModel):
    """Structured GitHub search query.

    Attributes:
        author: Restrict to items authored by this user
        reviewed_by: Restrict to pull requests reviewed by this user
        item_type: "pr" or "issue" (omitted for commit search)
        date_field: Qualifier the lower date bound applies to
        since: Lower bound (inclusive) for ``date_field``
        exclude_authors: Authors to exclude (``-author:``)
        public_only: Restrict to public repositories (``is:public``)
        orgs: Organization scope, joined with implicit OR
    """

    model_config = ConfigDict(frozen=True)

    author: str | None = None
    reviewed_by: str | None = None
    item_type: Literal["pr", "issue"] | None = None
    date_field: DateQualifier | None = None
    since: datetime | None = None
    exclude_authors: tuple[str, ...] = ()
    public_only: bool = False
    orgs: tuple[str, ...] = ()

    def to_query_string(self) -> str:
        """Serialize the query to GitHub search syntax.

        Example:
            >>> SearchQuery(author="octocat", item_type="pr").to_query_string()
            'author:octocat type:pr'
        """
        parts: list[str] = []
        if self.author:
            parts.append(f"author:{self.author}")
        if self.reviewed_by:
            parts.append(f"reviewed-by:{self.reviewed_by}")
        if self.item_type:
            parts.append(f"type:{self.item_type}")
        if self.date_field and self.since is not None:
            parts.append(f"{self.date_field}:>={format_since(self.since)}")
        parts.extend(f"-author:{excluded}" for excluded in self.exclude_authors)
        if self.public_only:
            parts.append("is:public")
        parts.extend(f"org:{org}" for org in self.orgs)
        return " ".join(parts)

    def to_params(self) -> dict[str, str]:
        """Return request parameters for a search endpoint."""
        return {"q": self.to_query_string()}


class AllOrgsForUser(BaseModel):
    """Scan the user's own account plus every organization they belong to."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["all"] = "all"


class ExplicitOrgList(BaseModel):
    """Scan only the listed organizations/accounts."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["explicit"] = "explicit"
    orgs: tuple[str, ...] = Field(..., min_length=1)


OrgScope = AllOrgsForUser | ExplicitOrgList


def scope_orgs(scope: OrgScope) -> tuple[str, ...]:
    """Organizations to add as ``org:`` predicates for a scope.

    ``AllOrgsForUser`` adds no restriction to search queries.
    """
    if isinstance(scope, ExplicitOrgList):
        return scope.orgs
    return ()
