"""Data models for gh-tldr."""

from pydantic import BaseModel, ConfigDict, Field, computed_field


class PullRequest(BaseModel):
    """Pull request found by one of the activity searches.

    Attributes:
        repo: Repository name
        org: Repository owner (user or organization)
        title: Pull request title
        number: Pull request number
        state: Lifecycle state (open/closed/merged), None when unknown
        url: GitHub HTML URL
        additions: Lines added, None until enriched
        deletions: Lines removed, None until enriched
        changed_files: Number of changed files, None until enriched
    """

    model_config = ConfigDict(frozen=True)

    repo: str = Field(..., description="Repository name")
    org: str = Field(..., description="Repository owner")
    title: str = Field(..., description="Pull request title")
    number: int = Field(..., description="Pull request number")
    state: str | None = Field(None, description="Lifecycle state")
    url: str = Field(..., description="GitHub HTML URL")
    additions: int | None = Field(None, description="Lines added")
    deletions: int | None = Field(None, description="Lines removed")
    changed_files: int | None = Field(None, description="Changed files count")

    @property
    def identity(self) -> str:
        """Natural key used for deduplication (org/repo#number)."""
        return f"{self.org}/{self.repo}#{self.number}"

    @property
    def is_enriched(self) -> bool:
        """Whether change statistics have been attached."""
        return self.additions is not None


class Issue(BaseModel):
    """Issue found by one of the activity searches."""

    model_config = ConfigDict(frozen=True)

    repo: str = Field(..., description="Repository name")
    org: str = Field(..., description="Repository owner")
    title: str = Field(..., description="Issue title")
    number: int = Field(..., description="Issue number")
    url: str = Field(..., description="GitHub HTML URL")


class Commit(BaseModel):
    """Commit authored by the user.

    Commits carry no identity key; the same commit may appear twice if the
    search returns it twice.
    """

    model_config = ConfigDict(frozen=True)

    repo: str = Field(..., description="Repository name")
    org: str = Field(..., description="Repository owner")
    message: str = Field(..., description="Commit message (first line)")
    url: str = Field(..., description="GitHub HTML URL")
    date: str = Field(..., description="Author timestamp (ISO 8601)")


class RepoInfo(BaseModel):
    """Repository created by the user or one of their organizations."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Repository name")
    org: str = Field(..., description="Repository owner")


class CodeStats(BaseModel):
    """Aggregate code-change statistics across unique pull requests."""

    model_config = ConfigDict(frozen=True)

    total_additions: int = Field(0, description="Total lines added")
    total_deletions: int = Field(0, description="Total lines removed")
    total_changed_files: int = Field(0, description="Total changed files")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def net_lines(self) -> int:
        """Net line change, negative when more lines were removed."""
        return self.total_additions - self.total_deletions


class ActivitySnapshot(BaseModel):
    """All activity of one user over one window, built once per run.

    Attributes:
        user: GitHub username the activity belongs to
        date: Generation date (DD.MM.YYYY)
        period: Human-readable window label (e.g. "last 7 days")
        prs_created: Pull requests authored and opened in the window
        prs_merged: Pull requests authored and merged in the window
        prs_reviewed: Pull requests by others reviewed by the user
        issues_created: Issues opened in the window
        issues_closed: Issues authored and closed in the window
        commits: Commits authored in the window
        repos_created: Repositories created in the window
        repos_touched: Distinct org/repo identifiers across all categories
        stats: Code-change totals over created and merged pull requests
    """

    model_config = ConfigDict(frozen=True)

    user: str
    date: str
    period: str
    prs_created: tuple[PullRequest, ...] = ()
    prs_merged: tuple[PullRequest, ...] = ()
    prs_reviewed: tuple[PullRequest, ...] = ()
    issues_created: tuple[Issue, ...] = ()
    issues_closed: tuple[Issue, ...] = ()
    commits: tuple[Commit, ...] = ()
    repos_created: tuple[RepoInfo, ...] = ()
    repos_touched: tuple[str, ...] = ()
    stats: CodeStats = Field(default_factory=CodeStats)
