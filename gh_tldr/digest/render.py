"""Digest rendering for slack, markdown and plain text output."""

from typing import Literal

from gh_tldr.shared.models import ActivitySnapshot
from gh_tldr.stats.calculator import distinct_repo_names
from gh_tldr.stats.session import estimate_work_session, format_work_session

OutputFormat = Literal["slack", "markdown", "plain"]
Language = Literal["en", "de"]

OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("slack", "markdown", "plain")

# (english, german) per category, in display order
CATEGORY_LABELS: dict[str, tuple[str, str]] = {
    "prs_created": ("PRs created", "PRs erstellt"),
    "prs_reviewed": ("PRs reviewed", "PRs reviewed/approved"),
    "prs_merged": ("PRs merged", "PRs gemerged"),
    "issues_created": ("issues created", "Issues erstellt"),
    "issues_closed": ("issues closed", "Issues geschlossen"),
    "commits": ("commits", "Commits"),
    "repos_created": ("new repos created", "neue Repos erstellt"),
}


def has_activity(snapshot: ActivitySnapshot) -> bool:
    """Whether any of the seven categories holds at least one entry."""
    return any(len(getattr(snapshot, category)) > 0 for category in CATEGORY_LABELS)


def format_header(snapshot: ActivitySnapshot, output_format: OutputFormat) -> str:
    """Header line, e.g. "tl;dr 09.01.2025" ("## " prefixed for markdown)."""
    prefix = "## " if output_format == "markdown" else ""
    return f"{prefix}tl;dr {snapshot.date}"


def no_activity_message(period: str, lang: Language) -> str:
    """Localized sentence for an empty window."""
    if lang == "en":
        return f"No GitHub activity in the {period}."
    return f"Keine GitHub-Aktivität in den {period}."


def _bullet(text: str, output_format: OutputFormat) -> str:
    if output_format == "markdown":
        return f"- {text}"
    return f"• {text}"


def format_activity_line(
    count: int,
    label: str,
    repos: str,
    output_format: OutputFormat,
) -> str | None:
    """One category line, or None for an empty category."""
    if count == 0:
        return None

    repo_suffix = f" ({repos})" if repos else ""
    if output_format == "markdown":
        return f"- **{count}** {label}{repo_suffix}"
    return f"• {count} {label}{repo_suffix}"


def _category_repos(snapshot: ActivitySnapshot, category: str) -> str:
    if category == "repos_created":
        return ", ".join(repo.name for repo in snapshot.repos_created)
    return ", ".join(distinct_repo_names(getattr(snapshot, category)))


def format_activity(
    snapshot: ActivitySnapshot,
    output_format: OutputFormat = "slack",
    lang: Language = "de",
) -> str:
    """Render the snapshot as a digest.

    Layout: header, blank line, one line per non-empty category, optional
    work-session line, blank line, then the touched repos. An empty snapshot
    renders as the header followed by the no-activity sentence.

    Args:
        snapshot: Activity snapshot to render
        output_format: "slack", "markdown" or "plain"
        lang: "en" or "de"

    Returns:
        Rendered digest text
    """
    lines = [format_header(snapshot, output_format), ""]

    activity_lines = [
        line
        for line in (
            format_activity_line(
                len(getattr(snapshot, category)),
                labels[0] if lang == "en" else labels[1],
                _category_repos(snapshot, category),
                output_format,
            )
            for category, labels in CATEGORY_LABELS.items()
        )
        if line is not None
    ]

    if not activity_lines:
        lines.append(no_activity_message(snapshot.period, lang))
        return "\n".join(lines)

    lines.extend(activity_lines)

    hours = estimate_work_session(snapshot.commits)
    if hours is not None:
        lines.append(_bullet(format_work_session(hours, lang), output_format))

    lines.append("")

    if snapshot.repos_touched:
        lines.append(f"Repos: {', '.join(snapshot.repos_touched)}")

    return "\n".join(lines)
