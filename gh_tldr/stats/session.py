"""Work-session estimation from commit timestamps.

Commits are sorted and grouped into sessions: a gap longer than
``GAP_THRESHOLD`` starts a new session. Each session contributes its span,
or ``SINGLE_COMMIT_HOURS`` when it holds a single commit. The sum is rounded
to the nearest half hour.
"""

import math
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from gh_tldr.shared.models import Commit

GAP_THRESHOLD = timedelta(hours=3)
SINGLE_COMMIT_HOURS = 0.25
MIN_REPORTED_HOURS = 0.5

_LABELS = {
    "en": ("Work session", "hour", "hours"),
    "de": ("Arbeitszeit", "Stunde", "Stunden"),
}


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, treating naive values as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def group_sessions(timestamps: Iterable[datetime]) -> list[list[datetime]]:
    """Split timestamps into sessions separated by gaps over ``GAP_THRESHOLD``."""
    ordered = sorted(timestamps)
    if not ordered:
        return []

    sessions: list[list[datetime]] = [[ordered[0]]]
    for previous, current in zip(ordered, ordered[1:]):
        if current - previous > GAP_THRESHOLD:
            sessions.append([current])
        else:
            sessions[-1].append(current)
    return sessions


def estimate_work_session(commits: Iterable[Commit]) -> float | None:
    """Estimate hours worked from commit timestamps.

    Args:
        commits: Commits in any order, duplicates allowed

    Returns:
        Hours rounded to the nearest 0.5, or None with fewer than two
        commits or when the estimate rounds below half an hour
    """
    timestamps = [parse_timestamp(commit.date) for commit in commits]
    if len(timestamps) < 2:
        return None

    total_hours = 0.0
    for session in group_sessions(timestamps):
        if len(session) == 1:
            total_hours += SINGLE_COMMIT_HOURS
        else:
            total_hours += (session[-1] - session[0]).total_seconds() / 3600

    # half-up, not banker's rounding
    rounded = math.floor(total_hours * 2 + 0.5) / 2
    if rounded < MIN_REPORTED_HOURS:
        return None
    return rounded


def format_work_session(hours: float, lang: str = "en") -> str:
    """Render an estimate as e.g. "Work session: ~1.5 hours".

    Example:
        >>> format_work_session(1.0, "de")
        'Arbeitszeit: ~1 Stunde'
    """
    label, singular, plural = _LABELS.get(lang, _LABELS["en"])
    unit = singular if hours == 1 else plural
    return f"{label}: ~{hours:g} {unit}"
