"""Custom exception hierarchy for gh-tldr."""


class GhTldrError(Exception):
    """Base exception for all gh-tldr errors."""

    pass


class ConfigError(GhTldrError):
    """Raised when configuration validation fails."""

    pass


class MissingDependencyError(GhTldrError):
    """Raised when a required external executable is not installed."""

    pass


class TransportError(GhTldrError):
    """Raised when a call to an external service fails."""

    pass


class GitHubAPIError(TransportError):
    """Raised when GitHub API requests fail."""

    pass


class SummaryGenerationError(TransportError):
    """Raised when the summary generation command fails."""

    pass
