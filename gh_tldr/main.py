"""gh-tldr command line entry point."""

import argparse
import asyncio
import shutil
import sys
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from gh_tldr.core.config import Settings, get_settings
from gh_tldr.core.logging import get_logger, set_correlation_id, setup_logging
from gh_tldr.digest.render import (
    OUTPUT_FORMATS,
    Language,
    OutputFormat,
    format_activity,
    has_activity,
)
from gh_tldr.github.activity import gather_activity
from gh_tldr.github.client import GitHubClient
from gh_tldr.github.query import AllOrgsForUser, ExplicitOrgList, OrgScope
from gh_tldr.interactive import run_interactive
from gh_tldr.shared.exceptions import ConfigError, GhTldrError, MissingDependencyError
from gh_tldr.summary.generator import generate_summary_text
from gh_tldr.summary.prompts import VERBOSITY_LEVELS, Verbosity, validate_verbosity

logger = get_logger(__name__)

__version__ = "1.0.0"

DEFAULT_DAYS = 1


class RunOptions(BaseModel):
    """Resolved options for one digest run."""

    username: str = ""
    days: int = DEFAULT_DAYS
    lang: Language = "de"
    output_format: OutputFormat = "slack"
    public_only: bool = False
    verbosity: Verbosity = "normal"
    org_scope: OrgScope = AllOrgsForUser()
    model: str | None = None


def parse_days(value: str | int | None) -> int:
    """Coerce a day count, falling back to 1 for non-numeric or non-positive input."""
    try:
        days = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_DAYS
    return days if days > 0 else DEFAULT_DAYS


def parse_org_scope(value: str | list[str] | None) -> OrgScope:
    """Turn a comma-separated org list into an org scope.

    Example:
        >>> parse_org_scope("acme, widgets")
        ExplicitOrgList(kind='explicit', orgs=('acme', 'widgets'))
        >>> parse_org_scope("")
        AllOrgsForUser(kind='all')
    """
    if isinstance(value, str):
        value = value.split(",")
    orgs = tuple(org.strip() for org in value or [] if org.strip())
    if not orgs:
        return AllOrgsForUser()
    return ExplicitOrgList(orgs=orgs)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gh-tldr",
        description="Generate a TL;DR summary of your GitHub activity",
    )
    p.add_argument("username", nargs="?", default="", help="GitHub username (defaults to authenticated user)")
    p.add_argument("-d", "--days", default=str(DEFAULT_DAYS), help="Time period in days")
    p.add_argument("-e", "--english", action="store_true", help="Output in English (default: German)")
    p.add_argument("-f", "--format", choices=OUTPUT_FORMATS, default="slack", help="Output format")
    p.add_argument("-p", "--public-only", action="store_true", help="Exclude private repositories")
    p.add_argument("-i", "--interactive", action="store_true", help="Force interactive mode")
    p.add_argument(
        "-v",
        "--verbosity",
        default="normal",
        help=f"Summary verbosity: {'|'.join(VERBOSITY_LEVELS)}",
    )
    p.add_argument("-o", "--orgs", default="", help="Filter by organizations/accounts (comma-separated)")
    p.add_argument("-m", "--model", default=None, help="Claude model to use (e.g. sonnet, opus, haiku)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def options_from_args(args: argparse.Namespace, settings: Settings) -> RunOptions:
    """Build run options from parsed command line flags."""
    return RunOptions(
        username=args.username or "",
        days=parse_days(args.days),
        lang="en" if args.english else "de",
        output_format=args.format,
        public_only=args.public_only,
        verbosity=validate_verbosity(args.verbosity),
        org_scope=parse_org_scope(args.orgs),
        model=args.model or settings.claude_model,
    )


def options_from_interactive(settings: Settings) -> RunOptions:
    """Build run options from interactive answers."""
    answers = run_interactive()
    return RunOptions(
        username=answers.username,
        days=answers.days,
        lang=answers.language,
        output_format=answers.output_format,
        public_only=not answers.include_private,
        verbosity=answers.verbosity,
        org_scope=parse_org_scope(answers.orgs),
        model=answers.model or settings.claude_model,
    )


def check_dependencies(settings: Settings) -> None:
    """Fail early when the summary command is not installed.

    Raises:
        MissingDependencyError: Listing every missing executable
    """
    missing: list[str] = []
    if shutil.which(settings.claude_command) is None:
        missing.append(
            f"Claude Code CLI '{settings.claude_command}' "
            "(npm install -g @anthropic-ai/claude-code)"
        )
    if not settings.github_token and shutil.which("gh") is None:
        missing.append("GitHub token (set GITHUB_TOKEN) or GitHub CLI 'gh' (brew install gh)")
    if missing:
        raise MissingDependencyError("Missing dependencies: " + "; ".join(missing))


async def resolve_github_token(settings: Settings) -> str:
    """Token from settings, else from an authenticated GitHub CLI.

    Raises:
        ConfigError: If no token can be found
    """
    if settings.github_token:
        return settings.github_token

    process = await asyncio.create_subprocess_exec(
        "gh",
        "auth",
        "token",
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, _stderr = await process.communicate()
    token = stdout.decode("utf-8").strip()
    if process.returncode != 0 or not token:
        raise ConfigError("GitHub CLI not authenticated. Run 'gh auth login' or set GITHUB_TOKEN.")
    return token


async def execute(options: RunOptions, settings: Settings) -> None:
    """Gather activity, render the digest and print it with a summary."""
    token = await resolve_github_token(settings)

    async with GitHubClient(
        token,
        base_url=settings.github_api_url,
        timeout_seconds=settings.request_timeout_seconds,
        max_pages=settings.max_search_pages,
    ) as client:
        username = options.username or await client.get_authenticated_user()

        scope_info = (
            f" in {', '.join(options.org_scope.orgs)}"
            if isinstance(options.org_scope, ExplicitOrgList)
            else ""
        )
        print(f"Fetching GitHub activity for {username}{scope_info}...", file=sys.stderr)

        snapshot = await gather_activity(
            client,
            username,
            options.days,
            options.public_only,
            options.org_scope,
        )

    digest = format_activity(snapshot, options.output_format, options.lang)

    if not has_activity(snapshot):
        print("")
        print(digest)
        return

    print("Generating summary with Claude...", file=sys.stderr)
    summary = await generate_summary_text(
        snapshot,
        options.lang,
        options.verbosity,
        options.model,
        command=settings.claude_command,
    )

    print("")
    print(digest)
    print("")
    print("---")
    print(summary)


async def _execute_with_deadline(options: RunOptions, settings: Settings) -> None:
    await asyncio.wait_for(execute(options, settings), timeout=settings.invocation_timeout_seconds)


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        settings = get_settings()
    except (ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level)
    set_correlation_id(uuid4().hex[:12])

    args = build_parser().parse_args(argv)

    try:
        check_dependencies(settings)
        if not argv or args.interactive:
            options = options_from_interactive(settings)
        else:
            options = options_from_args(args, settings)

        asyncio.run(_execute_with_deadline(options, settings))
    except TimeoutError:
        print(
            f"Error: timed out after {settings.invocation_timeout_seconds} seconds",
            file=sys.stderr,
        )
        return 1
    except GhTldrError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("cli.unexpected_error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def main() -> None:
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
