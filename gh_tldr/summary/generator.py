"""Narrative summary generation through the Claude Code CLI."""

import asyncio

from gh_tldr.core.logging import get_logger
from gh_tldr.shared.exceptions import MissingDependencyError, SummaryGenerationError
from gh_tldr.shared.models import ActivitySnapshot
from gh_tldr.summary.prompts import Verbosity, get_prompt

logger = get_logger(__name__)


def build_summary_input(snapshot: ActivitySnapshot, lang: str, verbosity: Verbosity) -> str:
    """Instruction text followed by the snapshot as indented JSON."""
    return f"{get_prompt(lang, verbosity)}\n{snapshot.model_dump_json(indent=2)}"


def build_command(command: str, model: str | None = None) -> list[str]:
    """Arguments for a non-interactive, text-only CLI run reading stdin."""
    args = [command, "-p", "-", "--output-format", "text"]
    if model:
        args.extend(["--model", model])
    return args


async def generate_summary_text(
    snapshot: ActivitySnapshot,
    lang: str,
    verbosity: Verbosity = "normal",
    model: str | None = None,
    command: str = "claude",
) -> str:
    """Ask the assistant for a short narrative summary of the snapshot.

    Args:
        snapshot: Activity to summarize
        lang: "en" or "de"
        verbosity: Length tier of the summary
        model: Model name passed through verbatim (optional)
        command: Executable to run

    Returns:
        Summary text with surrounding whitespace removed

    Raises:
        MissingDependencyError: If the executable cannot be found
        SummaryGenerationError: If the command exits with a non-zero status
    """
    args = build_command(command, model)
    prompt = build_summary_input(snapshot, lang, verbosity)

    logger.info("summary.generate.started", command=command, model=model, verbosity=verbosity)

    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise MissingDependencyError(f"Command not found: {command}") from e

    stdout, stderr = await process.communicate(prompt.encode("utf-8"))

    if process.returncode != 0:
        detail = stderr.decode("utf-8", errors="replace").strip()
        logger.error(
            "summary.generate.failed",
            returncode=process.returncode,
            stderr=detail,
        )
        raise SummaryGenerationError(
            f"{command} exited with status {process.returncode}"
            + (f": {detail}" if detail else "")
        )

    summary = stdout.decode("utf-8", errors="replace").strip()
    logger.info("summary.generate.complete", length=len(summary))
    return summary
