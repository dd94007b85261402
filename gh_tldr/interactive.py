"""Interactive prompt collection for runs started without arguments."""

from pydantic import BaseModel

from gh_tldr.digest.render import Language, OutputFormat
from gh_tldr.summary.prompts import Verbosity

PERIOD_CHOICES = ("1", "7", "30")


class InteractiveOptions(BaseModel):
    """Answers collected from the interactive prompts."""

    username: str = ""
    days: int = 1
    language: Language = "en"
    verbosity: Verbosity = "normal"
    output_format: OutputFormat = "plain"
    include_private: bool = True
    orgs: list[str] = []
    model: str = ""


def _prompt_str(prompt: str, *, default: str | None = None) -> str:
    suffix = f" [{default}]" if default else ""
    try:
        ans = input(f"{prompt}{suffix}: ").strip()
    except EOFError:
        return default or ""
    if ans:
        return ans
    return default or ""


def _prompt_bool(prompt: str, *, default: bool) -> bool:
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        ans = input(f"{prompt} {suffix} ").strip().lower()
    except EOFError:
        return default
    if ans in ("y", "yes"):
        return True
    if ans in ("n", "no"):
        return False
    return default


def _prompt_choice(prompt: str, *, choices: tuple[str, ...], default: str) -> str:
    d = default if default in choices else choices[0]
    ans = _prompt_str(f"{prompt} ({'/'.join(choices)})", default=d).strip().lower()
    return ans if ans in choices else d


def run_interactive() -> InteractiveOptions:
    """Ask for every run option on the terminal."""
    username = _prompt_str("GitHub username (leave empty for authenticated user)")
    days = _prompt_choice("Time period in days", choices=PERIOD_CHOICES, default="1")
    language = _prompt_choice("Language", choices=("en", "de"), default="en")
    verbosity = _prompt_choice(
        "Summary verbosity (~30/~60/~175 words)",
        choices=("brief", "normal", "detailed"),
        default="normal",
    )
    output_format = _prompt_choice(
        "Output format", choices=("plain", "markdown", "slack"), default="plain"
    )
    include_private = _prompt_bool("Include private repos?", default=True)
    orgs = _prompt_str("Organizations to include, comma-separated (leave empty for all)")
    model = _prompt_str("Claude model (leave empty for default)")

    return InteractiveOptions(
        username=username,
        days=int(days),
        language=language,
        verbosity=verbosity,
        output_format=output_format,
        include_private=include_private,
        orgs=[org.strip() for org in orgs.split(",") if org.strip()],
        model=model,
    )
