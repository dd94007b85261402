"""Prompt templates for the narrative summary."""

from typing import Literal

Verbosity = Literal["brief", "normal", "detailed"]

VERBOSITY_LEVELS: tuple[Verbosity, ...] = ("brief", "normal", "detailed")

# (english, german) length instruction per verbosity tier
_LENGTH = {
    "brief": ("1-2 sentences (about 20-40 words)", "1-2 Sätzen (etwa 20-40 Wörter)"),
    "normal": ("2-4 sentences (about 50-80 words)", "2-4 Sätzen (etwa 50-80 Wörter)"),
    "detailed": ("a full paragraph (about 150-200 words)", "einem ganzen Absatz (etwa 150-200 Wörter)"),
}

_PROMPT_EN = (
    "Based on this GitHub activity data, write a summary of what was accomplished "
    "in {length}. Mention specific PR/issue titles to provide context. "
    "Write casually and informally. No bullet points, no markup, just a paragraph. No emojis."
    "\n\nGitHub Activity Data:"
)

_PROMPT_DE = (
    "Basierend auf diesen GitHub-Aktivitätsdaten, schreibe eine Zusammenfassung in {length} "
    "was gemacht wurde. Erwähne konkret die PR/Issue-Titel um Kontext zu geben. "
    "Schreibe locker und informell. Keine Aufzählungen, kein Markup, nur ein Absatz. Keine Emojis."
    "\n\nGitHub-Aktivitätsdaten:"
)


def validate_verbosity(value: str | None) -> Verbosity:
    """Coerce unknown verbosity values to "normal"."""
    if value in VERBOSITY_LEVELS:
        return value  # type: ignore[return-value]
    return "normal"


def get_prompt(lang: str, verbosity: Verbosity = "normal") -> str:
    """Instruction text for the given language and verbosity tier.

    Example:
        >>> "20-40 words" in get_prompt("en", "brief")
        True
    """
    length_en, length_de = _LENGTH[verbosity]
    if lang == "en":
        return _PROMPT_EN.format(length=length_en)
    return _PROMPT_DE.format(length=length_de)
