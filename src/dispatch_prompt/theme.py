"""Styling for the prompt, the error panel and the suggestion list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

# ── ANSI SGR codes ───────────────────────────────────────────────────

_RESET = "\x1b[0m"
_BOLD = "1"
_ITALIC = "3"
_UNDERLINE = "4"
_RED = "31"
_YELLOW = "33"
_BLUE = "34"


def style(*codes: str) -> Callable[[str], str]:
    """Return a function wrapping text in the given SGR codes."""
    prefix = f"\x1b[{';'.join(codes)}m"

    def apply(text: str) -> str:
        if not text:
            return text
        return f"{prefix}{text}{_RESET}"

    return apply


def _identity(text: str) -> str:
    return text


@dataclass
class PromptTheme:
    """Style functions applied to each piece the prompt draws."""

    prompt: Callable[[str], str] = style(_YELLOW)
    error_line: Callable[[str], str] = style(_RED, _ITALIC)
    error_message: Callable[[str], str] = style(_RED, _BOLD, _ITALIC, _UNDERLINE)
    panel_border: Callable[[str], str] = style(_RED)
    selected: Callable[[str], str] = style(_YELLOW, _UNDERLINE)
    unselected: Callable[[str], str] = style(_BLUE, _BOLD)
    execution_error: Callable[[str], str] = style(_RED)


DEFAULT_THEME = PromptTheme()

PLAIN_THEME = PromptTheme(
    prompt=_identity,
    error_line=_identity,
    error_message=_identity,
    panel_border=_identity,
    selected=_identity,
    unselected=_identity,
    execution_error=_identity,
)

DEFAULT_PROMPT_TEXT = "> "

DEFAULT_PROMPT = DEFAULT_THEME.prompt(DEFAULT_PROMPT_TEXT)
