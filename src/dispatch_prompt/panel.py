"""Rounded, bordered panel used to show a parse error under the prompt."""

from __future__ import annotations

import re

from dispatch_prompt.theme import PromptTheme
from dispatch_prompt.utils import truncate_to_width, visible_width

# A panel holds one content row between a top and a bottom border row.
PANEL_CONTENT_ROWS = 1
PANEL_BORDER_ROWS = 2
ERROR_PANEL_HEIGHT = PANEL_CONTENT_ROWS + PANEL_BORDER_ROWS

_TOP_LEFT, _TOP_RIGHT = "╭", "╮"
_BOTTOM_LEFT, _BOTTOM_RIGHT = "╰", "╯"
_HORIZONTAL, _VERTICAL = "─", "│"

# Two vertical borders
_FRAME_WIDTH = 2


def _normalize_to_single_line(text: str) -> str:
    return re.sub(r"[\r\n]+", " ", text).strip()


def render_panel(
    message: str,
    *,
    margin_left: int,
    max_width: int,
    theme: PromptTheme,
) -> list[str]:
    """Render *message* inside a rounded border, indented by *margin_left*.

    Always returns exactly :data:`ERROR_PANEL_HEIGHT` lines. The message is
    flattened to one line and truncated so the frame fits in *max_width*
    columns; the margin shrinks before the message does.
    """
    text = _normalize_to_single_line(message)
    available = max(1, max_width - _FRAME_WIDTH)
    text = truncate_to_width(text, available, "…")

    inner_width = visible_width(text)
    box_width = inner_width + _FRAME_WIDTH
    margin = " " * max(0, min(margin_left, max_width - box_width))

    border = theme.panel_border
    return [
        margin + border(_TOP_LEFT + _HORIZONTAL * inner_width + _TOP_RIGHT),
        margin + border(_VERTICAL) + theme.error_message(text) + border(_VERTICAL),
        margin + border(_BOTTOM_LEFT + _HORIZONTAL * inner_width + _BOTTOM_RIGHT),
    ]
