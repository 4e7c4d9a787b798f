"""PromptRenderer - draws the prompt row and the overlay beneath it.

Each redraw cycle evaluates the current line, erases whatever the previous
cycle drew, then draws either the error panel or the suggestion list and
puts the cursor back on the prompt row::

    idle -> evaluating -> erasing -> drawing -> idle

Evaluation comes first because it is the only step that may suspend (the
engine can fetch suggestions asynchronously). Erasing and drawing then run
without yielding to the event loop, so nothing else can write to the
terminal between the two and the screen never sits blank while the engine
is busy.

Redraws are single-flight. A request made while a cycle is in flight bumps
a generation counter; the in-flight cycle sees it after evaluation, drops
its now-stale result and exactly one follow-up cycle draws the latest line.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Literal

from dispatch_prompt.bridge import ParseErrorOutcome, Suggestion, SuggestBridge
from dispatch_prompt.navigator import SuggestionNavigator
from dispatch_prompt.overlay import OverlayTracker
from dispatch_prompt.panel import ERROR_PANEL_HEIGHT, render_panel
from dispatch_prompt.theme import DEFAULT_THEME, PromptTheme
from dispatch_prompt.utils import visible_width

if TYPE_CHECKING:
    from dispatch_prompt.line_editor import LineEditor
    from dispatch_prompt.terminal import Terminal

logger = logging.getLogger(__name__)

RenderState = Literal["idle", "evaluating", "erasing", "drawing"]


class PromptRenderer:
    """Owns the prompt's drawing state.

    The overlay tracker and the navigator are created here and shared with
    the input router through :attr:`overlay` and :attr:`navigator`.

    :attr:`has_error` tells whether the last draw showed the error panel
    (``True``) or the suggestion list (``False``). It is part of the prompt
    state embedders can inspect through :attr:`Prompt.has_error`; nothing in
    the draw cycle depends on it.
    """

    def __init__(
        self,
        terminal: Terminal,
        editor: LineEditor,
        bridge: SuggestBridge,
        *,
        prompt: str,
        theme: PromptTheme = DEFAULT_THEME,
    ) -> None:
        self.terminal = terminal
        self.editor = editor
        self.bridge = bridge
        self.theme = theme
        self.prompt = prompt
        self.prompt_width = visible_width(prompt)

        self.overlay = OverlayTracker(terminal)
        self.navigator = SuggestionNavigator()
        self.has_error = False
        self.closed = False
        self.state: RenderState = "idle"

        self._generation = 0
        self._runner: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def request_redraw(self) -> asyncio.Task[None]:
        """Schedule a redraw; requests made while one runs are coalesced.

        Returns the task that will have drawn the current line once done.
        """
        self._generation += 1
        if self._runner is None or self._runner.done():
            self._runner = asyncio.get_running_loop().create_task(self._run())
            self._runner.add_done_callback(_log_runner_failure)
        else:
            logger.debug("redraw requested while drawing; coalescing")
        return self._runner

    async def redraw(self) -> None:
        """Redraw and wait until the screen shows the current line."""
        await asyncio.shield(self.request_redraw())

    async def wait_idle(self) -> None:
        """Wait for any scheduled redraw to finish."""
        runner = self._runner
        if runner is not None and not runner.done():
            await asyncio.shield(runner)

    async def _run(self) -> None:
        drawn = -1
        while drawn != self._generation:
            target = self._generation
            if await self._cycle(target):
                drawn = target

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    async def _cycle(self, generation: int) -> bool:
        """Run one redraw cycle; returns ``False`` if its result went stale."""
        if self.closed:
            return True
        line = self.editor.value
        try:
            self.state = "evaluating"
            outcome = await self.bridge.evaluate(line)
            if self.closed:
                return True
            if generation != self._generation:
                logger.debug("dropping stale evaluation of %r", line)
                return False

            self.state = "erasing"
            self.erase()

            self.state = "drawing"
            if isinstance(outcome, ParseErrorOutcome):
                self._draw_error(line, outcome)
            else:
                self._draw_suggestions(line, outcome.suggestions)

            cursor = min(self.editor.cursor, len(line))
            self.terminal.cursor_to(self.prompt_width + visible_width(line[:cursor]))
            return True
        finally:
            self.state = "idle"

    def erase(self) -> None:
        """Clear the prompt row and the overlay drawn beneath it."""
        self.terminal.cursor_to(0)
        self.overlay.erase()

    def column_of(self, line: str, offset: int) -> int:
        """Screen column of character *offset* in *line*."""
        return self.prompt_width + visible_width(line[: max(offset, 0)])

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def _draw_error(self, line: str, error: ParseErrorOutcome) -> None:
        term = self.terminal
        self.has_error = True

        term.write(self.prompt + self.theme.error_line(line))
        panel = render_panel(
            error.message,
            margin_left=self.column_of(line, error.cursor),
            max_width=term.columns,
            theme=self.theme,
        )
        for row in panel:
            term.write("\n")
            term.cursor_to(0)
            term.write(row)

        term.move_by(-ERROR_PANEL_HEIGHT)
        self.overlay.record_height(ERROR_PANEL_HEIGHT)

    def _draw_suggestions(self, line: str, suggestions: list[Suggestion]) -> None:
        term = self.terminal
        self.has_error = False

        self.navigator.set_suggestions(suggestions)
        selected = self.navigator.selected_index

        for i, suggestion in enumerate(suggestions):
            term.write("\n")
            term.cursor_to(self.column_of(line, suggestion.range_start))
            paint = self.theme.selected if i == selected else self.theme.unselected
            term.write(paint(suggestion.text))

        term.move_by(-len(suggestions))
        term.cursor_to(0)
        term.write(self.prompt + line)
        self.overlay.record_height(len(suggestions))


def _log_runner_failure(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("redraw failed", exc_info=exc)
