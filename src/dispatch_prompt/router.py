"""InputRouter - turns keypresses and submitted lines into prompt actions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from dispatch_prompt.keybindings import PromptKeybindingsManager, get_prompt_keybindings

if TYPE_CHECKING:
    from dispatch_prompt.renderer import PromptRenderer

logger = logging.getLogger(__name__)


def to_crlf(text: str) -> str:
    """Raw mode does not translate ``\\n``; every line break needs a ``\\r``."""
    return text.replace("\r\n", "\n").replace("\n", "\r\n")


class InputRouter:
    """Dispatches raw input to the navigator, the line editor and the engine.

    Every keypress, recognised or not, ends with a redraw request. Buffer
    changes happen synchronously before that request, so a redraw always
    sees the line as of the last key.
    """

    def __init__(
        self,
        renderer: PromptRenderer,
        *,
        keybindings: PromptKeybindingsManager | None = None,
        on_interrupt: Callable[[], None] | None = None,
    ) -> None:
        self.renderer = renderer
        self.editor = renderer.editor
        self.navigator = renderer.navigator
        self._keybindings = keybindings
        self.on_interrupt = on_interrupt

        self.editor.on_submit = self.submit

    def handle_input(self, data: str) -> None:
        kb = self._keybindings or get_prompt_keybindings()

        if kb.matches(data, "interrupt"):
            self.interrupt()
            return

        if kb.matches(data, "acceptSuggestion"):
            self.accept_suggestion()
        else:
            if kb.matches(data, "previousSuggestion"):
                self.navigator.move(-1)
            elif kb.matches(data, "nextSuggestion"):
                self.navigator.move(1)
            self.editor.handle_input(data)

        self.renderer.request_redraw()

    def accept_suggestion(self) -> None:
        """Splice the selected suggestion over the span the engine reported.

        The span is ``line[range_start:range_end]``, running to the end of
        the line when the engine gives no end. The cursor is ignored: Left
        and Right move it while picking a suggestion.
        """
        suggestion = self.navigator.current_selection()
        if suggestion is None:
            return

        line = self.editor.value
        start = max(0, min(suggestion.range_start, len(line)))
        end = len(line) if suggestion.range_end is None else suggestion.range_end
        end = max(start, min(end, len(line)))
        spliced = line[:start] + suggestion.text + line[end:]
        self.editor.set_value(spliced)

    def submit(self, line: str) -> None:
        """Execute *line*; failures are reported and the session continues."""
        renderer = self.renderer
        term = renderer.terminal

        renderer.erase()
        term.write(renderer.prompt + line + "\r\n")

        bridge = renderer.bridge
        try:
            bridge.dispatcher.execute(bridge.parse(line))
        except Exception as exc:
            logger.info("command %r failed: %s", line, exc)
            term.write(renderer.theme.execution_error(to_crlf(str(exc))) + "\r\n")

        self.editor.clear()

    def interrupt(self) -> None:
        """Erase the overlay and leave the cursor on a clean line."""
        self.renderer.erase()
        self.renderer.terminal.write("\r\n")
        if self.on_interrupt is not None:
            self.on_interrupt()
