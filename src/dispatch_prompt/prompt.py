"""Interactive prompt session: wires terminal, editor, renderer and router.

Typical use from a running event loop::

    handle = init_prompt(sys.stdout, sys.stdin, dispatcher)
    await handle.log("connected")
    await handle.wait_closed()
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Any, TextIO

from dispatch_prompt.bridge import CommandDispatcher, SuggestBridge
from dispatch_prompt.keybindings import PromptKeybindingsConfig, PromptKeybindingsManager
from dispatch_prompt.line_editor import LineEditor
from dispatch_prompt.renderer import PromptRenderer
from dispatch_prompt.router import InputRouter, to_crlf
from dispatch_prompt.terminal import StreamTerminal, Terminal
from dispatch_prompt.theme import DEFAULT_PROMPT_TEXT, PromptTheme

logger = logging.getLogger(__name__)


@dataclass
class PromptOptions:
    """Session configuration.

    ``prompt`` defaults to :data:`DEFAULT_PROMPT_TEXT` styled with
    ``theme.prompt``. ``source`` is handed to the dispatcher's ``parse`` as
    the command source.
    """

    prompt: str | None = None
    theme: PromptTheme = field(default_factory=PromptTheme)
    source: Any = None
    exit_on_interrupt: bool = True
    keybindings: PromptKeybindingsConfig | None = None


class Prompt:
    """A live prompt bound to a terminal and a command dispatcher."""

    def __init__(
        self,
        terminal: Terminal,
        dispatcher: CommandDispatcher,
        options: PromptOptions | None = None,
    ) -> None:
        self.options = options or PromptOptions()
        self.terminal = terminal

        keybindings = (
            PromptKeybindingsManager(self.options.keybindings)
            if self.options.keybindings
            else None
        )
        prompt = self.options.prompt
        if prompt is None:
            prompt = self.options.theme.prompt(DEFAULT_PROMPT_TEXT)

        self.editor = LineEditor(keybindings)
        self.bridge = SuggestBridge(dispatcher, self.options.source)
        self.renderer = PromptRenderer(
            terminal,
            self.editor,
            self.bridge,
            prompt=prompt,
            theme=self.options.theme,
        )
        self.router = InputRouter(
            self.renderer,
            keybindings=keybindings,
            on_interrupt=self._on_interrupt,
        )

        self._closed: asyncio.Future[None] | None = None

    @property
    def closed(self) -> bool:
        return self.renderer.closed

    @property
    def has_error(self) -> bool:
        """Whether the line on screen currently shows a parse error."""
        return self.renderer.has_error

    def start(self) -> None:
        """Begin reading input and draw the empty prompt. Needs a running loop."""
        self._closed = asyncio.get_running_loop().create_future()
        self.terminal.start(self.router.handle_input, self.end)
        self.renderer.request_redraw()

    def end(self) -> None:
        """Stop reading input; pending redraws no longer draw."""
        if self.renderer.closed:
            return
        self.renderer.closed = True
        self.terminal.stop()
        if self._closed is not None and not self._closed.done():
            self._closed.set_result(None)

    async def wait_closed(self) -> None:
        if self._closed is not None:
            await self._closed

    def echo(self, *parts: object, sep: str = " ") -> None:
        """Write a message above the prompt without redrawing it.

        Safe to call from inside a command's execution; the redraw that
        follows every submit puts the prompt back underneath.
        """
        self.renderer.erase()
        self.terminal.write(to_crlf(sep.join(str(part) for part in parts)) + "\r\n")

    async def log(self, *parts: object, sep: str = " ") -> None:
        """Write a message above the prompt, then redraw the prompt below it."""
        self.echo(*parts, sep=sep)
        if not self.renderer.closed:
            await self.renderer.redraw()

    def _on_interrupt(self) -> None:
        self.end()
        if self.options.exit_on_interrupt:
            raise SystemExit(0)


@dataclass(frozen=True)
class PromptHandle:
    """What :func:`init_prompt` hands back to the embedder."""

    prompt: Prompt

    async def log(self, *parts: object) -> None:
        await self.prompt.log(*parts)

    def end(self) -> None:
        self.prompt.end()

    async def wait_closed(self) -> None:
        await self.prompt.wait_closed()


def init_prompt(
    output: TextIO,
    input: TextIO,
    dispatcher: CommandDispatcher,
    prompt: str | None = None,
    *,
    options: PromptOptions | None = None,
) -> PromptHandle:
    """Start a prompt on *output*/*input* driven by *dispatcher*.

    Raw keypress capture is enabled only when *input* is a terminal. Must be
    called with an event loop running.
    """
    options = options or PromptOptions()
    if prompt is not None:
        options = replace(options, prompt=prompt)

    session = Prompt(StreamTerminal(output, input), dispatcher, options)
    session.start()
    logger.debug("prompt started (interactive=%s)", session.terminal.is_tty)
    return PromptHandle(session)
