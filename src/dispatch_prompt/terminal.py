"""Terminal abstraction over an output stream and an input stream.

Provides a ``Terminal`` protocol and a concrete ``StreamTerminal`` that writes
cursor-control sequences to any text stream and, when the input stream is an
interactive terminal, switches it to raw mode and feeds keypresses through a
:class:`~dispatch_prompt.stdin_buffer.StdinBuffer`.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import termios
import tty
from typing import Callable, Protocol, TextIO

from dispatch_prompt.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START, StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_CLEAR_LINE = "\x1b[2K"
_CURSOR_COLUMN_FMT = "\x1b[{}G"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"

WRITE_LOG_ENV = "DISPATCH_PROMPT_WRITE_LOG"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the terminal operations the prompt needs."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_end: Callable[[], None] | None = None,
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def is_tty(self) -> bool: ...

    def cursor_to(self, column: int) -> None: ...

    def move_by(self, rows: int) -> None: ...

    def clear_line(self) -> None: ...


# ---------------------------------------------------------------------------
# StreamTerminal implementation
# ---------------------------------------------------------------------------


class StreamTerminal:
    """Terminal backed by an output stream and an input stream.

    Raw mode and bracketed paste are enabled only when *input* is a TTY;
    otherwise input is still read line-buffered through the event loop.
    """

    def __init__(self, output: TextIO | None = None, input: TextIO | None = None) -> None:
        self._output = output if output is not None else sys.stdout
        self._input = input if input is not None else sys.stdin
        self._input_handler: Callable[[str], None] | None = None
        self._end_handler: Callable[[], None] | None = None
        self._stdin_buffer: StdinBuffer | None = None
        self._reader_fd: int | None = None
        self._original_termios: list | None = None
        self._write_log_path: str = os.environ.get(WRITE_LOG_ENV, "")

    # -- properties ---------------------------------------------------------

    @property
    def is_tty(self) -> bool:
        isatty = getattr(self._input, "isatty", None)
        try:
            return bool(isatty and isatty())
        except ValueError:
            return False

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._output.fileno()).columns
        except (AttributeError, ValueError, OSError):
            return 80

    # -- start / stop -------------------------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_end: Callable[[], None] | None = None,
    ) -> None:
        """Enable raw mode (TTY input only) and begin reading input.

        *on_end* fires once when the input stream reaches end of file.
        """
        self._input_handler = on_input
        self._end_handler = on_end

        self._stdin_buffer = StdinBuffer(timeout=0.01)
        self._stdin_buffer.on_data(self._forward)
        self._stdin_buffer.on_paste(
            lambda text: self._forward(BRACKETED_PASTE_START + text + BRACKETED_PASTE_END)
        )

        try:
            fd = self._input.fileno()
        except (AttributeError, ValueError, OSError):
            logger.debug("input stream has no file descriptor; not reading keys")
            return

        if self.is_tty:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
            self.write(_BRACKETED_PASTE_ENABLE)

        try:
            asyncio.get_running_loop().add_reader(fd, self._on_readable)
        except OSError:
            # Regular files cannot be polled
            logger.warning("cannot poll input fd %d; keypresses are ignored", fd)
            return
        self._reader_fd = fd

    def stop(self) -> None:
        """Restore terminal state and stop reading input."""
        if self._reader_fd is not None:
            try:
                asyncio.get_running_loop().remove_reader(self._reader_fd)
            except RuntimeError:
                pass
            self._reader_fd = None

        if self._original_termios is not None:
            self.write(_BRACKETED_PASTE_DISABLE)
            termios.tcsetattr(
                self._input.fileno(), termios.TCSADRAIN, self._original_termios
            )
            self._original_termios = None

        if self._stdin_buffer is not None:
            self._stdin_buffer.clear()
            self._stdin_buffer = None
        self._input_handler = None
        self._end_handler = None

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to the output and optionally to the write log."""
        try:
            self._output.write(data)
            self._output.flush()
        except OSError:
            pass

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass

    # -- cursor / line manipulation ----------------------------------------

    def cursor_to(self, column: int) -> None:
        """Move the cursor to zero-based *column* on the current row."""
        self.write(_CURSOR_COLUMN_FMT.format(max(column, 0) + 1))

    def move_by(self, rows: int) -> None:
        """Move the cursor up (negative) or down (positive) by *rows*."""
        if rows < 0:
            self.write(_CURSOR_UP_FMT.format(-rows))
        elif rows > 0:
            self.write(_CURSOR_DOWN_FMT.format(rows))

    def clear_line(self) -> None:
        self.write(_CLEAR_LINE)

    # -- private ------------------------------------------------------------

    def _forward(self, data: str) -> None:
        if self._input_handler is not None:
            self._input_handler(data)

    def _on_readable(self) -> None:
        """Callback invoked by the event loop when the input has data."""
        assert self._reader_fd is not None
        try:
            raw = os.read(self._reader_fd, 4096)
        except OSError:
            return

        if not raw:
            on_end = self._end_handler
            self.stop()
            if on_end is not None:
                on_end()
            return

        data = raw.decode("utf-8", errors="replace")
        if self._stdin_buffer is not None:
            self._stdin_buffer.process(data)
