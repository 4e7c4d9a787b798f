"""StdinBuffer buffers raw input and emits complete key sequences.

Raw stdin reads can split an escape sequence across chunks (``ESC`` in one
read, ``[D`` in the next) or merge several keys into one chunk. The buffer
re-slices the stream so each emitted string is exactly one key, and hands
bracketed paste content over as a single paste event.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Literal

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

_Status = Literal["complete", "incomplete", "not-escape"]


def _sequence_status(data: str) -> _Status:
    """Classify *data* as a complete escape sequence or one needing more input."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]

    # CSI: ESC [ params final-byte
    if introducer == "[":
        if len(data) < 3:
            return "incomplete"
        return "complete" if 0x40 <= ord(data[-1]) <= 0x7E else "incomplete"

    # OSC / DCS / APC: terminated by BEL or ST
    if introducer in ("]", "P", "_"):
        if data.endswith(f"{ESC}\\") or (introducer == "]" and data.endswith("\x07")):
            return "complete"
        return "incomplete"

    # SS3: ESC O <char>
    if introducer == "O":
        return "complete" if len(data) >= 3 else "incomplete"

    # Meta key: ESC followed by a single character
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is a trailing
    escape sequence that has not been fully received yet.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while True:
            status = _sequence_status(buffer[pos:end])
            if status == "complete":
                sequences.append(buffer[pos:end])
                pos = end
                break
            if end >= len(buffer):
                return sequences, buffer[pos:]
            end += 1

    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and emits complete sequences.

    Handles partial escape sequences that arrive across multiple chunks; a
    lone ``ESC`` is flushed as the escape key once *timeout* seconds pass
    without further input.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._buffer: str = ""
        self._timeout = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._paste_mode: bool = False
        self._paste_buffer: str = ""

        self._on_data: Callable[[str], None] | None = None
        self._on_paste: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        """Set callback for complete sequences."""
        self._on_data = callback

    def on_paste(self, callback: Callable[[str], None]) -> None:
        """Set callback for paste content."""
        self._on_paste = callback

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        self._cancel_timeout()
        self._buffer += data

        if not self._paste_mode:
            start = self._buffer.find(BRACKETED_PASTE_START)
            if start == -1:
                self._emit_complete()
                return
            before, self._buffer = (
                self._buffer[:start],
                self._buffer[start + len(BRACKETED_PASTE_START):],
            )
            sequences, _ = split_sequences(before)
            for sequence in sequences:
                self._emit_data(sequence)
            self._paste_mode = True

        self._paste_buffer += self._buffer
        self._buffer = ""

        end = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end == -1:
            return

        pasted = self._paste_buffer[:end]
        remaining = self._paste_buffer[end + len(BRACKETED_PASTE_END):]
        self._paste_mode = False
        self._paste_buffer = ""

        if self._on_paste:
            self._on_paste(pasted)
        if remaining:
            self.process(remaining)

    def flush(self) -> list[str]:
        """Return and drop whatever partial input is buffered."""
        self._cancel_timeout()
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = ""
        self._paste_mode = False
        self._paste_buffer = ""

    def get_buffer(self) -> str:
        return self._buffer

    # -- private ------------------------------------------------------------

    def _emit_data(self, data: str) -> None:
        if self._on_data:
            self._on_data(data)

    def _emit_complete(self) -> None:
        sequences, self._buffer = split_sequences(self._buffer)
        for sequence in sequences:
            self._emit_data(sequence)

        if not self._buffer:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop - flush immediately
            for sequence in self.flush():
                self._emit_data(sequence)
            return
        self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        for sequence in self.flush():
            self._emit_data(sequence)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None
