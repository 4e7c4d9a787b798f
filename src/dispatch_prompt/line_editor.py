"""LineEditor - the single-line buffer the prompt is drawn around."""

from __future__ import annotations

from typing import Callable

from dispatch_prompt.keybindings import PromptKeybindingsManager, get_prompt_keybindings
from dispatch_prompt.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START
from dispatch_prompt.utils import graphemes, is_punctuation_char, is_whitespace_char


class LineEditor:
    """Holds the line being typed and its cursor, and applies editing keys.

    The cursor is a character offset into :attr:`value`. Movement and
    deletion step over whole graphemes so combined characters stay intact.
    """

    def __init__(self, keybindings: PromptKeybindingsManager | None = None) -> None:
        self._value: str = ""
        self._cursor: int = 0
        self._keybindings = keybindings

        self.on_submit: Callable[[str], None] | None = None

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    def set_value(self, value: str, cursor: int | None = None) -> None:
        """Replace the line; *cursor* defaults to the end of the new value."""
        self._value = value
        if cursor is None:
            cursor = len(value)
        self._cursor = max(0, min(cursor, len(value)))

    def clear(self) -> None:
        self._value = ""
        self._cursor = 0

    def handle_input(self, data: str) -> None:
        if data.startswith(BRACKETED_PASTE_START):
            pasted = data[len(BRACKETED_PASTE_START):]
            if pasted.endswith(BRACKETED_PASTE_END):
                pasted = pasted[: -len(BRACKETED_PASTE_END)]
            self._insert(pasted.replace("\r\n", "").replace("\r", "").replace("\n", ""))
            return

        kb = self._keybindings or get_prompt_keybindings()

        if kb.matches(data, "submit"):
            if self.on_submit:
                self.on_submit(self._value)
            return

        if kb.matches(data, "deleteCharBackward"):
            if self._cursor > 0:
                step = self._grapheme_before()
                self._value = self._value[: self._cursor - step] + self._value[self._cursor :]
                self._cursor -= step
            return

        if kb.matches(data, "deleteCharForward"):
            if self._cursor < len(self._value):
                step = self._grapheme_after()
                self._value = self._value[: self._cursor] + self._value[self._cursor + step :]
            return

        if kb.matches(data, "deleteWordBackward"):
            end = self._cursor
            self._move_word_backwards()
            self._value = self._value[: self._cursor] + self._value[end:]
            return

        if kb.matches(data, "deleteToLineStart"):
            self._value = self._value[self._cursor :]
            self._cursor = 0
            return

        if kb.matches(data, "deleteToLineEnd"):
            self._value = self._value[: self._cursor]
            return

        if kb.matches(data, "cursorLeft"):
            if self._cursor > 0:
                self._cursor -= self._grapheme_before()
            return

        if kb.matches(data, "cursorRight"):
            if self._cursor < len(self._value):
                self._cursor += self._grapheme_after()
            return

        if kb.matches(data, "cursorLineStart"):
            self._cursor = 0
            return

        if kb.matches(data, "cursorLineEnd"):
            self._cursor = len(self._value)
            return

        if kb.matches(data, "cursorWordLeft"):
            self._move_word_backwards()
            return

        if kb.matches(data, "cursorWordRight"):
            self._move_word_forwards()
            return

        # Regular character input
        has_control = any(
            ord(ch) < 32 or ord(ch) == 0x7F or (0x80 <= ord(ch) <= 0x9F)
            for ch in data
        )
        if not has_control:
            self._insert(data)

    # -- private ------------------------------------------------------------

    def _insert(self, text: str) -> None:
        self._value = self._value[: self._cursor] + text + self._value[self._cursor :]
        self._cursor += len(text)

    def _grapheme_before(self) -> int:
        before = graphemes(self._value[: self._cursor])
        return len(before[-1]) if before else 1

    def _grapheme_after(self) -> int:
        after = graphemes(self._value[self._cursor :])
        return len(after[0]) if after else 1

    def _move_word_backwards(self) -> None:
        before = graphemes(self._value[: self._cursor])

        while before and is_whitespace_char(before[-1]):
            self._cursor -= len(before.pop())

        if before and is_punctuation_char(before[-1]):
            while before and is_punctuation_char(before[-1]):
                self._cursor -= len(before.pop())
        else:
            while (
                before
                and not is_whitespace_char(before[-1])
                and not is_punctuation_char(before[-1])
            ):
                self._cursor -= len(before.pop())

    def _move_word_forwards(self) -> None:
        after = graphemes(self._value[self._cursor :])
        idx = 0

        while idx < len(after) and is_whitespace_char(after[idx]):
            self._cursor += len(after[idx])
            idx += 1

        if idx < len(after) and is_punctuation_char(after[idx]):
            while idx < len(after) and is_punctuation_char(after[idx]):
                self._cursor += len(after[idx])
                idx += 1
        else:
            while (
                idx < len(after)
                and not is_whitespace_char(after[idx])
                and not is_punctuation_char(after[idx])
            ):
                self._cursor += len(after[idx])
                idx += 1
