"""Tests for raw key sequence parsing."""

from __future__ import annotations

import pytest

from dispatch_prompt.keys import Key, matches_key, parse_key


class TestParseKey:
    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\t", "tab"),
            ("\r", "enter"),
            ("\n", "enter"),
            ("\x03", "ctrl+c"),
            ("\x01", "ctrl+a"),
            ("\x7f", "backspace"),
            ("\x08", "backspace"),
            ("\x1b", "escape"),
            ("\x1b[D", "left"),
            ("\x1b[C", "right"),
            ("\x1bOD", "left"),
            ("\x1bOC", "right"),
            ("\x1b[H", "home"),
            ("\x1b[4~", "end"),
            ("\x1b[3~", "delete"),
            ("\x1b[1;5D", "ctrl+left"),
            ("\x1b[1;3C", "alt+right"),
            ("\x1bb", "alt+left"),
            ("\x1b\x7f", "alt+backspace"),
            ("\x1b[Z", "shift+tab"),
            ("a", "a"),
            (" ", "space"),
        ],
    )
    def test_known_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_empty_input(self) -> None:
        assert parse_key("") is None

    def test_multi_character_text_is_not_a_key(self) -> None:
        assert parse_key("status") is None

    def test_unknown_escape_sequence(self) -> None:
        assert parse_key("\x1b[99~") is None


class TestMatchesKey:
    def test_tab(self) -> None:
        assert matches_key("\t", Key.tab)

    def test_ctrl_c(self) -> None:
        assert matches_key("\x03", Key.ctrl("c"))

    def test_arrow_does_not_match_other_arrow(self) -> None:
        assert not matches_key("\x1b[D", Key.right)

    def test_alt_combinator(self) -> None:
        assert matches_key("\x1b[1;3D", Key.alt("left"))

    def test_camel_case_key_ids(self) -> None:
        assert matches_key("\x1b[5~", "pageUp")
