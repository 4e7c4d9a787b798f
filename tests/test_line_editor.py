"""Tests for the LineEditor."""

from __future__ import annotations

from dispatch_prompt.keybindings import PromptKeybindingsManager
from dispatch_prompt.line_editor import LineEditor

# Raw escape codes for key sequences
KEY_LEFT = "\x1b[D"
KEY_RIGHT = "\x1b[C"
KEY_HOME = "\x1b[H"
KEY_END = "\x1b[F"
KEY_ENTER = "\r"
KEY_BACKSPACE = "\x7f"
KEY_DELETE = "\x1b[3~"
KEY_CTRL_W = "\x17"
KEY_CTRL_U = "\x15"
KEY_CTRL_K = "\x0b"
KEY_ALT_LEFT = "\x1b[1;3D"
KEY_ALT_RIGHT = "\x1b[1;3C"


def _editor(value: str = "", cursor: int | None = None) -> LineEditor:
    editor = LineEditor()
    editor.set_value(value, cursor)
    return editor


class TestLineEditorInsertion:
    def test_starts_empty(self) -> None:
        editor = LineEditor()
        assert editor.value == ""
        assert editor.cursor == 0

    def test_typing_appends(self) -> None:
        editor = LineEditor()
        for ch in "git":
            editor.handle_input(ch)
        assert editor.value == "git"
        assert editor.cursor == 3

    def test_insert_at_cursor(self) -> None:
        editor = _editor("gt", 1)
        editor.handle_input("i")
        assert editor.value == "git"
        assert editor.cursor == 2

    def test_control_characters_are_not_inserted(self) -> None:
        editor = _editor("ab")
        editor.handle_input("\x07")
        assert editor.value == "ab"

    def test_tab_is_not_inserted(self) -> None:
        editor = _editor("ab")
        editor.handle_input("\t")
        assert editor.value == "ab"

    def test_bracketed_paste_strips_newlines(self) -> None:
        editor = _editor("x")
        editor.handle_input("\x1b[200~git\r\n push\x1b[201~")
        assert editor.value == "xgit push"
        assert editor.cursor == len("xgit push")


class TestLineEditorDeletion:
    def test_backspace(self) -> None:
        editor = _editor("git")
        editor.handle_input(KEY_BACKSPACE)
        assert editor.value == "gi"
        assert editor.cursor == 2

    def test_backspace_at_start_is_noop(self) -> None:
        editor = _editor("git", 0)
        editor.handle_input(KEY_BACKSPACE)
        assert editor.value == "git"

    def test_backspace_removes_whole_grapheme(self) -> None:
        editor = _editor("aé")
        editor.handle_input(KEY_BACKSPACE)
        assert editor.value == "a"

    def test_forward_delete(self) -> None:
        editor = _editor("git", 0)
        editor.handle_input(KEY_DELETE)
        assert editor.value == "it"
        assert editor.cursor == 0

    def test_delete_word_backward(self) -> None:
        editor = _editor("git status")
        editor.handle_input(KEY_CTRL_W)
        assert editor.value == "git "
        assert editor.cursor == 4

    def test_delete_to_line_start(self) -> None:
        editor = _editor("git status", 4)
        editor.handle_input(KEY_CTRL_U)
        assert editor.value == "status"
        assert editor.cursor == 0

    def test_delete_to_line_end(self) -> None:
        editor = _editor("git status", 3)
        editor.handle_input(KEY_CTRL_K)
        assert editor.value == "git"
        assert editor.cursor == 3


class TestLineEditorMovement:
    def test_left_and_right(self) -> None:
        editor = _editor("abc")
        editor.handle_input(KEY_LEFT)
        assert editor.cursor == 2
        editor.handle_input(KEY_RIGHT)
        assert editor.cursor == 3

    def test_right_at_end_stays(self) -> None:
        editor = _editor("abc")
        editor.handle_input(KEY_RIGHT)
        assert editor.cursor == 3

    def test_left_at_start_stays(self) -> None:
        editor = _editor("abc", 0)
        editor.handle_input(KEY_LEFT)
        assert editor.cursor == 0

    def test_home_and_end(self) -> None:
        editor = _editor("abc", 1)
        editor.handle_input(KEY_HOME)
        assert editor.cursor == 0
        editor.handle_input(KEY_END)
        assert editor.cursor == 3

    def test_word_movement(self) -> None:
        editor = _editor("git push origin")
        editor.handle_input(KEY_ALT_LEFT)
        assert editor.cursor == len("git push ")
        editor.handle_input(KEY_ALT_LEFT)
        assert editor.cursor == len("git ")
        editor.handle_input(KEY_ALT_RIGHT)
        assert editor.cursor == len("git push")


class TestLineEditorValue:
    def test_set_value_defaults_cursor_to_end(self) -> None:
        editor = LineEditor()
        editor.set_value("status")
        assert editor.cursor == 6

    def test_set_value_clamps_cursor(self) -> None:
        editor = LineEditor()
        editor.set_value("ab", 10)
        assert editor.cursor == 2
        editor.set_value("ab", -3)
        assert editor.cursor == 0

    def test_clear(self) -> None:
        editor = _editor("abc")
        editor.clear()
        assert editor.value == ""
        assert editor.cursor == 0


class TestLineEditorSubmit:
    def test_enter_calls_on_submit_with_value(self) -> None:
        editor = _editor("git push")
        submitted: list[str] = []
        editor.on_submit = submitted.append
        editor.handle_input(KEY_ENTER)
        assert submitted == ["git push"]
        # Submitting does not clear the line by itself
        assert editor.value == "git push"

    def test_enter_without_callback_is_harmless(self) -> None:
        editor = _editor("x")
        editor.handle_input(KEY_ENTER)
        assert editor.value == "x"

    def test_custom_keybindings(self) -> None:
        editor = LineEditor(PromptKeybindingsManager({"cursorLineStart": "ctrl+g"}))
        editor.set_value("abc")
        editor.handle_input("\x07")
        assert editor.cursor == 0
