"""Tests for SuggestionNavigator selection and wrap-around."""

from __future__ import annotations

from dispatch_prompt.bridge import Suggestion
from dispatch_prompt.navigator import SuggestionNavigator


def _navigator(*texts: str) -> SuggestionNavigator:
    nav = SuggestionNavigator()
    nav.set_suggestions([Suggestion(text, 0) for text in texts])
    return nav


class TestSuggestionNavigator:
    def test_initial_state(self) -> None:
        nav = SuggestionNavigator()
        assert nav.selected_index == 0
        assert nav.suggestions == []
        assert nav.current_selection() is None

    def test_move_right(self) -> None:
        nav = _navigator("a", "b", "c")
        nav.move(1)
        assert nav.selected_index == 1
        assert nav.current_selection() == Suggestion("b", 0)

    def test_move_left_from_first_wraps_to_last(self) -> None:
        nav = _navigator("a", "b", "c")
        nav.move(-1)
        assert nav.selected_index == 2

    def test_move_right_from_last_wraps_to_first(self) -> None:
        nav = _navigator("a", "b", "c")
        nav.move(1)
        nav.move(1)
        nav.move(1)
        assert nav.selected_index == 0

    def test_full_cycle_returns_to_start(self) -> None:
        nav = _navigator("a", "b", "c", "d")
        nav.move(1)
        start = nav.selected_index
        for _ in range(4):
            nav.move(1)
        assert nav.selected_index == start
        for _ in range(4):
            nav.move(-1)
        assert nav.selected_index == start

    def test_cycle_through_three(self) -> None:
        nav = _navigator("commit", "push", "pull")
        seen = []
        for _ in range(4):
            nav.move(1)
            seen.append(nav.current_selection().text)
        assert seen == ["push", "pull", "commit", "push"]

    def test_move_on_empty_list_is_ignored(self) -> None:
        nav = SuggestionNavigator()
        nav.move(1)
        nav.move(-1)
        assert nav.current_selection() is None

    def test_shorter_list_brings_index_back_in_range(self) -> None:
        nav = _navigator("a", "b", "c")
        nav.move(-1)
        assert nav.selected_index == 2

        nav.set_suggestions([Suggestion("x", 0), Suggestion("y", 0)])
        assert nav.selected_index == 0
        assert nav.current_selection() == Suggestion("x", 0)

    def test_index_survives_same_sized_list(self) -> None:
        nav = _navigator("a", "b", "c")
        nav.move(1)
        nav.set_suggestions([Suggestion(t, 2) for t in ("x", "y", "z")])
        assert nav.current_selection() == Suggestion("y", 2)

    def test_suggestions_returns_copy(self) -> None:
        nav = _navigator("a")
        nav.suggestions.append(Suggestion("b", 0))
        assert len(nav.suggestions) == 1
