"""SuggestionNavigator - the suggestion list and which entry is highlighted."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from dispatch_prompt.bridge import Suggestion


class SuggestionNavigator:
    """Selection index over the current suggestions, wrapping at both ends.

    Moving only updates the index; the highlight becomes visible on the next
    redraw, which is also when a new list replaces the old one.
    """

    def __init__(self) -> None:
        self._suggestions: list[Suggestion] = []
        self._selected_index = 0

    @property
    def suggestions(self) -> list[Suggestion]:
        return list(self._suggestions)

    @property
    def selected_index(self) -> int:
        return self._selected_index

    def set_suggestions(self, suggestions: Sequence[Suggestion]) -> None:
        """Replace the list and bring the index back into range."""
        self._suggestions = list(suggestions)
        self._wrap()

    def move(self, delta: int) -> None:
        self._selected_index += delta
        self._wrap()

    def current_selection(self) -> Suggestion | None:
        if not self._suggestions:
            return None
        return self._suggestions[self._selected_index]

    def _wrap(self) -> None:
        # An empty list leaves the index alone; it is ignored until a list arrives.
        count = len(self._suggestions)
        if not count:
            return
        if self._selected_index < 0:
            self._selected_index = count - 1
        elif self._selected_index >= count:
            self._selected_index = 0
