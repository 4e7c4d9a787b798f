"""OverlayTracker - remembers how tall the last overlay was so it can be erased."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dispatch_prompt.terminal import Terminal


class OverlayTracker:
    """Erases exactly the rows the previous overlay occupied.

    The error panel and the suggestion list both live in the rows directly
    below the prompt row and change height on every redraw, so erasure always
    consults :attr:`row_count`, the height recorded by the last draw.
    """

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal
        self._row_count = 0

    @property
    def row_count(self) -> int:
        """Rows below the prompt row written by the most recent draw."""
        return self._row_count

    def erase(self) -> None:
        """Clear the prompt row and the recorded rows beneath it.

        The cursor is left at column 0 of the prompt row and the recorded
        height drops to 0, so a second call only re-clears the prompt row.
        """
        term = self._terminal
        term.clear_line()
        for _ in range(self._row_count):
            term.move_by(1)
            term.clear_line()
        term.move_by(-self._row_count)
        term.cursor_to(0)
        self._row_count = 0

    def record_height(self, rows: int) -> None:
        if rows < 0:
            raise ValueError(f"overlay height must be >= 0, got {rows}")
        self._row_count = rows
