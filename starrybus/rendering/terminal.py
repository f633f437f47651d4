"""Console output for the arrival board."""

from __future__ import annotations

from typing import Iterable

from rich.console import Console

from starrybus.logic.arrivals import Arrival
from starrybus.rendering.formatting import format_row


class TerminalDisplay:
    """Draw board rows to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    def draw(self, arrivals: Iterable[Arrival], columns: int) -> None:
        """Replace the board with one line per arrival."""
        if self._console.is_terminal:
            self._console.clear()
        else:
            self._console.print()

        for arrival in arrivals:
            self._console.print(arrival.format(format_row(arrival, columns)), soft_wrap=True)


__all__ = ["TerminalDisplay"]
