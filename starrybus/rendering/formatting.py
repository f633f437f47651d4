"""Text helpers for board rows."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

from starrybus.logic.arrivals import Arrival, Format


def format_time_to_arrival(seconds: int) -> str:
    """Format a countdown as ``"45s"`` or ``"2m 5s"``."""
    minutes = seconds // 60
    if minutes == 0:
        return f"{seconds}s"
    return f"{minutes}m {seconds - minutes * 60}s"


def format_row(arrival: Arrival, columns: int) -> str:
    """Right-align the countdown against the service number within ``columns``.

    Rows that do not fit get no padding and are left over-long.
    """
    time_text = format_time_to_arrival(arrival.time_to_arrival)
    padding = " " * max(columns - len(arrival.service_number) - len(time_text), 0)
    return f"{arrival.service_number}{padding}{time_text}"


def make_stop_format(color: str) -> Format:
    """Build the row format for a stop colour (a colour name or ``#rrggbb``).

    Raises ``rich.color.ColorParseError`` for colours rich cannot parse.
    """
    style = Style(color=color)

    def _format(text: str) -> Text:
        return Text(text, style=style)

    return _format


__all__ = ["format_row", "format_time_to_arrival", "make_stop_format"]
