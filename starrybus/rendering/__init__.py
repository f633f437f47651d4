"""Rendering utilities for the terminal board."""

from starrybus.rendering.formatting import format_row, format_time_to_arrival, make_stop_format
from starrybus.rendering.terminal import TerminalDisplay

__all__ = ["TerminalDisplay", "format_row", "format_time_to_arrival", "make_stop_format"]
