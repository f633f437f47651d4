"""Selection of the arrivals shown on the board."""

from __future__ import annotations

from typing import Iterable, Mapping

from starrybus.logic.arrivals import Arrival, Bus


def _by_time(arrival: Arrival) -> int:
    return arrival.time_to_arrival


def sort_arrivals(arrivals: Iterable[Arrival]) -> list[Arrival]:
    """Sort ascending by time to arrival, keeping input order for ties."""
    return sorted(arrivals, key=_by_time)


def enforce_min_lines(arrivals: list[Arrival], rows: int, buses: Mapping[str, Bus]) -> None:
    """Promote arrivals of under-represented buses into the first ``rows`` slots.

    Works in place on a time-sorted list. Each promoted arrival moves to the
    front of the list. Nothing happens when there are fewer than ``rows``
    arrivals.
    """
    if len(arrivals) < rows:
        return

    lines_per_bus: dict[str, int] = {}
    for arrival in arrivals[:rows]:
        lines_per_bus[arrival.service_number] = lines_per_bus.get(arrival.service_number, 0) + 1

    i = rows
    while i < len(arrivals):
        bus = buses.get(arrivals[i].service_number)
        if bus is not None:
            shown_lines = lines_per_bus.get(bus.name, 0)
            if shown_lines < bus.min_lines:
                arrivals.insert(0, arrivals.pop(i))
                # Re-check the arrival that slid into slot i.
                i -= 1
                lines_per_bus[bus.name] = shown_lines + 1
        i += 1


def select_visible_arrivals(
    arrivals: Iterable[Arrival], rows: int, buses: Mapping[str, Bus]
) -> list[Arrival]:
    """Return the arrivals to draw, soonest first.

    The min-lines tally counts the first ``rows`` arrivals while the board
    shows ``rows - 1`` of them.
    """
    ordered = sort_arrivals(arrivals)
    enforce_min_lines(ordered, rows, buses)
    return sort_arrivals(ordered[: rows - 1])


__all__ = ["enforce_min_lines", "select_visible_arrivals", "sort_arrivals"]
