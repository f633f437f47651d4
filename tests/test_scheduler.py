from __future__ import annotations

from rich.text import Text

from starrybus.logic.arrivals import Arrival, Bus
from starrybus.logic.scheduler import enforce_min_lines, select_visible_arrivals, sort_arrivals


def _format(text: str) -> Text:
    return Text(text)


def _arrival(service: str, seconds: int, stop_code: int = 1) -> Arrival:
    return Arrival(stop_code=stop_code, service_number=service, time_to_arrival=seconds, format=_format)


def _rows(arrivals: list[Arrival]) -> list[tuple[str, int]]:
    return [(a.service_number, a.time_to_arrival) for a in arrivals]


def test_min_lines_bus_is_promoted_into_window() -> None:
    arrivals = [_arrival(name, seconds) for name, seconds in zip("ABCDE", (10, 20, 30, 40, 50))]
    arrivals.append(_arrival("X", 500))
    buses = {"X": Bus(name="X", min_lines=1)}

    visible = select_visible_arrivals(arrivals, rows=3, buses=buses)

    assert _rows(visible) == [("A", 10), ("X", 500)]


def test_promotion_repeats_until_min_lines_reached() -> None:
    arrivals = [
        _arrival("X", 100),
        _arrival("A", 10),
        _arrival("X", 200),
        _arrival("B", 20),
        _arrival("C", 30),
    ]
    buses = {"X": Bus(name="X", min_lines=2)}

    visible = select_visible_arrivals(arrivals, rows=3, buses=buses)

    assert _rows(visible) == [("X", 100), ("X", 200)]


def test_promotion_moves_entries_to_front_and_rescans() -> None:
    arrivals = sort_arrivals(
        [_arrival("A", 10), _arrival("B", 20), _arrival("C", 30), _arrival("X", 100), _arrival("X", 200)]
    )
    buses = {"X": Bus(name="X", min_lines=2)}

    enforce_min_lines(arrivals, 3, buses)

    assert _rows(arrivals) == [("X", 200), ("X", 100), ("A", 10), ("B", 20), ("C", 30)]


def test_promotion_stops_when_bus_runs_out_of_arrivals() -> None:
    arrivals = [_arrival("A", 10), _arrival("B", 20), _arrival("C", 30), _arrival("X", 100)]
    buses = {"X": Bus(name="X", min_lines=3)}

    enforce_min_lines(arrivals, 3, buses)

    assert _rows(arrivals) == [("X", 100), ("A", 10), ("B", 20), ("C", 30)]


def test_bus_already_at_min_lines_is_left_alone() -> None:
    arrivals = [_arrival("X", 10), _arrival("A", 20), _arrival("B", 30), _arrival("C", 40), _arrival("X", 500)]
    buses = {"X": Bus(name="X", min_lines=1)}

    visible = select_visible_arrivals(arrivals, rows=3, buses=buses)

    assert _rows(visible) == [("X", 10), ("A", 20)]


def test_unconfigured_and_zero_min_lines_buses_are_not_promoted() -> None:
    arrivals = [_arrival("A", 10), _arrival("B", 20), _arrival("C", 30), _arrival("Y", 40), _arrival("Z", 50)]
    buses = {"Z": Bus(name="Z", min_lines=0)}

    visible = select_visible_arrivals(arrivals, rows=3, buses=buses)

    assert _rows(visible) == [("A", 10), ("B", 20)]


def test_tally_counts_full_rows_not_display_window() -> None:
    # X sits in the tally window (rows) but outside the display window (rows - 1).
    arrivals = [_arrival("A", 10), _arrival("B", 20), _arrival("X", 30), _arrival("X", 40)]
    buses = {"X": Bus(name="X", min_lines=1)}

    visible = select_visible_arrivals(arrivals, rows=3, buses=buses)

    assert _rows(visible) == [("A", 10), ("B", 20)]


def test_no_promotion_below_capacity() -> None:
    arrivals = [_arrival("X", 500), _arrival("A", 10)]
    buses = {"X": Bus(name="X", min_lines=1)}

    visible = select_visible_arrivals(arrivals, rows=3, buses=buses)

    assert _rows(visible) == [("A", 10), ("X", 500)]


def test_below_capacity_truncates_to_display_window() -> None:
    arrivals = [_arrival("A", 30), _arrival("B", 10), _arrival("C", 20)]

    visible = select_visible_arrivals(arrivals, rows=4, buses={})

    assert _rows(visible) == [("B", 10), ("C", 20), ("A", 30)]


def test_single_row_shows_nothing() -> None:
    visible = select_visible_arrivals([_arrival("A", 10)], rows=1, buses={})

    assert visible == []


def test_equal_times_keep_input_order() -> None:
    arrivals = [_arrival("A", 60, stop_code=1), _arrival("B", 60, stop_code=2), _arrival("C", 30), _arrival("D", 60)]

    visible = select_visible_arrivals(arrivals, rows=5, buses={})

    assert _rows(visible) == [("C", 30), ("A", 60), ("B", 60), ("D", 60)]


def test_negative_times_sort_first() -> None:
    arrivals = [_arrival("A", 10), _arrival("B", -20)]

    visible = select_visible_arrivals(arrivals, rows=3, buses={})

    assert _rows(visible) == [("B", -20), ("A", 10)]


def test_select_does_not_reorder_input() -> None:
    arrivals = [_arrival("A", 30), _arrival("B", 10), _arrival("C", 20), _arrival("X", 90)]
    original = list(arrivals)

    select_visible_arrivals(arrivals, rows=3, buses={"X": Bus(name="X", min_lines=1)})

    assert arrivals == original
