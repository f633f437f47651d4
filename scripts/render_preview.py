"""Draw the board once from a saved BusArrivalv2 response."""

from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from typing import Any

from starrybus.logic.arrivals import ArrivalSet, Bus, arrivals_from_response
from starrybus.logic.scheduler import select_visible_arrivals
from starrybus.rendering import TerminalDisplay, make_stop_format


def _parse_ts(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _load_responses(path: str) -> list[dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict):
        return [data]
    if not data:
        raise ValueError(f"No responses found in {path}")
    return data


def _parse_bus(value: str) -> Bus:
    name, _, min_lines = value.partition("=")
    return Bus(name=name, min_lines=int(min_lines or 1))


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("path", nargs="?", default="data/samples/bus_arrival.json")
    parser.add_argument("--rows", type=int, default=6)
    parser.add_argument("--columns", type=int, default=20)
    parser.add_argument("--color", default="cyan")
    parser.add_argument("--now", default=None, help="ISO timestamp to count down from")
    parser.add_argument(
        "--bus",
        action="append",
        default=[],
        help="Minimum lines for a service, e.g. --bus 12=2",
    )
    args = parser.parse_args()

    now = _parse_ts(args.now) if args.now else datetime.now(timezone.utc)
    stop_format = make_stop_format(args.color)
    buses = {bus.name: bus for bus in map(_parse_bus, args.bus)}

    arrival_set = ArrivalSet()
    for response in _load_responses(args.path):
        stop_code, arrivals = arrivals_from_response(response, stop_format, now)
        arrival_set.replace_stop_arrivals(stop_code, arrivals)

    visible = select_visible_arrivals(arrival_set, args.rows, buses)
    TerminalDisplay().draw(visible, args.columns)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
