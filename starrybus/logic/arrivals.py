"""Arrival records and the per-stop arrival store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import math
from typing import Any, Callable, Iterable

from rich.text import Text

Format = Callable[[str], Text]

NEXT_BUS_KEYS = ("NextBus", "NextBus2", "NextBus3")


class ArrivalPayloadError(Exception):
    """Raised when a bus arrival response is missing fields or has bad values."""


@dataclass(frozen=True)
class Bus:
    """A bus service with a minimum number of visible lines."""

    name: str
    min_lines: int


@dataclass(frozen=True)
class Stop:
    """A bus stop to poll and the format used for its rows."""

    code: int
    format: Format


@dataclass(frozen=True)
class Arrival:
    """One predicted bus arrival at a stop."""

    stop_code: int
    service_number: str
    time_to_arrival: int  # seconds, negative once the estimate has passed
    format: Format


class ArrivalSet:
    """Latest known arrivals across all stops, in insertion order."""

    def __init__(self, arrivals: Iterable[Arrival] = ()) -> None:
        self._arrivals: tuple[Arrival, ...] = tuple(arrivals)

    def replace_stop_arrivals(self, stop_code: int, new_arrivals: Iterable[Arrival]) -> None:
        """Drop every arrival for ``stop_code`` and append ``new_arrivals``.

        The new sequence is built fully before it is swapped in, so readers
        only ever see the old set or the new one.
        """
        kept = [arrival for arrival in self._arrivals if arrival.stop_code != stop_code]
        self._arrivals = tuple(kept) + tuple(new_arrivals)

    def snapshot(self) -> list[Arrival]:
        return list(self._arrivals)

    def __len__(self) -> int:
        return len(self._arrivals)

    def __iter__(self):
        return iter(self._arrivals)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        # No offset: local time.
        parsed = parsed.astimezone()
    return parsed


def _seconds_until(estimated: datetime, now: datetime) -> int:
    # Half-up rounding, so 2.5s becomes 3s rather than 2s.
    return math.floor((estimated - now).total_seconds() + 0.5)


def arrivals_from_response(
    payload: dict[str, Any], stop_format: Format, now: datetime
) -> tuple[int, list[Arrival]]:
    """Build arrivals from one BusArrivalv2 response.

    Returns the stop code reported by the response along with up to three
    arrivals per service, in response order.
    """
    if not isinstance(payload, dict):
        raise ArrivalPayloadError("Arrival response must be a mapping")
    if "BusStopCode" not in payload:
        raise ArrivalPayloadError("Arrival response is missing BusStopCode")
    if "Services" not in payload:
        raise ArrivalPayloadError("Arrival response is missing Services")

    try:
        stop_code = int(payload["BusStopCode"])
    except (TypeError, ValueError) as exc:
        raise ArrivalPayloadError(f"Invalid BusStopCode: {payload['BusStopCode']!r}") from exc

    services = payload["Services"]
    if not isinstance(services, list):
        raise ArrivalPayloadError("Services must be a list")

    arrivals: list[Arrival] = []
    for service in services:
        if not isinstance(service, dict) or "ServiceNo" not in service:
            raise ArrivalPayloadError(f"Service entry for stop {stop_code} is missing ServiceNo")
        service_number = str(service["ServiceNo"])
        for key in NEXT_BUS_KEYS:
            next_bus = service.get(key)
            if not isinstance(next_bus, dict):
                continue
            estimated_raw = next_bus.get("EstimatedArrival")
            if not estimated_raw:
                continue
            try:
                estimated = _parse_timestamp(estimated_raw)
            except (TypeError, ValueError) as exc:
                raise ArrivalPayloadError(
                    f"Invalid EstimatedArrival for service {service_number}: {estimated_raw!r}"
                ) from exc
            arrivals.append(
                Arrival(
                    stop_code=stop_code,
                    service_number=service_number,
                    time_to_arrival=_seconds_until(estimated, now),
                    format=stop_format,
                )
            )

    return stop_code, arrivals


__all__ = [
    "Arrival",
    "ArrivalPayloadError",
    "ArrivalSet",
    "Bus",
    "Format",
    "Stop",
    "arrivals_from_response",
]
