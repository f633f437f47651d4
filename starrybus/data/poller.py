"""Async wrapper that fetches one stop's arrivals without blocking the event loop."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import time
from typing import Any

from starrybus.data.datamall_client import DataMallClient, DataMallClientError


@dataclass(frozen=True)
class PollResult:
    """Outcome of a single stop poll."""

    stop_code: int
    payload: dict[str, Any] = field(default_factory=dict)
    fetched_at: float = 0.0
    error: str | None = None


class StopPoller:
    """Runs blocking DataMall requests in a worker thread."""

    def __init__(self, client: DataMallClient) -> None:
        self._client = client

    async def fetch_once(self, stop_code: int) -> PollResult:
        try:
            payload = await asyncio.to_thread(self._client.get_bus_arrivals, stop_code)
            return PollResult(
                stop_code=stop_code,
                payload=payload,
                fetched_at=time.time(),
                error=None,
            )
        except DataMallClientError as exc:
            return PollResult(
                stop_code=stop_code,
                payload={},
                fetched_at=time.time(),
                error=str(exc),
            )


__all__ = ["PollResult", "StopPoller"]
