"""Polling and redraw loop for the arrival board."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import logging

from starrybus.config import AppConfig
from starrybus.data.poller import StopPoller
from starrybus.logic.arrivals import ArrivalPayloadError, ArrivalSet, Stop, arrivals_from_response
from starrybus.logic.scheduler import select_visible_arrivals
from starrybus.rendering.terminal import TerminalDisplay

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ArrivalBoard:
    """Polls every configured stop and redraws after each stop's update."""

    def __init__(
        self,
        config: AppConfig,
        poller: StopPoller,
        display: TerminalDisplay,
        arrival_set: ArrivalSet | None = None,
    ) -> None:
        self._config = config
        self._poller = poller
        self._display = display
        self.arrival_set = arrival_set if arrival_set is not None else ArrivalSet()

    async def run(self, passes: int | None = None) -> None:
        """Start a poll of every stop, then wait the poll interval, and repeat.

        With ``passes`` set, stops after that many passes once every
        outstanding poll has finished. Cancelling ``run`` cancels them all.
        """
        completed = 0
        async with asyncio.TaskGroup() as tasks:
            while passes is None or completed < passes:
                logger.debug("Polling %d stops", len(self._config.stops))
                for stop in self._config.stops:
                    tasks.create_task(self.refresh_stop(stop), name=f"stop-{stop.code}")
                completed += 1
                if passes is None or completed < passes:
                    await asyncio.sleep(self._config.api.poll_interval_seconds)

    async def refresh_stop(self, stop: Stop) -> None:
        """Fetch one stop, fold its arrivals into the set and redraw."""
        result = await self._poller.fetch_once(stop.code)
        if result.error:
            logger.warning("Fetching stop %s failed: %s", stop.code, result.error)
            return

        try:
            stop_code, arrivals = arrivals_from_response(result.payload, stop.format, _utc_now())
        except ArrivalPayloadError as exc:
            logger.warning("Ignoring malformed response for stop %s: %s", stop.code, exc)
            return

        self.arrival_set.replace_stop_arrivals(stop_code, arrivals)
        logger.debug("Stop %s now has %d arrivals", stop_code, len(arrivals))
        self.redraw()

    def redraw(self) -> None:
        display_config = self._config.display
        visible = select_visible_arrivals(self.arrival_set, display_config.rows, self._config.buses)
        self._display.draw(visible, display_config.columns)


__all__ = ["ArrivalBoard"]
