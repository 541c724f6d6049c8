"""Tick and per-second workers draining the ScoreBoard."""

import asyncio
from typing import Callable

from ..config import MonitorSettings
from ..logging_config import get_logger
from .scoreboard import ScoreBoard

logger = get_logger(__name__)


class CadenceAggregator:
    """Runs the fast tick drain and the slow per-second drain."""

    def __init__(self, scoreboard: ScoreBoard, settings: MonitorSettings | None = None):
        self._scoreboard = scoreboard
        self._settings = settings or MonitorSettings()
        self._tasks: list[asyncio.Task] = []
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start both cadence loops."""
        if self._running:
            return
        logger.info("Starting CadenceAggregator")
        self._running = True
        self._tasks = [
            asyncio.create_task(
                self._every(self._settings.tick_interval, self._scoreboard.drain_tick),
                name="tick-aggregator",
            ),
            asyncio.create_task(
                self._every(self._settings.second_interval, self._drain_second),
                name="second-aggregator",
            ),
        ]

    async def stop(self) -> None:
        """Stop both cadence loops."""
        logger.info("Stopping CadenceAggregator")
        self._running = False
        for task in self._tasks:
            task.cancel()
        for task in self._tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._tasks = []

    def _drain_second(self) -> int:
        value = self._scoreboard.drain_second()
        logger.debug("Events in the last second: %d", value)
        return value

    async def _every(self, interval: float, drain: Callable[[], int]) -> None:
        while self._running:
            try:
                await asyncio.sleep(interval)
                drain()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error("Cadence drain error: %s", e, exc_info=True)
