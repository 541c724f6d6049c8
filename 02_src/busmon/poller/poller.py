"""HealthPoller implementation."""

import asyncio
import time
from dataclasses import dataclass
from typing import Protocol

from ..bus import BusError, BusUnavailableError
from ..config import MonitorSettings
from ..directory import IPeerDirectory
from ..logging_config import get_logger
from ..models import Peer

logger = get_logger(__name__)


@dataclass
class RoundSummary:
    """Outcome of one pass over the directory."""

    sampled: int = 0
    skipped: int = 0  # lock contended
    failed: int = 0  # timed out or errored


class IHealthPoller(Protocol):
    """Sampling round-trip latency of every known peer."""

    async def start(self) -> None:
        """Start the polling loop."""
        ...

    async def stop(self) -> None:
        """Stop the polling loop."""
        ...

    async def poll_round(self) -> RoundSummary:
        """Visit every peer once."""
        ...


class HealthPoller:
    """Probes peers one at a time on a fixed cadence."""

    def __init__(self, directory: IPeerDirectory, settings: MonitorSettings | None = None):
        self._directory = directory
        self._settings = settings or MonitorSettings()
        self._task: asyncio.Task | None = None
        self._running = False
        self.rounds = 0

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the polling loop."""
        if self.running:
            return
        logger.info("Starting HealthPoller")
        self._running = True
        self._task = asyncio.create_task(self.run(), name="health-poller")

    async def stop(self) -> None:
        """Stop the polling loop."""
        if not self._task:
            return
        logger.info("Stopping HealthPoller")
        self._running = False
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        except BusUnavailableError:
            # Already logged when the loop ended.
            pass
        self._task = None

    async def run(self) -> None:
        """Poll until stopped. Only stop() or a dead connection ends the loop."""
        while self._running:
            await asyncio.sleep(self._settings.poll_interval)

            if not self._directory.peers:
                continue

            try:
                summary = await self.poll_round()
            except BusUnavailableError as e:
                logger.error("HealthPoller terminating: bus unavailable: %s", e, exc_info=True)
                raise

            logger.debug(
                "Poll round %d: %d sampled, %d skipped, %d failed",
                self.rounds,
                summary.sampled,
                summary.skipped,
                summary.failed,
            )

    async def poll_round(self) -> RoundSummary:
        """Visit every peer once, pacing between them."""
        summary = RoundSummary()
        for peer in self._directory.peers:
            await asyncio.sleep(self._settings.poll_pacing)

            # Skip rather than wait: a reader holding the lock must not
            # stall the whole round.
            if not peer.lock.acquire(blocking=False):
                summary.skipped += 1
                continue
            try:
                elapsed = await self.probe(peer)
                if elapsed is None:
                    summary.failed += 1
                else:
                    peer.stats.update(elapsed)
                    summary.sampled += 1
            finally:
                peer.lock.release()

        self.rounds += 1
        return summary

    async def probe(self, peer: Peer) -> int | None:
        """Round-trip time in nanoseconds, or None on timeout or call failure."""
        start = time.perf_counter_ns()
        try:
            await asyncio.wait_for(peer.get_role(), timeout=self._settings.probe_timeout)
        except asyncio.TimeoutError:
            logger.debug("Probe to %s timed out", peer.bus_name)
            return None
        except BusUnavailableError:
            raise
        except BusError as e:
            logger.debug("Probe to %s failed: %s", peer.bus_name, e)
            return None
        except Exception as e:
            logger.error("Probe to %s raised: %s", peer.bus_name, e, exc_info=True)
            return None
        return time.perf_counter_ns() - start
