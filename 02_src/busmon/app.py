"""Monitor bootstrap and lifecycle management."""

import asyncio
from typing import Protocol

from .aggregator import CadenceAggregator, EventClassifier, EventConsumer, ScoreBoard
from .bus import IBusConnection
from .config import MonitorSettings
from .directory import PeerDirectory
from .logging_config import get_logger
from .models import DashboardSnapshot
from .poller import HealthPoller

logger = get_logger(__name__)


class IMonitor(Protocol):
    """Bootstrap, lifecycle and the snapshot contract."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    def snapshot(self) -> DashboardSnapshot:
        """Read-only view for presentation."""
        ...


class Monitor:
    """Main monitor bootstrap."""

    def __init__(
        self,
        connection: IBusConnection,
        settings: MonitorSettings | None = None,
    ):
        self._connection = connection
        self._settings = settings or MonitorSettings.from_env()

        # Components (will be initialized in start())
        self._scoreboard: ScoreBoard | None = None
        self._classifier: EventClassifier | None = None
        self._consumer: EventConsumer | None = None
        self._cadence: CadenceAggregator | None = None
        self._directory: PeerDirectory | None = None
        self._poller: HealthPoller | None = None
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def connection(self) -> IBusConnection:
        return self._connection

    async def start(self) -> None:
        """Initialize components in dependency order."""
        if self._started:
            return
        logger.info("Starting monitor")

        # 1. ScoreBoard (no dependencies)
        self._scoreboard = ScoreBoard(self._settings)

        # 2. Classifier + consumer (depend on ScoreBoard and the connection)
        self._classifier = EventClassifier(self._scoreboard)
        self._consumer = EventConsumer(self._connection, self._classifier)

        # 3. Cadence workers (depend on ScoreBoard)
        self._cadence = CadenceAggregator(self._scoreboard, self._settings)

        # 4. Directory: connection-level failures abort startup here
        self._directory = PeerDirectory(self._connection, self._settings)
        await self._directory.enumerate()

        # 5. Poller (depends on Directory)
        self._poller = HealthPoller(self._directory, self._settings)

        await self._consumer.start()
        await self._cadence.start()
        await self._poller.start()
        for task in (self._consumer.task, self._poller.task):
            if task is not None:
                task.add_done_callback(self._on_worker_done)

        self._started = True
        logger.info(
            "All components initialized successfully",
            extra={"context": {"peers": len(self._directory)}},
        )

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._poller:
            await self._poller.stop()
        if self._cadence:
            await self._cadence.stop()
        if self._consumer:
            await self._consumer.stop()
        if self._started:
            logger.info("Monitor stopped")
        self._started = False

    def _on_worker_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Worker %s exited: %s", task.get_name(), error)
        else:
            logger.warning("Worker %s exited", task.get_name())

    def snapshot(self) -> DashboardSnapshot:
        """Read-only view for presentation. Never blocks on a peer."""
        return DashboardSnapshot(
            scoreboard=self.scoreboard.snapshot(),
            peers=[peer.try_snapshot() for peer in self.directory.peers],
        )

    @property
    def scoreboard(self) -> ScoreBoard:
        """Get scoreboard instance."""
        if not self._scoreboard:
            raise RuntimeError("Monitor not started")
        return self._scoreboard

    @property
    def directory(self) -> PeerDirectory:
        """Get peer directory instance."""
        if self._directory is None:
            raise RuntimeError("Monitor not started")
        return self._directory

    @property
    def poller(self) -> HealthPoller:
        """Get health poller instance."""
        if not self._poller:
            raise RuntimeError("Monitor not started")
        return self._poller

    @property
    def consumer(self) -> EventConsumer:
        """Get event consumer instance."""
        if not self._consumer:
            raise RuntimeError("Monitor not started")
        return self._consumer
