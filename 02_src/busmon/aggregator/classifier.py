"""EventClassifier and the stream consumer feeding it."""

import asyncio
from typing import Protocol

from ..bus import BusUnavailableError, IBusConnection, StreamError
from ..logging_config import get_logger
from ..models import BusEvent, EventCategory
from .scoreboard import ScoreBoard

logger = get_logger(__name__)

EVENT_INTERFACE_PREFIX = "org.a11y.atspi.Event."

INTERFACE_CATEGORIES: dict[str, EventCategory] = {
    EVENT_INTERFACE_PREFIX + "Mouse": EventCategory.MOUSE,
    EVENT_INTERFACE_PREFIX + "Keyboard": EventCategory.KEYBOARD,
    EVENT_INTERFACE_PREFIX + "Focus": EventCategory.FOCUS,
    EVENT_INTERFACE_PREFIX + "Window": EventCategory.WINDOW,
    EVENT_INTERFACE_PREFIX + "Document": EventCategory.DOCUMENT,
    EVENT_INTERFACE_PREFIX + "Object": EventCategory.OBJECT,
    EVENT_INTERFACE_PREFIX + "Terminal": EventCategory.TERMINAL,
    "org.a11y.atspi.Cache": EventCategory.CACHE,
    "org.a11y.atspi.Registry": EventCategory.LISTENER,
    "org.a11y.atspi.Socket": EventCategory.AVAILABLE,
}


class IEventClassifier(Protocol):
    """Turning stream items into scoreboard tallies."""

    def classify(self, event: BusEvent) -> EventCategory | None:
        """Category for an event, None if unrecognized."""
        ...

    def handle(self, item: BusEvent | StreamError) -> None:
        """Count one item from the stream."""
        ...


class EventClassifier:
    """Maps events to categories by their signal interface."""

    def __init__(self, scoreboard: ScoreBoard):
        self._scoreboard = scoreboard

    def classify(self, event: BusEvent) -> EventCategory | None:
        """Category for an event, None if unrecognized."""
        return INTERFACE_CATEGORIES.get(event.interface)

    def handle(self, item: BusEvent | StreamError) -> None:
        """Count one item from the stream."""
        if isinstance(item, StreamError):
            self._scoreboard.count_error(str(item))
        else:
            self._scoreboard.count(self.classify(item))


class EventConsumer:
    """Drains the bus event stream into the classifier."""

    def __init__(self, connection: IBusConnection, classifier: IEventClassifier):
        self._connection = connection
        self._classifier = classifier
        self._task: asyncio.Task | None = None
        self.consumed = 0

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Subscribe and start consuming in the background."""
        if self.running:
            return
        logger.info("Starting EventConsumer")
        self._task = asyncio.create_task(self.run(), name="event-consumer")

    async def stop(self) -> None:
        """Stop consuming."""
        if not self._task:
            return
        logger.info("Stopping EventConsumer")
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        except BusUnavailableError:
            pass
        self._task = None

    async def run(self) -> None:
        """Consume until the stream ends or the connection dies."""
        try:
            async for item in self._connection.event_stream():
                self._classifier.handle(item)
                self.consumed += 1
        except BusUnavailableError as e:
            logger.error("EventConsumer terminating: bus unavailable: %s", e, exc_info=True)
            raise
        logger.warning(
            "Event stream ended",
            extra={"context": {"consumed": self.consumed}},
        )
