"""SIM implementation - an in-process accessibility bus for demos."""

import asyncio
import random
from dataclasses import dataclass
from typing import AsyncIterator, Protocol

from busmon.bus import (
    BusError,
    BusUnavailableError,
    InvalidAddressError,
    StreamError,
    is_valid_bus_name,
    is_valid_object_path,
)
from busmon.config import ACCESSIBLE_ROOT_PATH
from busmon.logging_config import get_logger
from busmon.models import BusEvent

logger = get_logger(__name__)

EVENT_KINDS: list[tuple[str, str]] = [
    ("org.a11y.atspi.Event.Object", "StateChanged"),
    ("org.a11y.atspi.Event.Object", "PropertyChange"),
    ("org.a11y.atspi.Event.Object", "ChildrenChanged"),
    ("org.a11y.atspi.Event.Focus", "Focus"),
    ("org.a11y.atspi.Event.Window", "Activate"),
    ("org.a11y.atspi.Event.Document", "LoadComplete"),
    ("org.a11y.atspi.Event.Keyboard", "Modifiers"),
    ("org.a11y.atspi.Event.Mouse", "Abs"),
    ("org.a11y.atspi.Event.Terminal", "LineChanged"),
    ("org.a11y.atspi.Cache", "AddAccessible"),
    ("org.a11y.atspi.Registry", "EventListenerRegistered"),
    ("org.a11y.atspi.Socket", "Available"),
    ("org.example.Unknown", "Something"),
]

_CLOSED = object()


@dataclass
class SimApplication:
    """A simulated accessible application."""

    bus_name: str
    name: str | None
    latency: float = 0.001  # seconds per call
    toolkit: str = "GTK"
    accessible: bool = True  # False: owns the path but is not an a11y app
    has_application: bool = True


class ISim(Protocol):
    """Generate bus events for the dashboard."""

    async def start(self) -> None:
        """Start generating events."""
        ...

    async def stop(self) -> None:
        """Stop generating events."""
        ...


class SimAccessible:
    """Accessible handle backed by a SimApplication."""

    def __init__(self, bus: "SimulatedBus", app: SimApplication | None):
        self._bus = bus
        self._app = app

    async def _call(self) -> SimApplication:
        if self._bus.closed:
            raise BusUnavailableError("Connection closed")
        if self._app is None:
            raise BusError("org.freedesktop.DBus.Error.ServiceUnknown")
        await asyncio.sleep(self._app.latency)
        return self._app

    async def name(self) -> str | None:
        app = await self._call()
        return app.name

    async def get_role(self) -> str:
        await self._call()
        return "application"

    async def get_application(self) -> str:
        app = await self._call()
        if not app.accessible:
            raise BusError("org.freedesktop.DBus.Error.UnknownMethod")
        return app.bus_name

    async def get_children(self) -> list[str]:
        await self._call()
        return []


class SimApplicationHandle:
    """Application handle backed by a SimApplication."""

    def __init__(self, app: SimApplication):
        self._app = app

    async def toolkit_name(self) -> str:
        return self._app.toolkit

    async def version(self) -> str:
        return "2.0"


class SimulatedBus:
    """In-process bus with a registry, applications and an event feed."""

    def __init__(
        self,
        applications: list[SimApplication] | None = None,
        events_per_second: float = 200.0,
        error_rate: float = 0.01,
        seed: int | None = None,
    ):
        if events_per_second <= 0:
            raise ValueError(f"events_per_second must be positive: {events_per_second}")
        if not 0.0 <= error_rate <= 1.0:
            raise ValueError(f"error_rate must be within [0, 1]: {error_rate}")
        self._apps: dict[str, SimApplication] = {
            app.bus_name: app for app in (applications or default_applications())
        }
        self._events_per_second = events_per_second
        self._error_rate = error_rate
        self._random = random.Random(seed)
        self._queue: asyncio.Queue = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self.closed = False

    async def registry_children(self) -> list[str]:
        if self.closed:
            raise BusUnavailableError("Connection closed")
        return [name for name, app in self._apps.items() if app.accessible]

    async def list_names(self) -> list[str]:
        if self.closed:
            raise BusUnavailableError("Connection closed")
        return ["org.freedesktop.DBus", "org.a11y.atspi.Registry", *self._apps]

    async def accessible(self, bus_name: str, path: str) -> SimAccessible:
        if not is_valid_bus_name(bus_name):
            raise InvalidAddressError(f"Invalid bus name: {bus_name!r}")
        if not is_valid_object_path(path):
            raise InvalidAddressError(f"Invalid object path: {path!r}")
        app = self._apps.get(bus_name) if path == ACCESSIBLE_ROOT_PATH else None
        return SimAccessible(self, app)

    async def application(self, bus_name: str, path: str) -> SimApplicationHandle:
        if not is_valid_bus_name(bus_name):
            raise InvalidAddressError(f"Invalid bus name: {bus_name!r}")
        app = self._apps.get(bus_name)
        if app is None or not app.has_application:
            raise BusError(f"No application interface on {bus_name}")
        return SimApplicationHandle(app)

    async def event_stream(self) -> AsyncIterator[BusEvent | StreamError]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                raise BusUnavailableError("Connection closed")
            yield item

    async def start(self) -> None:
        """Start generating events."""
        if self._task and not self._task.done():
            return
        self._task = asyncio.create_task(self._generate())
        logger.info("SIM: event generation started")

    async def stop(self) -> None:
        """Stop generating events."""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("SIM: event generation stopped")

    async def close(self) -> None:
        """Drop the connection; workers see BusUnavailableError."""
        await self.stop()
        self.closed = True
        self._queue.put_nowait(_CLOSED)

    async def _generate(self) -> None:
        senders = list(self._apps)
        while True:
            # Bursty: sometimes a handful of events at once
            burst = self._random.randint(1, 5)
            for _ in range(burst):
                self._queue.put_nowait(self._next_item(senders))
            await asyncio.sleep(burst / self._events_per_second)

    def _next_item(self, senders: list[str]) -> BusEvent | StreamError:
        if self._random.random() < self._error_rate:
            return StreamError(
                self._random.choice(
                    [
                        "Failed to decode event body: unexpected signature",
                        "Event sender vanished before delivery",
                    ]
                )
            )
        interface, member = self._random.choice(EVENT_KINDS)
        sender = self._random.choice(senders) if senders else ""
        return BusEvent(
            interface=interface,
            member=member,
            sender=sender,
            path=ACCESSIBLE_ROOT_PATH,
        )


def default_applications() -> list[SimApplication]:
    """A desktop-ish set of applications with varied behaviour."""
    return [
        SimApplication(":1.12", "gnome-shell", latency=0.0008, toolkit="Clutter"),
        SimApplication(":1.31", "Firefox", latency=0.004, toolkit="Gecko"),
        SimApplication(":1.47", "gnome-terminal-server", latency=0.0015),
        SimApplication(":1.52", "Thunderbird", latency=0.006, toolkit="Gecko"),
        SimApplication(":1.60", "evolution-alarm-notify", latency=0.2),  # always times out
        SimApplication(":1.71", None),  # exposes no name, skipped
        SimApplication(":1.80", "xdg-desktop-portal", accessible=False),
    ]
