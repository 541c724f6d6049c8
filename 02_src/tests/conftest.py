"""Pytest configuration and fixtures."""

import asyncio
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from busmon.bus import BusError, BusUnavailableError, InvalidAddressError  # noqa: E402
from busmon.config import MonitorSettings  # noqa: E402


class FakeAccessible:
    """Scriptable accessible handle."""

    def __init__(
        self,
        name: str | None = "app",
        role_delay: float = 0.0,
        name_error: Exception | None = None,
        role_error: Exception | None = None,
        application_error: Exception | None = None,
    ):
        self._name = name
        self.role_delay = role_delay
        self.name_error = name_error
        self.role_error = role_error
        self.application_error = application_error
        self.role_calls = 0

    async def name(self) -> str | None:
        if self.name_error:
            raise self.name_error
        return self._name

    async def get_role(self) -> str:
        self.role_calls += 1
        if self.role_delay:
            await asyncio.sleep(self.role_delay)
        if self.role_error:
            raise self.role_error
        return "application"

    async def get_application(self) -> str:
        if self.application_error:
            raise self.application_error
        return "app"

    async def get_children(self) -> list[str]:
        return []


class FakeApplication:
    """Application handle with fixed metadata."""

    async def toolkit_name(self) -> str:
        return "GTK"

    async def version(self) -> str:
        return "2.0"


class FakeBus:
    """In-memory IBusConnection with scripted peers and events."""

    def __init__(
        self,
        accessibles: dict[str, FakeAccessible] | None = None,
        registry: list[str] | None = None,
        names: list[str] | None = None,
        no_application: set[str] | None = None,
        events: list | None = None,
        stream_error: Exception | None = None,
        unavailable: bool = False,
    ):
        self.accessibles = accessibles or {}
        self.registry = list(self.accessibles) if registry is None else registry
        self.names = list(self.accessibles) if names is None else names
        self.no_application = no_application or set()
        self.events = events or []
        self.stream_error = stream_error
        self.unavailable = unavailable

    async def registry_children(self) -> list[str]:
        if self.unavailable:
            raise BusUnavailableError("no bus")
        return list(self.registry)

    async def list_names(self) -> list[str]:
        if self.unavailable:
            raise BusUnavailableError("no bus")
        return list(self.names)

    async def accessible(self, bus_name: str, path: str) -> FakeAccessible:
        if not bus_name or " " in bus_name:
            raise InvalidAddressError(f"Invalid bus name: {bus_name!r}")
        if bus_name not in self.accessibles:
            raise BusError(f"ServiceUnknown: {bus_name}")
        return self.accessibles[bus_name]

    async def application(self, bus_name: str, path: str) -> FakeApplication:
        if bus_name in self.no_application:
            raise BusError(f"No application interface on {bus_name}")
        return FakeApplication()

    async def event_stream(self):
        for item in self.events:
            yield item
            await asyncio.sleep(0)
        if self.stream_error:
            raise self.stream_error


@pytest.fixture
def settings():
    """Fast cadences so loops turn over quickly in tests."""
    return MonitorSettings(
        poll_interval=0.01,
        poll_pacing=0.0,
        probe_timeout=0.05,
        tick_interval=0.01,
        second_interval=0.02,
        tick_history_capacity=5,
        second_history_capacity=10,
        error_log_capacity=3,
    )


@pytest.fixture
def mixed_bus():
    """Three valid peers plus one without a name and one without an application."""
    return FakeBus(
        accessibles={
            ":1.10": FakeAccessible(name="gnome-shell"),
            ":1.11": FakeAccessible(name="Firefox"),
            ":1.12": FakeAccessible(name="gnome-terminal-server"),
            ":1.13": FakeAccessible(name=None),
            ":1.14": FakeAccessible(name="broken", application_error=BusError("UnknownMethod")),
        },
        no_application={":1.14"},
    )


@pytest.fixture
def scoreboard(settings):
    """Empty scoreboard with small windows."""
    from busmon.aggregator import ScoreBoard

    return ScoreBoard(settings)


@pytest.fixture
def classifier(scoreboard):
    """Classifier feeding the scoreboard fixture."""
    from busmon.aggregator import EventClassifier

    return EventClassifier(scoreboard)


@pytest.fixture
def make_peer():
    """Factory for Peer records around a FakeAccessible."""
    from busmon.models import Peer

    def _make(bus_name: str = ":1.1", **kwargs) -> "Peer":
        return Peer(
            bus_name=bus_name,
            display_name=kwargs.pop("display_name", bus_name),
            accessible=FakeAccessible(**kwargs),
            application=FakeApplication(),
        )

    return _make
