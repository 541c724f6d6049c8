"""Accessibility bus monitor."""

from .aggregator import (
    AtomicCounter,
    CadenceAggregator,
    EventClassifier,
    EventConsumer,
    ScoreBoard,
)
from .app import IMonitor, Monitor
from .bus import (
    BusError,
    BusUnavailableError,
    IBusConnection,
    InvalidAddressError,
    StreamError,
)
from .config import MonitorSettings
from .directory import IPeerDirectory, PeerDirectory
from .models import (
    BusEvent,
    DashboardSnapshot,
    EventCategory,
    Peer,
    PeerSnapshot,
    ScoreboardSnapshot,
)
from .poller import HealthPoller, IHealthPoller, RoundSummary
from .stats import ResponseStats, format_duration

__all__ = [
    # Monitor
    "Monitor",
    "IMonitor",
    "MonitorSettings",
    # Models
    "BusEvent",
    "EventCategory",
    "Peer",
    "PeerSnapshot",
    "ScoreboardSnapshot",
    "DashboardSnapshot",
    # Transport
    "IBusConnection",
    "BusError",
    "BusUnavailableError",
    "InvalidAddressError",
    "StreamError",
    # Components
    "ResponseStats",
    "format_duration",
    "IPeerDirectory",
    "PeerDirectory",
    "IHealthPoller",
    "HealthPoller",
    "RoundSummary",
    "AtomicCounter",
    "ScoreBoard",
    "EventClassifier",
    "EventConsumer",
    "CadenceAggregator",
]
