"""Core data models for the bus monitor."""

from .events import BusEvent, EventCategory
from .snapshot import DashboardSnapshot, PeerSnapshot, ScoreboardSnapshot
from .peer import BUSY_PLACEHOLDER, Peer

__all__ = [
    # Events
    "BusEvent",
    "EventCategory",
    # Peers
    "Peer",
    "BUSY_PLACEHOLDER",
    # Snapshots
    "DashboardSnapshot",
    "PeerSnapshot",
    "ScoreboardSnapshot",
]
