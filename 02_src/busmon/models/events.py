"""Event-related data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class EventCategory(str, Enum):
    """Mutually exclusive classifications of accessibility events."""

    MOUSE = "mouse"
    KEYBOARD = "keyboard"
    FOCUS = "focus"
    WINDOW = "window"
    DOCUMENT = "document"
    OBJECT = "object"
    TERMINAL = "terminal"
    CACHE = "cache"
    LISTENER = "listener"
    AVAILABLE = "available"


@dataclass
class BusEvent:
    """A signal received on the event subscription."""

    interface: str  # e.g. "org.a11y.atspi.Event.Object"
    member: str  # e.g. "StateChanged"
    sender: str = ""
    path: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
