"""Event aggregation module."""

from .cadence import CadenceAggregator
from .classifier import (
    INTERFACE_CATEGORIES,
    EventClassifier,
    EventConsumer,
    IEventClassifier,
)
from .counters import AtomicCounter
from .scoreboard import ScoreBoard

__all__ = [
    "AtomicCounter",
    "CadenceAggregator",
    "EventClassifier",
    "EventConsumer",
    "IEventClassifier",
    "INTERFACE_CATEGORIES",
    "ScoreBoard",
]
