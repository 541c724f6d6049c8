"""Counters safe to bump from any task or thread."""

import threading


class AtomicCounter:
    """An integer counter whose increment and read-and-reset are indivisible.

    Each counter has its own lock held only for the integer update, so
    unrelated counters never contend.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self, value: int = 0):
        self._value = value
        self._lock = threading.Lock()

    def increment(self, amount: int = 1) -> int:
        """Add ``amount`` and return the new value."""
        with self._lock:
            self._value += amount
            return self._value

    @property
    def value(self) -> int:
        return self._value

    def reset(self) -> int:
        """Set to zero and return what had accumulated since the last reset."""
        with self._lock:
            value, self._value = self._value, 0
            return value

    def __repr__(self) -> str:
        return f"AtomicCounter({self._value})"
