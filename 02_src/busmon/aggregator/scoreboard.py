"""ScoreBoard: process-wide event tallies and rolling windows."""

import threading
from collections import OrderedDict, deque

from ..config import MonitorSettings
from ..models import EventCategory, ScoreboardSnapshot
from .counters import AtomicCounter


class ScoreBoard:
    """Classification counters plus the tick and per-second histories.

    Counters take the per-event path and are bumped without the board lock.
    The windows and the error log change at most once per tick or second
    and share one coarser lock.
    """

    def __init__(self, settings: MonitorSettings | None = None):
        self._settings = settings or MonitorSettings()

        self.categories: dict[EventCategory, AtomicCounter] = {
            category: AtomicCounter() for category in EventCategory
        }
        self.uncategorized = AtomicCounter()
        self.errors = AtomicCounter()
        self.tick = AtomicCounter()
        self.second = AtomicCounter()
        self.total = AtomicCounter()

        self._lock = threading.Lock()
        self._tick_history: deque[int] = deque(maxlen=self._settings.tick_history_capacity)
        self._second_history: deque[int] = deque(maxlen=self._settings.second_history_capacity)
        self._error_log: OrderedDict[str, None] = OrderedDict()
        self._seconds_observed = 0
        self._last = 0
        self._peak = 0
        self._mean = 0

    def _bump_windows(self) -> None:
        self.tick.increment()
        self.second.increment()
        self.total.increment()

    def count(self, category: EventCategory | None) -> None:
        """Tally one well-formed event; None means no category matched."""
        if category is None:
            self.uncategorized.increment()
        else:
            self.categories[category].increment()
        self._bump_windows()

    def count_error(self, text: str) -> None:
        """Tally one stream error and remember its text once."""
        self.errors.increment()
        with self._lock:
            if text in self._error_log:
                self._error_log.move_to_end(text)
            else:
                self._error_log[text] = None
                if len(self._error_log) > self._settings.error_log_capacity:
                    self._error_log.popitem(last=False)
        self._bump_windows()

    def drain_tick(self) -> int:
        """Close the current tick; newest count goes to the front of the history."""
        value = self.tick.reset()
        with self._lock:
            self._tick_history.appendleft(value)
        return value

    def drain_second(self) -> int:
        """Close the current second and refresh last/peak/mean."""
        value = self.second.reset()
        with self._lock:
            self._second_history.append(value)
            self._seconds_observed += 1
            self._last = value
            if value > self._peak:
                self._peak = value
            self._mean = self.total.value // self._seconds_observed
        return value

    @property
    def tick_history(self) -> list[int]:
        with self._lock:
            return list(self._tick_history)

    @property
    def second_history(self) -> list[int]:
        with self._lock:
            return list(self._second_history)

    @property
    def error_log(self) -> list[str]:
        """Distinct error texts, oldest first."""
        with self._lock:
            return list(self._error_log)

    def snapshot(self) -> ScoreboardSnapshot:
        """Copy of everything presentation reads."""
        with self._lock:
            tick_history = list(self._tick_history)
            error_log = list(self._error_log)
            last, peak, mean = self._last, self._peak, self._mean
            seconds_observed = self._seconds_observed

        return ScoreboardSnapshot(
            last=last,
            peak=peak,
            mean=mean,
            total=self.total.value,
            categories={
                category.value: counter.value
                for category, counter in self.categories.items()
            },
            uncategorized=self.uncategorized.value,
            errors=self.errors.value,
            tick_history=tick_history,
            seconds_observed=seconds_observed,
            error_log=error_log,
        )
