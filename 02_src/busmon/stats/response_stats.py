"""Online round-trip latency statistics.

Durations are integer nanoseconds throughout (``time.perf_counter_ns``).
"""

import math
from dataclasses import asdict, dataclass

NANOS_PER_MICRO = 1_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_SECOND = 1_000_000_000


def format_duration(nanos: int) -> str:
    """Render a duration at the coarsest unit whose integral part is nonzero.

    The value is truncated to the next finer unit first, so the three
    decimals never round up across a unit boundary.
    """
    if nanos >= NANOS_PER_SECOND:
        return f"{nanos // NANOS_PER_MILLI / 1_000:.3f}s"
    if nanos >= NANOS_PER_MILLI:
        return f"{nanos // NANOS_PER_MICRO / 1_000:.3f}ms"
    if nanos >= NANOS_PER_MICRO:
        return f"{nanos / 1_000:.3f}us"
    return f"{max(nanos, 0)}ns"


@dataclass
class ResponseStats:
    """Running distribution of one peer's round-trip times.

    The variance accumulator measures each sample against the mean *after*
    that sample was folded in, and uses the absolute difference. This is
    not Welford's recurrence; it is kept so identical sample sequences give
    identical ``std_dev`` output.
    """

    samples: int = 0
    sum: int = 0
    min: int | None = None
    max: int | None = None
    mean: int | None = None
    sum_sq_dev: int = 0
    std_dev: int | None = None

    def update(self, sample: int) -> None:
        """Fold one duration sample into the statistics in O(1)."""
        if sample < 0:
            raise ValueError(f"Duration sample must not be negative: {sample}")

        if self.min is None or sample < self.min:
            self.min = sample
        if self.max is None or sample > self.max:
            self.max = sample

        self.samples += 1
        self.sum += sample
        self.mean = self.sum // self.samples

        deviation = abs(sample - self.mean)
        self.sum_sq_dev += deviation * deviation
        self.std_dev = round(math.sqrt(self.variance))

    @property
    def variance(self) -> int:
        """Population variance in ns², zero before any sample."""
        if not self.samples:
            return 0
        return self.sum_sq_dev // self.samples

    def copy(self) -> "ResponseStats":
        """Detached copy, safe to read without the owner's lock."""
        return ResponseStats(**asdict(self))

    def as_dict(self) -> dict:
        """Plain values with unset fields reported as zero."""
        return {
            "samples": self.samples,
            "min_ns": self.min or 0,
            "max_ns": self.max or 0,
            "mean_ns": self.mean or 0,
            "std_dev_ns": self.std_dev or 0,
        }

    def __str__(self) -> str:
        return (
            f"min: {format_duration(self.min or 0)} "
            f"max: {format_duration(self.max or 0)} "
            f"avg: {format_duration(self.mean or 0)} "
            f"σ: {format_duration(self.std_dev or 0)}"
        )
