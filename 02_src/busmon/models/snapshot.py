"""Read-only snapshots handed to presentation."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PeerSnapshot:
    """One peer as presentation sees it."""

    bus_name: str
    name: str
    stats: str  # formatted ResponseStats, or a placeholder when contended
    samples: int | None = None  # None when the peer's lock was busy
    available: bool = True


@dataclass(frozen=True)
class ScoreboardSnapshot:
    """Counters, windows and the error log at one instant."""

    last: int
    peak: int
    mean: int
    total: int
    categories: dict[str, int]
    uncategorized: int
    errors: int
    tick_history: list[int]
    seconds_observed: int
    error_log: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything a redraw needs."""

    scoreboard: ScoreboardSnapshot
    peers: list[PeerSnapshot]
