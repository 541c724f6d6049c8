"""Observability API routes: read-only snapshots for dashboards."""

from dataclasses import asdict

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Monitor


class ScoreboardResponse(BaseModel):
    """Response model for the scoreboard."""

    last: int
    peak: int
    mean: int
    total: int
    categories: dict[str, int]
    uncategorized: int
    errors: int
    tick_history: list[int]
    seconds_observed: int


class PeerResponse(BaseModel):
    """Response model for one peer."""

    bus_name: str
    name: str
    stats: str
    samples: int | None
    available: bool


class SnapshotResponse(BaseModel):
    """Response model for a full dashboard snapshot."""

    scoreboard: ScoreboardResponse
    peers: list[PeerResponse]
    error_log: list[str]


class HealthResponse(BaseModel):
    """Response model for monitor liveness."""

    status: str
    peers: int
    consumer_running: bool
    poller_running: bool
    poll_rounds: int
    events_consumed: int


def create_observability_router(monitor: Monitor) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    def _require_started() -> None:
        if not monitor.started:
            raise HTTPException(status_code=503, detail="Monitor not started")

    @router.get("/snapshot", response_model=SnapshotResponse)
    async def get_snapshot() -> dict:
        """Everything a redraw needs in one call."""
        _require_started()
        snapshot = monitor.snapshot()
        scoreboard = asdict(snapshot.scoreboard)
        error_log = scoreboard.pop("error_log")
        return {
            "scoreboard": scoreboard,
            "peers": [asdict(peer) for peer in snapshot.peers],
            "error_log": error_log,
        }

    @router.get("/scoreboard", response_model=ScoreboardResponse)
    async def get_scoreboard() -> dict:
        """Summary values, category counters and the tick history."""
        _require_started()
        scoreboard = asdict(monitor.scoreboard.snapshot())
        scoreboard.pop("error_log")
        return scoreboard

    @router.get("/peers", response_model=list[PeerResponse])
    async def get_peers() -> list[dict]:
        """Per-peer display names and formatted latency statistics."""
        _require_started()
        return [asdict(peer.try_snapshot()) for peer in monitor.directory.peers]

    @router.get("/errors", response_model=list[str])
    async def get_errors() -> list[str]:
        """Distinct stream error texts, oldest first."""
        _require_started()
        return monitor.scoreboard.error_log

    @router.get("/health", response_model=HealthResponse)
    async def get_health() -> dict:
        """Liveness of the monitor workers."""
        if not monitor.started:
            return {
                "status": "stopped",
                "peers": 0,
                "consumer_running": False,
                "poller_running": False,
                "poll_rounds": 0,
                "events_consumed": 0,
            }
        consumer_running = monitor.consumer.running
        poller_running = monitor.poller.running
        return {
            "status": "ok" if consumer_running and poller_running else "degraded",
            "peers": len(monitor.directory),
            "consumer_running": consumer_running,
            "poller_running": poller_running,
            "poll_rounds": monitor.poller.rounds,
            "events_consumed": monitor.consumer.consumed,
        }

    return router
