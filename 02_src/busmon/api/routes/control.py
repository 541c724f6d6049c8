"""Control API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


# Global simulated bus (set by main when running against one)
_sim_instance: Any = None


def set_sim_instance(sim: Any) -> None:
    """Set the global simulated bus."""
    global _sim_instance
    _sim_instance = sim


def get_sim_instance() -> Any:
    """Get the global simulated bus."""
    return _sim_instance


def create_control_router() -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Start generating simulated bus events."""
        if not _sim_instance:
            raise HTTPException(status_code=404, detail="SIM not configured")
        try:
            await _sim_instance.start()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop generating simulated bus events."""
        if not _sim_instance:
            raise HTTPException(status_code=404, detail="SIM not configured")
        try:
            await _sim_instance.stop()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
