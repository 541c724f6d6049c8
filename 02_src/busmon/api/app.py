"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Monitor
from .routes import control, observability


def create_fastapi_app(monitor: Monitor) -> FastAPI:
    """Create and configure FastAPI application around a monitor."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage monitor lifespan."""
        await monitor.start()
        sim_instance = control.get_sim_instance()
        if sim_instance:
            await sim_instance.start()
        yield
        await monitor.stop()
        if sim_instance:
            await sim_instance.stop()

    fastapi_app = FastAPI(
        title="Bus Monitor API",
        description="Live telemetry for the accessibility bus",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.include_router(observability.create_observability_router(monitor))
    fastapi_app.include_router(control.create_control_router())

    return fastapi_app
