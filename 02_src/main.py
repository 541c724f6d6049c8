"""Main entry point for the bus monitor."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from busmon.api import create_fastapi_app
from busmon.app import Monitor
from busmon.config import MonitorSettings
from busmon.logging_config import setup_logging
from sim import SimulatedBus


def main():
    """Run the monitor against the simulated bus."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    setup_logging()

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))
    events_per_second = float(os.getenv("SIM_EVENTS_PER_SECOND", "200"))

    # Create SIM bus
    sim = SimulatedBus(events_per_second=events_per_second)

    # Set SIM instance for control router
    from busmon.api.routes import control
    control.set_sim_instance(sim)

    monitor = Monitor(sim, MonitorSettings.from_env())
    app = create_fastapi_app(monitor)

    # Run with uvicorn
    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
