"""Tests for the snapshot API."""

import pytest
from fastapi.testclient import TestClient

from busmon.api import create_fastapi_app
from busmon.api.routes import control
from busmon.app import Monitor
from busmon.bus import StreamError
from busmon.models import BusEvent
from sim import SimApplication, SimulatedBus


@pytest.fixture
def client(mixed_bus, settings):
    """Started app around a monitor on the mixed bus."""
    control.set_sim_instance(None)
    mixed_bus.events = [
        BusEvent(interface="org.a11y.atspi.Event.Focus", member="Focus"),
        StreamError("Failed to decode event body"),
    ]
    app = create_fastapi_app(Monitor(mixed_bus, settings))
    with TestClient(app) as test_client:
        yield test_client


class TestObservabilityRoutes:
    """Tests for read-only routes."""

    def test_peers(self, client):
        """Test that every enumerated peer is listed."""
        response = client.get("/api/peers")

        assert response.status_code == 200
        peers = response.json()
        assert {p["bus_name"] for p in peers} == {":1.10", ":1.11", ":1.12"}
        assert all("stats" in p for p in peers)

    def test_scoreboard(self, client):
        """Test the scoreboard shape."""
        response = client.get("/api/scoreboard")

        assert response.status_code == 200
        data = response.json()
        for key in ("last", "peak", "mean", "total", "categories", "tick_history"):
            assert key in data
        assert "focus" in data["categories"]

    def test_snapshot_and_errors(self, client):
        """Test that stream errors reach the error log."""
        # The two scripted items are consumed right after startup.
        for _ in range(50):
            snapshot = client.get("/api/snapshot").json()
            if snapshot["scoreboard"]["total"] == 2:
                break

        assert snapshot["scoreboard"]["total"] == 2
        assert snapshot["scoreboard"]["errors"] == 1
        assert snapshot["error_log"] == ["Failed to decode event body"]
        assert client.get("/api/errors").json() == ["Failed to decode event body"]

    def test_health(self, client):
        """Test the liveness report."""
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["peers"] == 3
        assert data["poller_running"] is True

    def test_not_started(self, mixed_bus, settings):
        """Test that routes refuse to answer before the monitor starts."""
        app = create_fastapi_app(Monitor(mixed_bus, settings))
        client = TestClient(app)  # no context manager: lifespan not run

        assert client.get("/api/snapshot").status_code == 503
        assert client.get("/api/health").json()["status"] == "stopped"

    def test_no_cross_origin_headers(self, client):
        """Test that the API does not advertise cross-origin access."""
        response = client.get("/api/health", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers


class TestControlRoutes:
    """Tests for control routes."""

    def test_sim_not_configured(self, client):
        """Test 404 without a simulated bus."""
        assert client.post("/api/control/sim/start").status_code == 404
        assert client.post("/api/control/sim/stop").status_code == 404

    def test_sim_start_stop(self, settings):
        """Test driving the simulated bus through the API."""
        bus = SimulatedBus([SimApplication(":1.5", "gnome-shell")], seed=1)
        control.set_sim_instance(bus)
        try:
            app = create_fastapi_app(Monitor(bus, settings))
            with TestClient(app) as client:
                assert client.post("/api/control/sim/stop").json() == {"status": "ok"}
                assert client.post("/api/control/sim/start").json() == {"status": "ok"}
                assert client.get("/api/health").json()["peers"] == 1
        finally:
            control.set_sim_instance(None)
