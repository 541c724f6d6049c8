"""Tests for configuration and logging setup."""

import json
import logging
import logging.handlers
import sys

import pytest

from busmon.config import MonitorSettings
from busmon.logging_config import JSONFormatter, setup_logging


class TestMonitorSettings:
    """Tests for MonitorSettings."""

    def test_defaults(self):
        """Test the default cadences."""
        settings = MonitorSettings()

        assert settings.poll_interval == 2.0
        assert settings.poll_pacing == 0.02
        assert settings.probe_timeout == 0.05
        assert settings.tick_interval == 0.1
        assert settings.second_interval == 1.0
        assert settings.discovery_mode == "registry"

    def test_from_env(self, monkeypatch):
        """Test that BUSMON_* variables override defaults."""
        monkeypatch.setenv("BUSMON_PROBE_TIMEOUT", "0.2")
        monkeypatch.setenv("BUSMON_TICK_HISTORY", "64")
        monkeypatch.setenv("BUSMON_DISCOVERY_MODE", "scan")

        settings = MonitorSettings.from_env()

        assert settings.probe_timeout == 0.2
        assert settings.tick_history_capacity == 64
        assert settings.discovery_mode == "scan"
        assert settings.poll_interval == 2.0

    def test_unknown_discovery_mode(self):
        """Test that an unknown discovery mode is rejected."""
        with pytest.raises(ValueError):
            MonitorSettings(discovery_mode="guess")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"probe_timeout": 0},
            {"tick_interval": -1},
            {"poll_pacing": -0.1},
            {"tick_history_capacity": 0},
            {"error_log_capacity": 0},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test that nonsensical values are rejected."""
        with pytest.raises(ValueError):
            MonitorSettings(**kwargs)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_with_context(self):
        """Test that context passed via extra lands in the JSON line."""
        record = logging.LogRecord(
            name="busmon.directory",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="Peer enumeration finished: %d peers",
            args=(3,),
            exc_info=None,
        )
        record.context = {"mode": "registry"}

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "busmon.directory"
        assert data["message"] == "Peer enumeration finished: 3 peers"
        assert data["context"] == {"mode": "registry"}
        assert "exception" not in data

    def test_exception_included(self):
        """Test that exc_info is rendered into the JSON line."""
        try:
            raise RuntimeError("bus gone")
        except RuntimeError:
            record = logging.getLogger("busmon.poller").makeRecord(
                "busmon.poller", logging.ERROR, __file__, 1, "Probe failed", (), sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: bus gone" in data["exception"]
        assert "context" not in data


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers = handlers
        root.setLevel(level)

    def test_writes_json_lines(self, tmp_path):
        """Test that records land in the log file as JSON with the given level."""
        log_file = tmp_path / "logs" / "busmon.log"
        setup_logging(log_level="debug", log_file=str(log_file), console=False)

        logging.getLogger("busmon.test").debug("hello", extra={"context": {"peers": 2}})
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert line["level"] == "DEBUG"
        assert line["message"] == "hello"
        assert line["context"] == {"peers": 2}
        assert logging.getLogger().level == logging.DEBUG

    def test_console_handler_optional(self, tmp_path):
        """Test that console output can be switched off."""
        setup_logging(log_file=str(tmp_path / "busmon.log"), console=False)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)
