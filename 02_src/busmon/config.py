"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "busmon.log"

LOGS_DIR.mkdir(parents=True, exist_ok=True)

ACCESSIBLE_ROOT_PATH = "/org/a11y/atspi/accessible/root"
REGISTRY_BUS_NAME = "org.a11y.atspi.Registry"

DISCOVERY_MODES = ("registry", "scan")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


@dataclass
class MonitorSettings:
    """Cadences, timeouts and window sizes for the monitor workers.

    All durations are in seconds.
    """

    poll_interval: float = 2.0
    poll_pacing: float = 0.02
    probe_timeout: float = 0.05
    tick_interval: float = 0.1
    second_interval: float = 1.0
    tick_history_capacity: int = 200
    second_history_capacity: int = 900
    error_log_capacity: int = 256
    discovery_mode: str = "registry"
    scan_prefix: str = ":"

    def __post_init__(self) -> None:
        if self.discovery_mode not in DISCOVERY_MODES:
            raise ValueError(f"Unknown discovery mode: {self.discovery_mode!r}")
        for field_name in (
            "poll_interval",
            "probe_timeout",
            "tick_interval",
            "second_interval",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"{field_name} must be positive")
        if self.poll_pacing < 0:
            raise ValueError("poll_pacing must not be negative")
        for field_name in (
            "tick_history_capacity",
            "second_history_capacity",
            "error_log_capacity",
        ):
            if getattr(self, field_name) < 1:
                raise ValueError(f"{field_name} must be at least 1")

    @classmethod
    def from_env(cls) -> "MonitorSettings":
        """Build settings from BUSMON_* environment variables."""
        return cls(
            poll_interval=_env_float("BUSMON_POLL_INTERVAL", 2.0),
            poll_pacing=_env_float("BUSMON_POLL_PACING", 0.02),
            probe_timeout=_env_float("BUSMON_PROBE_TIMEOUT", 0.05),
            tick_interval=_env_float("BUSMON_TICK_INTERVAL", 0.1),
            second_interval=_env_float("BUSMON_SECOND_INTERVAL", 1.0),
            tick_history_capacity=_env_int("BUSMON_TICK_HISTORY", 200),
            second_history_capacity=_env_int("BUSMON_SECOND_HISTORY", 900),
            error_log_capacity=_env_int("BUSMON_ERROR_LOG_CAPACITY", 256),
            discovery_mode=os.getenv("BUSMON_DISCOVERY_MODE", "registry"),
            scan_prefix=os.getenv("BUSMON_SCAN_PREFIX", ":"),
        )
