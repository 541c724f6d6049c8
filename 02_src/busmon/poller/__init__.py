"""Health poller module."""

from .poller import HealthPoller, IHealthPoller, RoundSummary

__all__ = ["HealthPoller", "IHealthPoller", "RoundSummary"]
