"""Statistics module."""

from .response_stats import ResponseStats, format_duration

__all__ = ["ResponseStats", "format_duration"]
