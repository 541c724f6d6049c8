"""Simulated accessibility bus."""

from .sim import ISim, SimApplication, SimulatedBus, default_applications

__all__ = ["ISim", "SimApplication", "SimulatedBus", "default_applications"]
