"""Runtime services shared by the expansion engine."""

from . import telemetry

__all__ = ["telemetry"]
