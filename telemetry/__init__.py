"""Telemetry snapshot model, demo source, and tick driver."""

from telemetry.simulation import SimulatedTelemetrySource
from telemetry.snapshot import TelemetrySnapshot
from telemetry.ticker import TelemetryTicker

__all__ = ["SimulatedTelemetrySource", "TelemetrySnapshot", "TelemetryTicker"]
