"""Sensor fusion, altitude estimation, clock checks and math helpers for an autogyro autopilot."""

__version__ = "0.1.0"

__all__ = ["mathutil", "system_info", "fusion", "altitude"]