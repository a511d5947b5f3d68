"""Barometric altitude and vertical speed estimation."""

from __future__ import annotations

from gyropilot.fusion import LowPassFilter

STANDARD_PRESSURE_PA = 101325.0


def pressure_to_altitude(
    pressure: float, reference_pressure: float = STANDARD_PRESSURE_PA
) -> float:
    """Height in metres above the level where the pressure equals ``reference_pressure``."""
    return 44330.0 * (1.0 - (pressure / reference_pressure) ** 0.1903)


class AltitudeProcessor:
    """Turns barometer readings into filtered altitude and vertical speed."""

    def __init__(self) -> None:
        self.altitude_filter = LowPassFilter(1.0, 25.0)
        self.vspeed_filter = LowPassFilter(2.0, 25.0)
        self.last_altitude = 0.0
        self.last_time_us = 0
        self.ground_pressure = STANDARD_PRESSURE_PA
        self.altitude_offset = 0.0

    def update(
        self, pressure: float, temperature: float, time_us: int
    ) -> tuple[float, float]:
        """Process one reading; returns ``(altitude_m, vertical_speed_mps)``."""
        raw = pressure_to_altitude(pressure, self.ground_pressure)
        altitude = self.altitude_filter.filter(raw) - self.altitude_offset

        vspeed = 0.0
        if self.last_time_us > 0:
            dt = (time_us - self.last_time_us) / 1_000_000.0
            if 0.0 < dt < 1.0:
                vspeed = self.vspeed_filter.filter((altitude - self.last_altitude) / dt)

        self.last_altitude = altitude
        self.last_time_us = time_us
        return altitude, vspeed

    def calibrate_ground_level(self, pressure: float) -> None:
        """Take ``pressure`` as the zero-altitude reference."""
        self.ground_pressure = pressure
        self.altitude_offset = 0.0
        self.altitude_filter.reset()
        self.vspeed_filter.reset()

    def set_altitude(self, known_altitude: float, pressure: float) -> None:
        """Offset the output so that ``pressure`` reads as ``known_altitude``."""
        self.altitude_offset = pressure_to_altitude(pressure) - known_altitude