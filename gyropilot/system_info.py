"""System clock description, reporting and validation."""

from __future__ import annotations

from dataclasses import dataclass

MIN_SYS_FREQ_HZ = 100_000_000
MIN_PERI_FREQ_HZ = 48_000_000


class ClockConfigError(ValueError):
    """Raised when the clock configuration cannot drive the flight hardware."""


@dataclass(frozen=True)
class SystemClocks:
    """Frequencies of the system clock domains, in hertz."""

    sys_freq: int
    peri_freq: int
    usb_freq: int
    adc_freq: int
    rtc_freq: int
    ref_freq: int


def clock_report(clocks: SystemClocks) -> list[str]:
    """Human-readable lines describing each clock domain."""
    return [
        "=== Clock configuration ===",
        f"System clock: {clocks.sys_freq // 1_000_000} MHz",
        f"Peripheral clock: {clocks.peri_freq // 1_000_000} MHz",
        f"USB clock: {clocks.usb_freq // 1_000_000} MHz",
        f"ADC clock: {clocks.adc_freq // 1_000_000} MHz",
        f"RTC clock: {clocks.rtc_freq // 1_000} kHz",
        f"Reference clock: {clocks.ref_freq // 1_000_000} MHz",
    ]


def validate_clocks(clocks: SystemClocks) -> None:
    """Check the clocks are fast enough for DShot600, I2C and UART."""
    if clocks.sys_freq < MIN_SYS_FREQ_HZ:
        raise ClockConfigError("system clock too low for DShot600")
    if clocks.peri_freq < MIN_PERI_FREQ_HZ:
        raise ClockConfigError("peripheral clock too low")