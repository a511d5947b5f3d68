"""Numeric helpers for control signals, angles, vectors and GPS coordinates."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable, Sequence

FLOAT32_EPSILON = 1.1920929e-07
EARTH_RADIUS_M = 6371000.0
TWO_PI = 2.0 * math.pi

Vector3 = tuple[float, float, float]


def constrain(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def apply_expo(value: float, expo: float) -> float:
    """Apply an exponential curve to a control input; ``expo`` 0 is linear, 1 is full."""
    expo = constrain(expo, 0.0, 1.0)
    magnitude = abs(value)
    shaped = magnitude * (magnitude * expo + 1.0 - expo)
    return -shaped if value < 0.0 else shaped


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between ``a`` and ``b`` with ``t`` clamped to ``[0, 1]``."""
    return a + (b - a) * constrain(t, 0.0, 1.0)


def inverse_lerp(a: float, b: float, value: float) -> float:
    """Position of ``value`` between ``a`` and ``b`` as a fraction in ``[0, 1]``."""
    if abs(b - a) < FLOAT32_EPSILON:
        return 0.0
    return constrain((value - a) / (b - a), 0.0, 1.0)


def map_range(
    value: float, in_min: float, in_max: float, out_min: float, out_max: float
) -> float:
    """Map ``value`` from one range onto another, clamping to the output range."""
    return lerp(out_min, out_max, inverse_lerp(in_min, in_max, value))


def apply_deadband(value: float, deadband: float) -> float:
    """Zero out inputs inside the deadband and rescale the rest to the full range."""
    if abs(value) < deadband:
        return 0.0
    if value > 0.0:
        return map_range(value, deadband, 1.0, 0.0, 1.0)
    return map_range(value, -1.0, -deadband, -1.0, 0.0)


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians into ``(-pi, pi]``."""
    wrapped = angle % TWO_PI
    if wrapped > math.pi:
        wrapped -= TWO_PI
    return wrapped


def normalize_angle_positive(angle: float) -> float:
    """Wrap an angle in radians into ``[0, 2*pi)``."""
    return angle % TWO_PI


def angle_difference(angle1: float, angle2: float) -> float:
    """Shortest signed rotation that takes ``angle1`` to ``angle2``."""
    return normalize_angle(angle2 - angle1)


def safe_sqrt(value: float) -> float:
    """Square root that yields 0 for zero or negative input."""
    if value <= 0.0:
        return 0.0
    return math.sqrt(value)


def vector2_length(x: float, y: float) -> float:
    """Euclidean length of a 2D vector."""
    return safe_sqrt(x * x + y * y)


def vector3_length(x: float, y: float, z: float) -> float:
    """Euclidean length of a 3D vector."""
    return safe_sqrt(x * x + y * y + z * z)


def vector3_normalize(x: float, y: float, z: float) -> Vector3:
    """Unit vector in the same direction; the zero vector stays zero."""
    length = vector3_length(x, y, z)
    if length < FLOAT32_EPSILON:
        return (0.0, 0.0, 0.0)
    return (x / length, y / length, z / length)


def vector3_dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product of two 3D vectors."""
    ax, ay, az = a
    bx, by, bz = b
    return ax * bx + ay * by + az * bz


def vector3_cross(a: Sequence[float], b: Sequence[float]) -> Vector3:
    """Cross product of two 3D vectors."""
    ax, ay, az = a
    bx, by, bz = b
    return (ay * bz - az * by, az * bx - ax * bz, ax * by - ay * bx)


def fast_inv_sqrt(x: float) -> float:
    """Approximate ``1/sqrt(x)`` with the bit-level trick and one Newton step."""
    (bits,) = struct.unpack("<I", struct.pack("<f", x))
    bits = (0x5F3759DF - (bits >> 1)) & 0xFFFFFFFF
    (y,) = struct.unpack("<f", struct.pack("<I", bits))
    return y * (1.5 - 0.5 * x * y * y)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0 for no values."""
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)


def median(values: Iterable[float]) -> float:
    """Median; 0 for no values. The input is not modified."""
    items = sorted(values)
    if not items:
        return 0.0
    mid = len(items) // 2
    if len(items) % 2 == 0:
        return (items[mid - 1] + items[mid]) / 2.0
    return items[mid]


def quaternion_to_euler(w: float, x: float, y: float, z: float) -> Vector3:
    """Convert a unit quaternion to ``(roll, pitch, yaw)`` in radians."""
    roll = math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))

    sinp = 2.0 * (w * y - z * x)
    if abs(sinp) >= 1.0:
        pitch = math.copysign(math.pi / 2.0, sinp)
    else:
        pitch = math.asin(sinp)

    yaw = math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))
    return (roll, pitch, yaw)


def gps_distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in metres between two coordinates (equirectangular, short range)."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    x = delta_lon * math.cos((lat1_rad + lat2_rad) / 2.0)
    y = delta_lat
    return math.hypot(x, y) * EARTH_RADIUS_M


def gps_bearing_degrees(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial bearing from the first coordinate to the second, in ``[0, 360)`` degrees."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lon = math.radians(lon2 - lon1)

    x = math.sin(delta_lon) * math.cos(lat2_rad)
    y = math.cos(lat1_rad) * math.sin(lat2_rad) - math.sin(lat1_rad) * math.cos(
        lat2_rad
    ) * math.cos(delta_lon)

    bearing = math.degrees(math.atan2(x, y))
    return (bearing + 360.0) % 360.0