"""Sensor fusion: complementary and Kalman attitude filters, smoothing and stillness detection."""

from __future__ import annotations

import math
import statistics
from collections import deque
from dataclasses import dataclass

from gyropilot.mathutil import constrain, normalize_angle

HALF_PI = math.pi / 2.0

Angles = tuple[float, float, float]


def shortest_angular_distance(origin: float, target: float) -> float:
    """Signed difference ``target - origin`` folded once into ``[-pi, pi]``."""
    diff = target - origin
    if diff > math.pi:
        return diff - 2.0 * math.pi
    if diff < -math.pi:
        return diff + 2.0 * math.pi
    return diff


@dataclass(frozen=True)
class ImuSample:
    """One IMU reading: accelerometer-derived angles and gyro rates (radians, rad/s)."""

    roll: float = 0.0
    pitch: float = 0.0
    gyro_x: float = 0.0
    gyro_y: float = 0.0
    gyro_z: float = 0.0


@dataclass(frozen=True)
class FusedData:
    """Fused attitude (radians) and angular rates (rad/s)."""

    roll: float
    pitch: float
    yaw: float
    roll_rate: float
    pitch_rate: float
    yaw_rate: float


class ComplementaryFilter:
    """Blends integrated gyro rates with accelerometer and magnetometer angles."""

    def __init__(self, alpha: float = 0.98) -> None:
        self._alpha = constrain(alpha, 0.0, 1.0)
        self.roll = 0.0
        self.pitch = 0.0
        self.yaw = 0.0
        self.initialized = False

    @property
    def alpha(self) -> float:
        """Weight given to the gyro, in ``[0, 1]``."""
        return self._alpha

    @alpha.setter
    def alpha(self, value: float) -> None:
        self._alpha = constrain(value, 0.0, 1.0)

    def _result(self, imu: ImuSample) -> FusedData:
        return FusedData(
            roll=self.roll,
            pitch=self.pitch,
            yaw=self.yaw,
            roll_rate=imu.gyro_x,
            pitch_rate=imu.gyro_y,
            yaw_rate=imu.gyro_z,
        )

    def update(
        self, imu: ImuSample, mag_heading: float | None = None, dt: float = 0.01
    ) -> FusedData:
        """Fold one IMU sample (and optional magnetic heading) into the estimate."""
        if not self.initialized:
            self.roll = imu.roll
            self.pitch = imu.pitch
            self.yaw = 0.0 if mag_heading is None else mag_heading
            self.initialized = True
            return self._result(imu)

        alpha = self._alpha
        gyro_roll = self.roll + imu.gyro_x * dt
        gyro_pitch = self.pitch + imu.gyro_y * dt
        gyro_yaw = self.yaw + imu.gyro_z * dt

        self.roll = alpha * gyro_roll + (1.0 - alpha) * imu.roll
        self.pitch = alpha * gyro_pitch + (1.0 - alpha) * imu.pitch

        if mag_heading is not None:
            yaw_diff = shortest_angular_distance(self.yaw, mag_heading)
            self.yaw = normalize_angle(self.yaw + (1.0 - alpha) * yaw_diff)
        else:
            self.yaw = normalize_angle(gyro_yaw)

        self.roll = constrain(self.roll, -math.pi, math.pi)
        self.pitch = constrain(self.pitch, -HALF_PI, HALF_PI)
        return self._result(imu)

    def reset(self) -> None:
        """Zero the angles; the next sample re-initialises the filter."""
        self.roll = 0.0
        self.pitch = 0.0
        self.yaw = 0.0
        self.initialized = False

    def angles(self) -> Angles:
        """Current ``(roll, pitch, yaw)``."""
        return (self.roll, self.pitch, self.yaw)


class ExtendedKalmanFilter:
    """Simplified attitude Kalman filter with gyro bias states.

    State is ``[roll, pitch, yaw, bias_x, bias_y, bias_z]``.
    """

    STATE_SIZE = 6

    def __init__(self) -> None:
        n = self.STATE_SIZE
        self.state = [0.0] * n
        self.covariance = [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]
        self.process_noise = [0.001, 0.001, 0.001, 0.0001, 0.0001, 0.0001]
        self.measurement_noise = [0.1, 0.1, 0.2]

    def predict(self, gyro_x: float, gyro_y: float, gyro_z: float, dt: float) -> None:
        """Propagate the attitude with bias-corrected gyro rates."""
        rates = (gyro_x, gyro_y, gyro_z)
        for axis, rate in enumerate(rates):
            self.state[axis] += (rate - self.state[axis + 3]) * dt

        self.state[0] = normalize_angle(self.state[0])
        self.state[1] = constrain(self.state[1], -HALF_PI, HALF_PI)
        self.state[2] = normalize_angle(self.state[2])

        for i, noise in enumerate(self.process_noise):
            self.covariance[i][i] += noise * dt

    def _correct(self, axis: float, innovation: float) -> None:
        variance = self.covariance[axis][axis]
        gain = variance / (variance + self.measurement_noise[axis])
        self.state[axis] += gain * innovation
        self.covariance[axis][axis] = variance * (1.0 - gain)

    def update_accel(self, accel_roll: float, accel_pitch: float) -> None:
        """Correct roll and pitch with accelerometer angles."""
        roll_innovation = accel_roll - self.state[0]
        pitch_innovation = accel_pitch - self.state[1]
        self._correct(0, roll_innovation)
        self._correct(1, pitch_innovation)

    def update_mag(self, mag_yaw: float) -> None:
        """Correct yaw with a magnetometer heading."""
        self._correct(2, shortest_angular_distance(self.state[2], mag_yaw))
        self.state[2] = normalize_angle(self.state[2])

    def angles(self) -> Angles:
        """Filtered ``(roll, pitch, yaw)``."""
        return (self.state[0], self.state[1], self.state[2])

    def gyro_bias(self) -> Angles:
        """Estimated gyro bias per axis."""
        return (self.state[3], self.state[4], self.state[5])


class LowPassFilter:
    """First-order low-pass filter."""

    def __init__(self, cutoff_hz: float, sample_rate_hz: float) -> None:
        if cutoff_hz <= 0.0 or sample_rate_hz <= 0.0:
            raise ValueError("cutoff and sample rate must be positive")
        rc = 1.0 / (2.0 * math.pi * cutoff_hz)
        dt = 1.0 / sample_rate_hz
        self.cutoff_hz = cutoff_hz
        self.alpha = dt / (rc + dt)
        self.output = 0.0
        self.initialized = False

    def filter(self, value: float) -> float:
        """Feed one sample and return the smoothed output."""
        if not self.initialized:
            self.output = value
            self.initialized = True
        else:
            self.output = self.alpha * value + (1.0 - self.alpha) * self.output
        return self.output

    def reset(self) -> None:
        """Forget history; the next sample passes straight through."""
        self.output = 0.0
        self.initialized = False


class MotionDetector:
    """Reports stillness when gyro spread stays below a threshold over a window."""

    def __init__(self, threshold: float, window_size: int = 20) -> None:
        if window_size < 1:
            raise ValueError("window_size must be at least 1")
        self.threshold = threshold
        self.window_size = window_size
        self._axes = tuple(deque(maxlen=window_size) for _ in range(3))

    @staticmethod
    def _spread(samples: deque) -> float:
        if len(samples) < 2:
            return 0.0
        return statistics.stdev(samples)

    def update(self, gyro_x: float, gyro_y: float, gyro_z: float) -> bool:
        """Add a gyro sample; True once the window is full and every axis is still."""
        for buffer, value in zip(self._axes, (gyro_x, gyro_y, gyro_z)):
            buffer.append(value)
        if len(self._axes[0]) < self.window_size:
            return False
        return all(self._spread(buffer) < self.threshold for buffer in self._axes)