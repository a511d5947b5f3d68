# gyropilot

Pure-Python building blocks for the flight computer of a small autogyro:
math helpers, IMU sensor fusion, barometric altitude processing and a
clock-configuration check. The package has no dependencies outside the
standard library.

## Installation

```
pip install .
```

## Modules

- `gyropilot.mathutil`: clamping (`constrain`), interpolation (`lerp`,
  `inverse_lerp`, `map_range`), stick shaping (`apply_expo`,
  `apply_deadband`), angle handling (`normalize_angle`,
  `normalize_angle_positive`, `angle_difference`), vector helpers
  (`safe_sqrt`, `vector2_length`, `vector3_length`, `vector3_normalize`,
  `vector3_dot`, `vector3_cross`, `fast_inv_sqrt`), statistics (`mean`,
  `median`), `quaternion_to_euler` and GPS helpers
  (`gps_distance_meters`, `gps_bearing_degrees`). `vector3_dot` and
  `vector3_cross` take two 3-element sequences; `median` does not modify
  its input.
- `gyropilot.fusion`: `ComplementaryFilter` (gyro weight `alpha`, default
  0.98, clamped to `[0, 1]`), `ExtendedKalmanFilter` (roll, pitch, yaw and
  per-axis gyro bias), `LowPassFilter` (first order, from a cutoff and a
  sample rate) and `MotionDetector` (stillness over a window of gyro
  samples, 20 by default). Filters work on `ImuSample` readings and the
  complementary filter returns `FusedData`. `shortest_angular_distance`
  gives the signed difference between two headings.
- `gyropilot.altitude`: `AltitudeProcessor`, which turns barometer pressure
  into filtered altitude and vertical speed, plus `pressure_to_altitude`.
- `gyropilot.system_info`: `SystemClocks`, `clock_report` (a list of text
  lines) and `validate_clocks`, which raises `ClockConfigError` when the
  system clock is below 100 MHz or the peripheral clock below 48 MHz.

## Example

```python
from gyropilot.fusion import ComplementaryFilter, ImuSample
from gyropilot.altitude import AltitudeProcessor

fusion = ComplementaryFilter(0.98)
sample = ImuSample(roll=0.05, pitch=-0.02, gyro_x=0.1, gyro_y=0.0, gyro_z=0.0)
fused = fusion.update(sample, mag_heading=None, dt=0.01)
print(fused.roll, fused.pitch, fused.yaw)

alt = AltitudeProcessor()
alt.calibrate_ground_level(101325.0)
altitude, vspeed = alt.update(101200.0, 20.0, time_us=40_000)
```

Angles are in radians, pressures in pascals and times in microseconds.

## What this package does not do

It is a library of estimation and math helpers only. It does not read
sensors, drive motors or servos, run a control loop or flight modes, or
provide a command-line program; callers supply the readings and act on
the results themselves.

## Tests

```
pip install .[test]
pytest
```