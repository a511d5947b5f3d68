import math

import pytest

from gyropilot.fusion import (
    ComplementaryFilter,
    ExtendedKalmanFilter,
    FusedData,
    ImuSample,
    LowPassFilter,
    MotionDetector,
    shortest_angular_distance,
)


def test_shortest_distance_plain():
    assert shortest_angular_distance(0.1, 0.4) == pytest.approx(0.3)


def test_shortest_distance_wraps_positive():
    d = shortest_angular_distance(-3.0, 3.0)
    assert d == pytest.approx(6.0 - 2.0 * math.pi)
    assert d < 0


def test_shortest_distance_wraps_negative():
    d = shortest_angular_distance(3.0, -3.0)
    assert d == pytest.approx(2.0 * math.pi - 6.0)
    assert d > 0


def test_complementary_first_update_uses_accel_and_mag():
    f = ComplementaryFilter()
    imu = ImuSample(roll=0.2, pitch=-0.1, gyro_x=1.0, gyro_y=2.0, gyro_z=3.0)
    out = f.update(imu, 0.5, 0.01)
    assert out == FusedData(0.2, -0.1, 0.5, 1.0, 2.0, 3.0)
    assert f.angles() == (0.2, -0.1, 0.5)


def test_complementary_first_update_without_mag_zero_yaw():
    f = ComplementaryFilter()
    out = f.update(ImuSample(roll=0.3), None, 0.01)
    assert out.yaw == 0.0


def test_alpha_default_and_clamped():
    assert ComplementaryFilter().alpha == 0.98
    assert ComplementaryFilter(1.5).alpha == 1.0
    f = ComplementaryFilter(0.5)
    f.alpha = -2.0
    assert f.alpha == 0.0


def test_pure_gyro_integration():
    f = ComplementaryFilter(1.0)
    f.update(ImuSample(), None, 0.01)
    out = f.update(ImuSample(roll=0.9, gyro_x=1.0, gyro_z=2.0), None, 0.1)
    assert out.roll == pytest.approx(0.1)
    assert out.yaw == pytest.approx(0.2)


def test_pure_accel_tracking():
    f = ComplementaryFilter(0.0)
    f.update(ImuSample(), None, 0.01)
    out = f.update(ImuSample(roll=0.4, pitch=0.3, gyro_x=5.0), 1.0, 0.1)
    assert out.roll == pytest.approx(0.4)
    assert out.pitch == pytest.approx(0.3)
    assert out.yaw == pytest.approx(1.0)


def test_pitch_is_clamped():
    f = ComplementaryFilter(1.0)
    f.update(ImuSample(pitch=1.5), None, 0.01)
    out = f.update(ImuSample(gyro_y=10.0), None, 1.0)
    assert out.pitch == pytest.approx(math.pi / 2.0)


def test_reset_reinitialises():
    f = ComplementaryFilter()
    f.update(ImuSample(roll=0.5), None, 0.01)
    f.reset()
    assert f.angles() == (0.0, 0.0, 0.0)
    out = f.update(ImuSample(roll=-0.2), None, 0.01)
    assert out.roll == -0.2


def test_ekf_initial_state():
    ekf = ExtendedKalmanFilter()
    assert ekf.angles() == (0.0, 0.0, 0.0)
    assert ekf.gyro_bias() == (0.0, 0.0, 0.0)


def test_ekf_predict_integrates():
    ekf = ExtendedKalmanFilter()
    ekf.predict(1.0, 0.5, -1.0, 0.1)
    roll, pitch, yaw = ekf.angles()
    assert roll == pytest.approx(0.1)
    assert pitch == pytest.approx(0.05)
    assert yaw == pytest.approx(-0.1)


def test_ekf_accel_update_moves_partway():
    ekf = ExtendedKalmanFilter()
    ekf.update_accel(0.5, -0.5)
    roll, pitch, _ = ekf.angles()
    assert 0.0 < roll < 0.5
    assert -0.5 < pitch < 0.0


def test_ekf_repeated_updates_converge():
    ekf = ExtendedKalmanFilter()
    for _ in range(200):
        ekf.update_mag(1.0)
        ekf.update_accel(0.3, 0.2)
    roll, pitch, yaw = ekf.angles()
    assert roll == pytest.approx(0.3, abs=0.01)
    assert pitch == pytest.approx(0.2, abs=0.01)
    assert yaw == pytest.approx(1.0, abs=0.01)


def test_low_pass_first_sample_passes():
    lpf = LowPassFilter(1.0, 25.0)
    assert lpf.filter(7.0) == 7.0


def test_low_pass_smooths_and_converges():
    lpf = LowPassFilter(1.0, 25.0)
    lpf.filter(0.0)
    second = lpf.filter(10.0)
    assert 0.0 < second < 10.0
    for _ in range(500):
        value = lpf.filter(10.0)
    assert value == pytest.approx(10.0)


def test_low_pass_reset():
    lpf = LowPassFilter(1.0, 25.0)
    lpf.filter(3.0)
    lpf.filter(5.0)
    lpf.reset()
    assert lpf.filter(-4.0) == -4.0


def test_low_pass_rejects_bad_rates():
    with pytest.raises(ValueError):
        LowPassFilter(0.0, 25.0)


def test_motion_detector_waits_for_full_window():
    det = MotionDetector(0.01, window_size=5)
    results = [det.update(0.0, 0.0, 0.0) for _ in range(5)]
    assert results == [False, False, False, False, True]


def test_motion_detector_detects_motion():
    det = MotionDetector(0.01, window_size=4)
    results = [det.update(0.0, float(i % 2), 0.0) for i in range(8)]
    assert results == [False] * 8


def test_motion_detector_recovers_after_motion():
    det = MotionDetector(0.01, window_size=3)
    det.update(5.0, 5.0, 5.0)
    det.update(0.0, 0.0, 0.0)
    assert det.update(0.0, 0.0, 0.0) is False
    assert det.update(0.0, 0.0, 0.0) is True


def test_motion_detector_rejects_empty_window():
    with pytest.raises(ValueError):
        MotionDetector(0.1, window_size=0)