import time

import pytest

from s2sgeo.sensors import poll_gps, poll_imu
from s2sgeo.structs import LocationFix


def test_gps_fixed_fields():
    fix = poll_gps(0)
    assert fix.altitude == 50.0
    assert fix.accuracy == 10.0
    assert fix.speed == 5.0
    assert fix.heading == 90.0
    assert fix.timestamp_ms == 0


def test_gps_at_time_zero():
    fix = poll_gps(0)
    assert fix.latitude == pytest.approx(37.7749)
    assert fix.longitude == pytest.approx(-122.4193)


@pytest.mark.parametrize("ts", [0, 1234, 987654, 1_700_000_000_000])
def test_gps_stays_on_circle(ts):
    fix = poll_gps(ts)
    dlat = fix.latitude - 37.7749
    dlon = fix.longitude - (-122.4194)
    assert (dlat**2 + dlon**2) ** 0.5 == pytest.approx(0.0001, rel=1e-6)


def test_gps_default_uses_current_time():
    before = time.time_ns() // 1_000_000
    fix = poll_gps()
    after = time.time_ns() // 1_000_000
    assert before <= fix.timestamp_ms <= after


def test_imu_at_time_zero():
    fix = poll_imu(LocationFix(37.7749, -122.4194, 0), 0)
    assert fix.accel_x == pytest.approx(0.0)
    assert fix.accel_z == pytest.approx(9.81)
    assert fix.gyro_z == pytest.approx(0.5)


@pytest.mark.parametrize("ms", [0, 125, 250, 600, 999])
def test_imu_axes_are_in_phase(ms):
    fix = poll_imu(LocationFix(), ms)
    assert fix.accel_z - 9.81 == pytest.approx(1.5 * fix.accel_x, abs=1e-12)
    assert fix.accel_y == 0.0
    assert fix.gyro_x == 0.0 and fix.gyro_y == 0.0


def test_imu_keeps_position_and_leaves_input_untouched():
    original = LocationFix(37.7749, -122.4194, 1000)
    result = poll_imu(original, 250)
    assert result.latitude == 37.7749
    assert result.longitude == -122.4194
    assert result.timestamp_ms == 1000
    assert original.accel_x == 0.0
    assert result.accel_x == pytest.approx(2.0)