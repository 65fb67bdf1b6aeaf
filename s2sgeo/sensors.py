"""Simulated GPS and IMU sensor readings."""

from __future__ import annotations

import math
import time
from dataclasses import replace

from .structs import LocationFix

_BASE_LAT = 37.7749
_BASE_LON = -122.4194
_JITTER_DEG = 0.0001
_GRAVITY = 9.81


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def poll_gps(timestamp_ms: int | None = None) -> LocationFix:
    """Return a simulated GPS fix circling a fixed point."""
    ts = _now_ms() if timestamp_ms is None else timestamp_ms
    t = ts / 1000.0
    return LocationFix(
        latitude=_BASE_LAT + math.sin(t) * _JITTER_DEG,
        longitude=_BASE_LON + math.cos(t) * _JITTER_DEG,
        timestamp_ms=ts,
        altitude=50.0,
        accuracy=10.0,
        speed=5.0,
        heading=90.0,
    )


def poll_imu(fix: LocationFix, timestamp_ms: int | None = None) -> LocationFix:
    """Return a copy of the fix with simulated walking-motion IMU data."""
    ms = _now_ms() if timestamp_ms is None else timestamp_ms
    phase = (ms / 1000.0) * 2 * math.pi
    wave = math.sin(phase)
    return replace(
        fix,
        accel_x=wave * 2.0,
        accel_y=0.0,
        accel_z=_GRAVITY + wave * 3.0,
        gyro_x=0.0,
        gyro_y=0.0,
        gyro_z=math.cos(phase) * 0.5,
    )