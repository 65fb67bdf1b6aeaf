"""Constant-velocity Kalman filter for GPS smoothing with simple step detection."""

from __future__ import annotations

import numpy as np

from .interfaces import LocationFilter
from .structs import LocationFix, WorldState

_DEFAULT_DT = 0.1
_DEFAULT_Q = 0.1
_DEFAULT_R = 100.0
_INITIAL_COVARIANCE = 1e6
_POSITION_NOISE_SCALE = 0.001
_MIN_DT = 0.01
_MAX_DT = 1.0
_STEP_THRESHOLD = 15.0  # m/s^2
_MOVING_VELOCITY = 0.1


def _process_noise(q: float) -> np.ndarray:
    noise = np.eye(4) * q
    noise[0, 0] *= _POSITION_NOISE_SCALE
    noise[1, 1] *= _POSITION_NOISE_SCALE
    return noise


class KalmanFilter(LocationFilter):
    """2D Kalman filter over the state [lat, lon, lat_vel, lon_vel]."""

    def __init__(self) -> None:
        self._a = np.array(
            [
                [1.0, 0.0, _DEFAULT_DT, 0.0],
                [0.0, 1.0, 0.0, _DEFAULT_DT],
                [0.0, 0.0, 1.0, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )
        self._h = np.array([[1.0, 0.0, 0.0, 0.0], [0.0, 1.0, 0.0, 0.0]])
        self._q = _process_noise(_DEFAULT_Q)
        self._r = np.eye(2) * _DEFAULT_R
        self._x = np.zeros(4)
        self._p = np.eye(4) * _INITIAL_COVARIANCE

        self._use_pdr = False
        self._last_accel_z = 0.0
        self._step_count = 0
        self._last_update_ms = 0

    def _predict(self, dt: float) -> None:
        self._a[0, 2] = dt
        self._a[1, 3] = dt
        self._x = self._a @ self._x
        self._p = self._a @ self._p @ self._a.T + self._q

    def _correct(self, z: np.ndarray) -> None:
        innovation = z - self._h @ self._x
        s = self._h @ self._p @ self._h.T + self._r
        gain = self._p @ self._h.T @ np.linalg.inv(s)
        self._x = self._x + gain @ innovation
        self._p = (np.eye(4) - gain @ self._h) @ self._p

    def update(self, measurement: LocationFix) -> None:
        """Predict to the measurement's time and correct with its position."""
        now_ms = measurement.timestamp_ms
        dt = _DEFAULT_DT
        if self._last_update_ms > 0:
            dt = (now_ms - self._last_update_ms) / 1000.0
        self._last_update_ms = now_ms
        dt = min(max(dt, _MIN_DT), _MAX_DT)

        self.set_measurement_noise(
            max(_DEFAULT_R, measurement.accuracy * measurement.accuracy)
        )

        self._predict(dt)
        self._correct(np.array([measurement.latitude, measurement.longitude]))

        if self._use_pdr and self.detect_step(measurement):
            self._step_count += 1

    def detect_step(self, imu_data: LocationFix) -> bool:
        """Report a step when vertical acceleration rises through the threshold."""
        is_step = (
            self._last_accel_z < _STEP_THRESHOLD
            and imu_data.accel_z >= _STEP_THRESHOLD
        )
        self._last_accel_z = imu_data.accel_z
        return is_step

    def smoothed_state(self) -> WorldState:
        """Return the filtered position as a world state."""
        return WorldState(
            smoothed_lat=float(self._x[0]),
            smoothed_lon=float(self._x[1]),
            smoothed_altitude=0.0,
            is_moving=bool(
                abs(self._x[2]) > _MOVING_VELOCITY
                or abs(self._x[3]) > _MOVING_VELOCITY
            ),
            step_count=self._step_count,
            last_update_ms=self._last_update_ms,
        )

    def reset(self) -> None:
        """Drop the estimate, its covariance, the step count and the clock."""
        self._x = np.zeros(4)
        self._p = np.eye(4) * _INITIAL_COVARIANCE
        self._step_count = 0
        self._last_update_ms = 0

    def set_process_noise(self, q: float) -> None:
        """Set process noise; higher values follow changes faster."""
        self._q = _process_noise(q)

    def set_measurement_noise(self, r: float) -> None:
        """Set measurement noise; higher values trust GPS less."""
        self._r = np.eye(2) * r

    def enable_pdr(self, enable: bool) -> None:
        """Turn step counting on or off."""
        self._use_pdr = enable