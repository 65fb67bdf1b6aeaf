"""Peak-based step detection for pedestrian dead reckoning."""

from __future__ import annotations


class StepDetector:
    """Detects steps from vertical acceleration peaks."""

    STEP_THRESHOLD = 1.5  # m/s^2
    STEP_MIN_INTERVAL = 0.3  # seconds

    def __init__(self) -> None:
        self._last_accel_z = 0.0
        self._last_step_time_s = 0.0

    def detect_step(self, accel_z: float, current_time_s: float) -> bool:
        """Return True when a step is detected at this sample."""
        if current_time_s - self._last_step_time_s > self.STEP_MIN_INTERVAL:
            if accel_z > self.STEP_THRESHOLD and self._last_accel_z < self.STEP_THRESHOLD:
                self._last_step_time_s = current_time_s
                return True
        self._last_accel_z = accel_z
        return False