"""Thread-safe holder of the current world state."""

from __future__ import annotations

import threading
from dataclasses import replace

from .structs import WorldState


class WorldStateStore:
    """Guards a WorldState behind a lock."""

    def __init__(self) -> None:
        self._state = WorldState()
        self._lock = threading.RLock()
        self._update_count = 0

    def update_position(
        self, lat: float, lon: float, altitude: float, timestamp: int
    ) -> None:
        """Set the position and bump the update sequence."""
        with self._lock:
            self._update_count += 1
            self._state.smoothed_lat = lat
            self._state.smoothed_lon = lon
            self._state.smoothed_altitude = altitude
            self._state.last_update_ms = timestamp
            self._state.update_sequence = self._update_count

    def update_s2_cell(self, cell_id: int, level: int) -> None:
        with self._lock:
            self._state.s2_cell_id = cell_id
            self._state.s2_cell_level = level

    def update_context(self, context_json: str) -> None:
        """Store the context JSON, truncated to the record's capacity."""
        with self._lock:
            self._state.context_json = context_json[: WorldState.CONTEXT_JSON_SIZE - 1]

    def set_moving(self, moving: bool) -> None:
        with self._lock:
            self._state.is_moving = moving

    def update_step_count(self, steps: int) -> None:
        with self._lock:
            self._state.step_count = steps

    def update_estimated_distance(self, distance: float) -> None:
        with self._lock:
            self._state.estimated_distance_m = distance

    def state(self) -> WorldState:
        """Return a copy of the current state."""
        with self._lock:
            return replace(self._state)

    def latitude(self) -> float:
        with self._lock:
            return self._state.smoothed_lat

    def longitude(self) -> float:
        with self._lock:
            return self._state.smoothed_lon

    def s2_cell_id(self) -> int:
        with self._lock:
            return self._state.s2_cell_id

    def context_json(self) -> str:
        with self._lock:
            return self._state.context_json

    def print_state(self) -> None:
        """Print the state in human-readable form."""
        with self._lock:
            s = self._state
            print("=== WorldState ===")
            print(f"Lat: {s.smoothed_lat:g}")
            print(f"Lon: {s.smoothed_lon:g}")
            print(f"Alt: {s.smoothed_altitude:g} m")
            print(f"S2 Cell: {s.s2_cell_id} (Level {s.s2_cell_level})")
            print(f"Moving: {'Yes' if s.is_moving else 'No'}")
            print(f"Steps: {s.step_count}")
            print(f"Distance: {s.estimated_distance_m:g} m")
            print(f"Context: {s.context_json}")


_instance: WorldStateStore | None = None
_instance_lock = threading.Lock()


def get_world_state() -> WorldStateStore:
    """Return the process-wide world state store."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = WorldStateStore()
        return _instance