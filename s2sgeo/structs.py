"""Plain data records shared by the location daemon and the adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class LocationFix:
    """Raw sensor reading from GPS and IMU."""

    latitude: float = 0.0
    longitude: float = 0.0
    timestamp_ms: int = 0
    altitude: float = 0.0
    accuracy: float = 10.0
    speed: float = 0.0
    heading: float = 0.0
    accel_x: float = 0.0
    accel_y: float = 0.0
    accel_z: float = 0.0
    gyro_x: float = 0.0
    gyro_y: float = 0.0
    gyro_z: float = 0.0


@dataclass
class WorldState:
    """Authoritative, smoothed location state."""

    CONTEXT_JSON_SIZE: ClassVar[int] = 1024

    smoothed_lat: float = 0.0
    smoothed_lon: float = 0.0
    smoothed_altitude: float = 0.0
    s2_cell_id: int = 0
    s2_cell_level: int = 0
    context_json: str = ""
    last_update_ms: int = 0
    update_sequence: int = 0
    is_moving: bool = False
    step_count: int = 0
    estimated_distance_m: float = 0.0


@dataclass
class ContextFrame:
    """Environmental data to hand to the AI session."""

    ROAD_NAME_SIZE: ClassVar[int] = 256
    ROAD_TYPE_SIZE: ClassVar[int] = 64
    TRAFFIC_LEVEL_SIZE: ClassVar[int] = 32
    HAZARDS_SIZE: ClassVar[int] = 512

    road_name: str = ""
    road_type: str = ""
    traffic_level: str = ""
    current_speed: float = 0.0
    speed_limit: float = 0.0
    elevation_gain_m: float = 0.0
    gradient_percent: float = 0.0
    hazards: str = ""
    timestamp_ms: int = 0


@dataclass
class RingBufferEntry:
    """One slot of the state ring buffer."""

    sequence: int = 0
    state: WorldState = field(default_factory=WorldState)
    context: ContextFrame = field(default_factory=ContextFrame)


@dataclass
class SharedMemoryHeader:
    """Control block of the shared ring buffer."""

    RING_BUFFER_SIZE: ClassVar[int] = 1024
    ACTIVE_PLUGIN_SIZE: ClassVar[int] = 64

    write_index: int = 0
    read_index: int = 0
    global_sequence: int = 0
    location_service_alive: bool = False
    active_plugin: str = ""
    accuracy_level: float = 1.0
    total_updates: int = 0
    total_context_updates: int = 0