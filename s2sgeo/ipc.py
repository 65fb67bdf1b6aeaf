"""Writer and reader sides of the shared state ring buffer."""

from __future__ import annotations

from dataclasses import replace

from .shared_memory import SharedMemoryManager, get_shared_memory_manager
from .structs import ContextFrame, SharedMemoryHeader, WorldState

_U32_MASK = 0xFFFFFFFF
_U64_MASK = 0xFFFFFFFFFFFFFFFF
_RING_SIZE = SharedMemoryHeader.RING_BUFFER_SIZE


def _ready(manager: SharedMemoryManager | None) -> SharedMemoryManager | None:
    mgr = get_shared_memory_manager() if manager is None else manager
    return mgr if mgr.is_ready() else None


def write_state(
    state: WorldState,
    context: ContextFrame,
    manager: SharedMemoryManager | None = None,
) -> None:
    """Store a state in the current slot and advance the write index.

    Does nothing when the shared memory is not initialised.
    """
    mgr = _ready(manager)
    if mgr is None:
        return
    header = mgr.header()
    write_idx = header.write_index
    mgr.write_entry(write_idx, header.global_sequence, state, context)
    header.global_sequence = (header.global_sequence + 1) & _U32_MASK
    header.write_index = (write_idx + 1) % _RING_SIZE
    header.total_updates = (header.total_updates + 1) & _U64_MASK


def update_location(
    lat: float,
    lon: float,
    alt: float,
    timestamp: int,
    manager: SharedMemoryManager | None = None,
) -> None:
    """Overwrite only the position of the current slot and advance the write index."""
    mgr = _ready(manager)
    if mgr is None:
        return
    header = mgr.header()
    write_idx = header.write_index
    entry = mgr.read_entry(write_idx)
    state = replace(
        entry.state,
        smoothed_lat=lat,
        smoothed_lon=lon,
        smoothed_altitude=alt,
        last_update_ms=timestamp,
    )
    mgr.write_entry(write_idx, entry.sequence, state, entry.context)
    header.write_index = (write_idx + 1) % _RING_SIZE
    header.global_sequence = (header.global_sequence + 1) & _U32_MASK


def signal_alive(manager: SharedMemoryManager | None = None) -> None:
    """Mark the location service as alive."""
    mgr = _ready(manager)
    if mgr is not None:
        mgr.header().location_service_alive = True


def read_latest_state(
    manager: SharedMemoryManager | None = None,
) -> tuple[WorldState, ContextFrame] | None:
    """Return the most recently written state and context, or None if unavailable."""
    mgr = _ready(manager)
    if mgr is None:
        return None
    write_idx = mgr.header().write_index
    entry = mgr.read_entry((write_idx - 1) % _RING_SIZE)
    return entry.state, entry.context


def is_location_service_alive(manager: SharedMemoryManager | None = None) -> bool:
    """Tell whether the location service has signalled that it is alive."""
    mgr = _ready(manager)
    return mgr is not None and mgr.header().location_service_alive


def active_plugin(manager: SharedMemoryManager | None = None) -> str:
    """Return the active plugin name recorded in the header, or an empty string."""
    mgr = _ready(manager)
    return "" if mgr is None else mgr.header().active_plugin


def accuracy_level(manager: SharedMemoryManager | None = None) -> float:
    """Return the accuracy level recorded in the header, 1.0 when unavailable."""
    mgr = _ready(manager)
    return 1.0 if mgr is None else mgr.header().accuracy_level