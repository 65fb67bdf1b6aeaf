"""Named shared-memory segment holding the control header and the state ring buffer."""

from __future__ import annotations

import struct
import threading
from multiprocessing import shared_memory

from .structs import ContextFrame, RingBufferEntry, SharedMemoryHeader, WorldState

SHARED_MEMORY_NAME = "s2sgeo_shm"
SHARED_MEMORY_SIZE = 1024 * 1024

_HEADER = struct.Struct("<IIIB64sdQQ")
_ENTRY = struct.Struct(
    "<I"
    "dddQi1024sqI?Id"
    "256s64s32sdddd512sq"
)
_ENTRIES_OFFSET = _HEADER.size
_REQUIRED_SIZE = _ENTRIES_OFFSET + SharedMemoryHeader.RING_BUFFER_SIZE * _ENTRY.size


class SharedMemoryError(OSError):
    """The shared segment could not be created, opened or used."""


def _encode(text: str, size: int) -> bytes:
    return text.encode("utf-8")[: size - 1]


def _decode(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="ignore")


class _Scalar:
    def __init__(self, offset: int, fmt: str, kind=None) -> None:
        self._offset = offset
        self._fmt = fmt
        self._kind = kind

    def __get__(self, view, owner=None):
        if view is None:
            return self
        (value,) = struct.unpack_from(self._fmt, view._buffer(), self._offset)
        return self._kind(value) if self._kind else value

    def __set__(self, view, value) -> None:
        struct.pack_into(self._fmt, view._buffer(), self._offset, value)


class _Text:
    def __init__(self, offset: int, size: int) -> None:
        self._offset = offset
        self._size = size

    def __get__(self, view, owner=None):
        if view is None:
            return self
        buf = view._buffer()
        return _decode(bytes(buf[self._offset : self._offset + self._size]))

    def __set__(self, view, value: str) -> None:
        struct.pack_into(f"<{self._size}s", view._buffer(), self._offset, _encode(value, self._size))


class SharedHeaderView:
    """Live read/write access to the header stored in the segment."""

    write_index = _Scalar(0, "<I")
    read_index = _Scalar(4, "<I")
    global_sequence = _Scalar(8, "<I")
    location_service_alive = _Scalar(12, "<B", bool)
    active_plugin = _Text(13, SharedMemoryHeader.ACTIVE_PLUGIN_SIZE)
    accuracy_level = _Scalar(77, "<d")
    total_updates = _Scalar(85, "<Q")
    total_context_updates = _Scalar(93, "<Q")

    def __init__(self, segment: shared_memory.SharedMemory) -> None:
        self._segment = segment

    def _buffer(self):
        buf = self._segment.buf
        if buf is None:
            raise SharedMemoryError("shared memory segment is closed")
        return buf

    def snapshot(self) -> SharedMemoryHeader:
        """Return a detached copy of the header."""
        fields = _HEADER.unpack_from(self._buffer(), 0)
        return SharedMemoryHeader(
            write_index=fields[0],
            read_index=fields[1],
            global_sequence=fields[2],
            location_service_alive=bool(fields[3]),
            active_plugin=_decode(fields[4]),
            accuracy_level=fields[5],
            total_updates=fields[6],
            total_context_updates=fields[7],
        )


class SharedMemoryManager:
    """Owns the connection to the shared ring buffer."""

    def __init__(self, name: str = SHARED_MEMORY_NAME) -> None:
        self.name = name
        self._segment: shared_memory.SharedMemory | None = None
        self._ready = False

    def _close(self) -> None:
        if self._segment is not None:
            self._segment.close()
            self._segment = None
        self._ready = False

    def initialize_server(self) -> bool:
        """Create a fresh segment, replacing any stale one."""
        self._close()
        try:
            stale = shared_memory.SharedMemory(name=self.name)
        except FileNotFoundError:
            pass
        else:
            stale.close()
            stale.unlink()
        try:
            segment = shared_memory.SharedMemory(
                name=self.name, create=True, size=max(SHARED_MEMORY_SIZE, _REQUIRED_SIZE)
            )
        except OSError as exc:
            raise SharedMemoryError(f"server init failed: {exc}") from exc
        segment.buf[:_REQUIRED_SIZE] = bytes(_REQUIRED_SIZE)
        _HEADER.pack_into(segment.buf, 0, 0, 0, 0, 1, b"", 1.0, 0, 0)
        self._segment = segment
        self._ready = True
        return True

    def connect_client(self) -> bool:
        """Attach to a segment created by the server."""
        self._close()
        try:
            segment = shared_memory.SharedMemory(name=self.name)
        except OSError as exc:
            raise SharedMemoryError(f"client connect failed: {exc}") from exc
        if segment.size < _REQUIRED_SIZE:
            segment.close()
            raise SharedMemoryError("could not find shared memory objects")
        self._segment = segment
        self._ready = True
        return True

    def cleanup(self) -> None:
        """Mark the service dead, detach and remove the segment."""
        if self._segment is not None:
            SharedHeaderView(self._segment).location_service_alive = False
            segment = self._segment
            self._close()
            try:
                segment.unlink()
            except FileNotFoundError:
                pass
            return
        try:
            stale = shared_memory.SharedMemory(name=self.name)
        except FileNotFoundError:
            return
        stale.close()
        stale.unlink()

    def is_ready(self) -> bool:
        return self._ready

    def _require(self) -> shared_memory.SharedMemory:
        if not self._ready or self._segment is None:
            raise SharedMemoryError("shared memory is not initialised")
        return self._segment

    def header(self) -> SharedHeaderView:
        """Return a live view of the header."""
        return SharedHeaderView(self._require())

    @staticmethod
    def _offset(index: int) -> int:
        if not 0 <= index < SharedMemoryHeader.RING_BUFFER_SIZE:
            raise IndexError(f"ring buffer index out of range: {index}")
        return _ENTRIES_OFFSET + index * _ENTRY.size

    def read_entry(self, index: int) -> RingBufferEntry:
        """Return a copy of the ring buffer slot."""
        f = _ENTRY.unpack_from(self._require().buf, self._offset(index))
        state = WorldState(
            smoothed_lat=f[1],
            smoothed_lon=f[2],
            smoothed_altitude=f[3],
            s2_cell_id=f[4],
            s2_cell_level=f[5],
            context_json=_decode(f[6]),
            last_update_ms=f[7],
            update_sequence=f[8],
            is_moving=f[9],
            step_count=f[10],
            estimated_distance_m=f[11],
        )
        context = ContextFrame(
            road_name=_decode(f[12]),
            road_type=_decode(f[13]),
            traffic_level=_decode(f[14]),
            current_speed=f[15],
            speed_limit=f[16],
            elevation_gain_m=f[17],
            gradient_percent=f[18],
            hazards=_decode(f[19]),
            timestamp_ms=f[20],
        )
        return RingBufferEntry(sequence=f[0], state=state, context=context)

    def write_entry(
        self, index: int, sequence: int, state: WorldState, context: ContextFrame
    ) -> None:
        """Store a state and context in the ring buffer slot."""
        _ENTRY.pack_into(
            self._require().buf,
            self._offset(index),
            sequence,
            state.smoothed_lat,
            state.smoothed_lon,
            state.smoothed_altitude,
            state.s2_cell_id,
            state.s2_cell_level,
            _encode(state.context_json, WorldState.CONTEXT_JSON_SIZE),
            state.last_update_ms,
            state.update_sequence,
            state.is_moving,
            state.step_count,
            state.estimated_distance_m,
            _encode(context.road_name, ContextFrame.ROAD_NAME_SIZE),
            _encode(context.road_type, ContextFrame.ROAD_TYPE_SIZE),
            _encode(context.traffic_level, ContextFrame.TRAFFIC_LEVEL_SIZE),
            context.current_speed,
            context.speed_limit,
            context.elevation_gain_m,
            context.gradient_percent,
            _encode(context.hazards, ContextFrame.HAZARDS_SIZE),
            context.timestamp_ms,
        )


_instance: SharedMemoryManager | None = None
_instance_lock = threading.Lock()


def get_shared_memory_manager() -> SharedMemoryManager:
    """Return the process-wide shared memory manager."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = SharedMemoryManager()
        return _instance