"""Background service that smooths location, tracks cells and publishes state."""

from __future__ import annotations

import logging
import threading

from . import ipc
from .geometry import S2GeometryIndex
from .interfaces import ContextProvider
from .kalman import KalmanFilter
from .shared_memory import SharedMemoryManager
from .structs import ContextFrame, LocationFix, WorldState

_log = logging.getLogger(__name__)

CELL_LEVEL = 16
LOOP_INTERVAL_S = 0.1
_LOG_EVERY = 10


class LocationService:
    """Smooths fixes, detects cell crossings, fetches context and writes shared memory."""

    def __init__(
        self,
        manager: SharedMemoryManager | None = None,
        interval: float = LOOP_INTERVAL_S,
    ) -> None:
        self._filter = KalmanFilter()
        self._filter.enable_pdr(True)
        self._index = S2GeometryIndex()
        self._provider: ContextProvider | None = None
        self._manager = manager
        self._interval = interval
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_s2_cell = 0
        self._iteration = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the service loop in a background thread; no-op if already running."""
        if self.running:
            return
        _log.info("Starting...")
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="location-service", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the loop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        _log.info("Stopped")

    def __enter__(self) -> LocationService:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def set_context_provider(self, provider: ContextProvider | None) -> None:
        """Set the provider asked for context on each cell crossing."""
        with self._lock:
            self._provider = provider
        _log.info("Set context provider: %s", provider.name if provider else "null")

    def inject_location(
        self, lat: float, lon: float, alt: float, timestamp: int
    ) -> None:
        """Feed a location fix into the filter."""
        fix = LocationFix(latitude=lat, longitude=lon, timestamp_ms=timestamp, altitude=alt)
        with self._lock:
            self._filter.update(fix)

    def step(self) -> tuple[WorldState, ContextFrame]:
        """Run one iteration of the loop and return what was published."""
        with self._lock:
            state = self._filter.smoothed_state()
            provider = self._provider

        cell = self._index.lat_lon_to_cell(state.smoothed_lat, state.smoothed_lon, CELL_LEVEL)
        state.s2_cell_id = cell
        state.s2_cell_level = CELL_LEVEL

        context = ContextFrame()
        if cell != self._last_s2_cell and provider is not None:
            self._last_s2_cell = cell
            context = provider.get_context(state.smoothed_lat, state.smoothed_lon)
            _log.info("Cell boundary crossed: %x", cell)

        ipc.write_state(state, context, self._manager)
        ipc.signal_alive(self._manager)

        if self._iteration % _LOG_EVERY == 0:
            _log.info(
                "Iteration %d - Lat: %s Lon: %s",
                self._iteration,
                state.smoothed_lat,
                state.smoothed_lon,
            )
        self._iteration += 1
        return state, context

    def _run(self) -> None:
        _log.info("Service loop started")
        while not self._stop_event.is_set():
            try:
                self.step()
            except Exception:
                _log.exception("Error in loop")
            self._stop_event.wait(self._interval)