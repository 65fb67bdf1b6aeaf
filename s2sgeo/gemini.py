"""Live model session that follows the location service's published context."""

from __future__ import annotations

import json
import logging
import threading
from typing import Optional

from . import ipc
from .s2s_client import S2SClient
from .shared_memory import SharedMemoryManager
from .structs import ContextFrame, WorldState

_log = logging.getLogger(__name__)

_U64_MASK = 0xFFFFFFFFFFFFFFFF
_ROAD_TYPE_HASH_CHARS = 64
UPDATE_INTERVAL_S = 0.5


def hash_context(ctx: ContextFrame) -> int:
    """Return a 64-bit change-detection hash of the road type and gradient."""
    value = 0
    for byte in ctx.road_type.encode("utf-8")[:_ROAD_TYPE_HASH_CHARS]:
        if byte == 0:
            break
        signed = byte if byte < 128 else byte - 256
        value = (value * 31 + signed) & _U64_MASK
    gradient = int(ctx.gradient_percent * 10)
    return (value * 31 + gradient) & _U64_MASK


def _context_document(state: WorldState, context: ContextFrame) -> dict:
    return {
        "location": {
            "latitude": state.smoothed_lat,
            "longitude": state.smoothed_lon,
            "altitude": state.smoothed_altitude,
            "s2_cell": str(state.s2_cell_id),
        },
        "environment": {
            "road": context.road_name,
            "surface": context.road_type,
            "traffic": context.traffic_level,
            "gradient": context.gradient_percent,
            "elevation_gain": context.elevation_gain_m,
        },
        "movement": {
            "is_moving": state.is_moving,
            "steps": state.step_count,
            "distance_m": state.estimated_distance_m,
        },
    }


def _system_prompt(state: WorldState, context: ContextFrame) -> str:
    return (
        "You are an expert cycling guide. "
        f"User is at elevation {state.smoothed_altitude:f}m. "
        f"Current gradient: {context.gradient_percent:f}%. "
        f"Traffic level: {context.traffic_level}. "
        f"Road type: {context.road_type}."
    )


class GeminiIntegration:
    """Runs a live session and pushes context changes read from shared memory."""

    def __init__(
        self,
        client: Optional[S2SClient] = None,
        manager: Optional[SharedMemoryManager] = None,
        interval: float = UPDATE_INTERVAL_S,
    ) -> None:
        self.client = S2SClient() if client is None else client
        self._manager = manager
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_hash = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, api_key: str) -> bool:
        """Connect the session and start following context updates."""
        _log.info("Starting session...")
        if not self.client.connect(api_key):
            _log.error("Failed to connect")
            return False
        if not self.running:
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run, name="context-update", daemon=True
            )
            self._thread.start()
        _log.info("Session started")
        return True

    def stop(self) -> None:
        """Stop following updates and disconnect the session."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self.client.disconnect()
        _log.info("Session stopped")

    def __enter__(self) -> GeminiIntegration:
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def check_for_update(self) -> Optional[str]:
        """Send the latest context if it changed; return the prompt sent, or None."""
        latest = ipc.read_latest_state(self._manager)
        if latest is None:
            return None
        state, context = latest
        context_hash = hash_context(context)
        if context_hash == self._last_hash:
            return None
        self._last_hash = context_hash
        _log.debug("Context document: %s", json.dumps(_context_document(state, context)))
        prompt = _system_prompt(state, context)
        self.client.send_context(prompt)
        _log.info("Context updated: %s, %s", state.smoothed_lat, state.smoothed_lon)
        return prompt

    def _run(self) -> None:
        _log.info("Context update thread started")
        while not self._stop_event.is_set():
            try:
                self.check_for_update()
            except Exception:
                _log.exception("Error in context loop")
            self._stop_event.wait(self._interval)