"""Context provider with nearby users and venues for dating apps."""

from __future__ import annotations

import logging

from .interfaces import ContextProvider
from .structs import ContextFrame

_log = logging.getLogger(__name__)

_NEARBY = (
    '[{"type":"user","name":"Sarah","distance":50},'
    '{"type":"venue","name":"Coffee Shop","distance":200}]'
)


class DatingContextProvider(ContextProvider):
    """Provides nearby users and venues as context."""

    @property
    def name(self) -> str:
        return "dating"

    def initialize(self, config: str) -> None:
        """Accept a configuration string; no settings are used."""
        _log.info("Initialized")

    def get_context(self, lat: float, lon: float) -> ContextFrame:
        """Return the venue context with nearby users and venues as hazards."""
        return ContextFrame(
            road_name="Central Park",
            road_type="venue",
            traffic_level="busy",
            hazards=_NEARBY[: ContextFrame.HAZARDS_SIZE - 1],
        )

    def prefetch_context(
        self, lat: float, lon: float, heading: float, distance: float
    ) -> list[tuple[float, float]]:
        """Return the point around which nearby venues and users would be fetched."""
        _log.info("Prefetching context around %s, %s", lat, lon)
        return [(lat, lon)]