"""Abstract interfaces for context providers, spatial indexes and filters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .structs import ContextFrame, LocationFix, WorldState


class ContextProvider(ABC):
    """Source of location-based environmental context."""

    @abstractmethod
    def initialize(self, config: str) -> None:
        """Configure the provider from a JSON string."""

    @abstractmethod
    def get_context(self, lat: float, lon: float) -> ContextFrame:
        """Return context data for a location."""

    @abstractmethod
    def prefetch_context(
        self, lat: float, lon: float, heading: float, distance: float
    ) -> None:
        """Warm data for the area ahead of the user."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""


class GeometryIndex(ABC):
    """Hierarchical spatial cell index."""

    @abstractmethod
    def lat_lon_to_cell(self, lat: float, lon: float, level: int) -> int:
        """Return the cell id containing the point at the given level."""

    @abstractmethod
    def neighbors(self, cell_id: int) -> list[int]:
        """Return the ids of the cell's edge neighbours."""

    @abstractmethod
    def crossed_boundary(
        self, lat1: float, lon1: float, lat2: float, lon2: float
    ) -> bool:
        """Tell whether moving between two points crosses a cell boundary."""


class LocationFilter(ABC):
    """Smoothing filter for location measurements."""

    @abstractmethod
    def update(self, measurement: LocationFix) -> None:
        """Feed a new measurement."""

    @abstractmethod
    def smoothed_state(self) -> WorldState:
        """Return the current smoothed state."""

    @abstractmethod
    def reset(self) -> None:
        """Forget all history."""