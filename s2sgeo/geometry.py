"""Spatial index over S2 cells."""

from __future__ import annotations

import math

from . import s2cell
from .interfaces import GeometryIndex

_BOUNDARY_LEVEL = 16
_EARTH_RADIUS_M = 6371000.0
_STERADIANS_TO_M2 = 40680631590769


class S2GeometryIndex(GeometryIndex):
    """S2 cell index: level 24 is ~60 cm, 16 is ~600 m, 10 is ~5 km."""

    def lat_lon_to_cell(self, lat: float, lon: float, level: int) -> int:
        """Return the id of the cell at the given level containing the point."""
        return s2cell.parent(s2cell.cell_id_from_lat_lng(lat, lon), level)

    def neighbors(self, cell_id: int) -> list[int]:
        """Return the valid edge neighbours of the cell."""
        return [n for n in s2cell.edge_neighbors(cell_id) if s2cell.is_valid(n)]

    def crossed_boundary(
        self, lat1: float, lon1: float, lat2: float, lon2: float
    ) -> bool:
        """Tell whether the two points lie in different level-16 cells."""
        return self.lat_lon_to_cell(lat1, lon1, _BOUNDARY_LEVEL) != self.lat_lon_to_cell(
            lat2, lon2, _BOUNDARY_LEVEL
        )

    def cell_center(self, cell_id: int) -> tuple[float, float]:
        """Return the (lat, lon) of the cell centre in degrees."""
        return s2cell.cell_center(cell_id)

    def cell_area(self, cell_id: int) -> float:
        """Return the cell's area in square metres."""
        return s2cell.cell_area(cell_id) * _STERADIANS_TO_M2

    @staticmethod
    def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Return the haversine distance in metres."""
        phi1, phi2 = math.radians(lat1), math.radians(lat2)
        d_phi = math.radians(lat2 - lat1)
        d_lambda = math.radians(lon2 - lon1)
        a = (
            math.sin(d_phi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
        )
        return _EARTH_RADIUS_M * 2 * math.asin(math.sqrt(a))