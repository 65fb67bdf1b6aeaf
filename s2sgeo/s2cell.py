"""Hierarchical S2 cell ids on the unit sphere (cube faces, quadratic projection, Hilbert order)."""

from __future__ import annotations

import math

MAX_LEVEL = 30
_MAX_SIZE = 1 << MAX_LEVEL
_FACE_SHIFT = 61
_POS_MASK = (1 << _FACE_SHIFT) - 1
_VALID_LSB_MASK = 0x1555555555555555
_ID_LIMIT = 1 << 64

_SWAP = 1
_INVERT = 2
_IJ_TO_POS = ((0, 1, 3, 2), (0, 3, 1, 2), (2, 3, 1, 0), (2, 1, 3, 0))
_POS_TO_IJ = ((0, 1, 3, 2), (0, 2, 3, 1), (3, 2, 0, 1), (3, 1, 0, 2))
_POS_TO_ORIENTATION = (_SWAP, 0, 0, _SWAP | _INVERT)


def _lsb(cell_id: int) -> int:
    return cell_id & -cell_id


def is_valid(cell_id: int) -> bool:
    """Tell whether the integer is a well-formed cell id."""
    if not isinstance(cell_id, int) or not 0 < cell_id < _ID_LIMIT:
        return False
    return (cell_id >> _FACE_SHIFT) < 6 and bool(_lsb(cell_id) & _VALID_LSB_MASK)


def _check(cell_id: int) -> None:
    if not is_valid(cell_id):
        raise ValueError(f"invalid cell id: {cell_id!r}")


def cell_level(cell_id: int) -> int:
    """Return the subdivision level of the cell, 0 for a cube face, 30 for a leaf."""
    _check(cell_id)
    return MAX_LEVEL - (_lsb(cell_id).bit_length() - 1) // 2


def parent(cell_id: int, level: int) -> int:
    """Return the ancestor of the cell at the given level."""
    own = cell_level(cell_id)
    if not 0 <= level <= own:
        raise ValueError(f"level {level} is not between 0 and {own}")
    lsb = 1 << (2 * (MAX_LEVEL - level))
    return (cell_id & -lsb) | lsb


def _uv_to_st(u: float) -> float:
    if u >= 0:
        return 0.5 * math.sqrt(1 + 3 * u)
    return 1 - 0.5 * math.sqrt(1 - 3 * u)


def _st_to_uv(s: float) -> float:
    if s >= 0.5:
        return (4 * s * s - 1) / 3
    return (1 - 4 * (1 - s) * (1 - s)) / 3


def _st_to_ij(s: float) -> int:
    return max(0, min(_MAX_SIZE - 1, math.floor(_MAX_SIZE * s)))


def _xyz_to_face_uv(x: float, y: float, z: float) -> tuple[int, float, float]:
    components = (x, y, z)
    axis = max(range(3), key=lambda k: abs(components[k]))
    face = axis + 3 if components[axis] < 0 else axis
    if face == 0:
        return face, y / x, z / x
    if face == 1:
        return face, -x / y, z / y
    if face == 2:
        return face, -x / z, -y / z
    if face == 3:
        return face, z / x, y / x
    if face == 4:
        return face, z / y, -x / y
    return face, -y / z, -x / z


def _face_uv_to_xyz(face: int, u: float, v: float) -> tuple[float, float, float]:
    return (
        (1.0, u, v),
        (-u, 1.0, v),
        (-u, -v, 1.0),
        (-1.0, -v, -u),
        (v, -1.0, -u),
        (v, u, -1.0),
    )[face]


def _normalize(p: tuple[float, float, float]) -> tuple[float, float, float]:
    n = math.sqrt(p[0] ** 2 + p[1] ** 2 + p[2] ** 2)
    return p[0] / n, p[1] / n, p[2] / n


def _to_lat_lng(p: tuple[float, float, float]) -> tuple[float, float]:
    x, y, z = p
    return math.degrees(math.atan2(z, math.hypot(x, y))), math.degrees(math.atan2(y, x))


def _from_face_ij(face: int, i: int, j: int) -> int:
    orientation = face & _SWAP
    pos = 0
    for k in range(MAX_LEVEL - 1, -1, -1):
        ij = (((i >> k) & 1) << 1) | ((j >> k) & 1)
        p = _IJ_TO_POS[orientation][ij]
        pos = (pos << 2) | p
        orientation ^= _POS_TO_ORIENTATION[p]
    return (face << _FACE_SHIFT) | (pos << 1) | 1


def _point_to_leaf(x: float, y: float, z: float) -> int:
    face, u, v = _xyz_to_face_uv(x, y, z)
    return _from_face_ij(face, _st_to_ij(_uv_to_st(u)), _st_to_ij(_uv_to_st(v)))


def _face_ij_at_level(cell_id: int) -> tuple[int, int, int, int]:
    level = cell_level(cell_id)
    face = cell_id >> _FACE_SHIFT
    pos = (cell_id & _POS_MASK) >> 1
    orientation = face & _SWAP
    i = j = 0
    for k in range(level):
        p = (pos >> (2 * (MAX_LEVEL - 1 - k))) & 3
        ij = _POS_TO_IJ[orientation][p]
        i = (i << 1) | (ij >> 1)
        j = (j << 1) | (ij & 1)
        orientation ^= _POS_TO_ORIENTATION[p]
    return face, i, j, level


def cell_id_from_lat_lng(lat: float, lng: float) -> int:
    """Return the leaf cell containing the point given in degrees."""
    phi, lam = math.radians(lat), math.radians(lng)
    return _point_to_leaf(
        math.cos(phi) * math.cos(lam), math.cos(phi) * math.sin(lam), math.sin(phi)
    )


def _st_point(face: int, s: float, t: float) -> tuple[float, float, float]:
    return _normalize(_face_uv_to_xyz(face, _st_to_uv(s), _st_to_uv(t)))


def cell_center(cell_id: int) -> tuple[float, float]:
    """Return the (lat, lng) in degrees of the cell's centre."""
    face, i, j, level = _face_ij_at_level(cell_id)
    cells = 1 << level
    return _to_lat_lng(_st_point(face, (i + 0.5) / cells, (j + 0.5) / cells))


def _vertex_points(cell_id: int) -> list[tuple[float, float, float]]:
    face, i, j, level = _face_ij_at_level(cell_id)
    cells = 1 << level
    s0, s1 = i / cells, (i + 1) / cells
    t0, t1 = j / cells, (j + 1) / cells
    return [_st_point(face, s, t) for s, t in ((s0, t0), (s1, t0), (s1, t1), (s0, t1))]


def cell_vertices(cell_id: int) -> list[tuple[float, float]]:
    """Return the four corners of the cell as (lat, lng) in degrees, counter-clockwise."""
    return [_to_lat_lng(p) for p in _vertex_points(cell_id)]


def _dot(a, b) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a, b):
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _triangle_area(a, b, c) -> float:
    numerator = abs(_dot(a, _cross(b, c)))
    denominator = 1 + _dot(a, b) + _dot(b, c) + _dot(c, a)
    return 2 * math.atan2(numerator, denominator)


def cell_area(cell_id: int) -> float:
    """Return the cell's area on the unit sphere in steradians."""
    v0, v1, v2, v3 = _vertex_points(cell_id)
    return _triangle_area(v0, v1, v2) + _triangle_area(v0, v2, v3)


def _neighbor(face: int, i: int, j: int, level: int) -> int:
    cells = 1 << level
    size = 1 << (MAX_LEVEL - level)
    if 0 <= i < cells and 0 <= j < cells:
        return parent(_from_face_ij(face, i * size, j * size), level)
    point = _face_uv_to_xyz(
        face, _st_to_uv((i + 0.5) / cells), _st_to_uv((j + 0.5) / cells)
    )
    return parent(_point_to_leaf(*point), level)


def edge_neighbors(cell_id: int) -> list[int]:
    """Return the four same-level neighbours sharing an edge: bottom, right, top, left."""
    face, i, j, level = _face_ij_at_level(cell_id)
    return [
        _neighbor(face, i, j - 1, level),
        _neighbor(face, i + 1, j, level),
        _neighbor(face, i, j + 1, level),
        _neighbor(face, i - 1, j, level),
    ]