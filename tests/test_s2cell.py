import math

import pytest

from s2sgeo import s2cell

SF = (37.7749, -122.4194)


def _face_cell(face):
    return (face << 61) | (1 << 60)


def test_leaf_from_lat_lng_is_valid_level_30():
    cell = s2cell.cell_id_from_lat_lng(*SF)
    assert s2cell.is_valid(cell)
    assert s2cell.cell_level(cell) == 30


def test_parent_of_origin_is_face_zero():
    cell = s2cell.cell_id_from_lat_lng(0.0, 0.0)
    assert s2cell.parent(cell, 0) == _face_cell(0)


def test_north_pole_is_on_face_two():
    cell = s2cell.cell_id_from_lat_lng(90.0, 0.0)
    assert s2cell.parent(cell, 0) == _face_cell(2)


def test_parent_chain_is_consistent():
    cell = s2cell.cell_id_from_lat_lng(*SF)
    p16 = s2cell.parent(cell, 16)
    assert s2cell.cell_level(p16) == 16
    assert s2cell.parent(p16, 10) == s2cell.parent(cell, 10)
    assert s2cell.parent(p16, 16) == p16


def test_leaf_center_round_trip():
    lat, lng = s2cell.cell_center(s2cell.cell_id_from_lat_lng(*SF))
    assert lat == pytest.approx(SF[0], abs=1e-6)
    assert lng == pytest.approx(SF[1], abs=1e-6)


def test_center_lies_in_cell():
    cell = s2cell.parent(s2cell.cell_id_from_lat_lng(-33.9, 151.2), 12)
    center = s2cell.cell_center(cell)
    assert s2cell.parent(s2cell.cell_id_from_lat_lng(*center), 12) == cell


def test_face_areas_cover_sphere():
    total = sum(s2cell.cell_area(_face_cell(f)) for f in range(6))
    assert total == pytest.approx(4 * math.pi, rel=1e-9)


def test_children_area_sums_to_parent():
    cell = s2cell.parent(s2cell.cell_id_from_lat_lng(*SF), 8)
    leaf = s2cell.cell_id_from_lat_lng(*SF)
    child = s2cell.parent(leaf, 9)
    assert s2cell.cell_area(child) < s2cell.cell_area(cell)
    assert s2cell.parent(child, 8) == cell


@pytest.mark.parametrize("point,level", [(SF, 16), ((10.0, 44.9999), 5), ((0.0, 0.0), 3)])
def test_neighbors_are_symmetric(point, level):
    cell = s2cell.parent(s2cell.cell_id_from_lat_lng(*point), level)
    neighbors = s2cell.edge_neighbors(cell)
    assert len(set(neighbors)) == 4
    assert cell not in neighbors
    for n in neighbors:
        assert s2cell.cell_level(n) == level
        assert cell in s2cell.edge_neighbors(n)


def test_vertices_are_distinct():
    cell = s2cell.parent(s2cell.cell_id_from_lat_lng(*SF), 14)
    vertices = s2cell.cell_vertices(cell)
    assert len(set(vertices)) == 4


def test_invalid_ids():
    assert not s2cell.is_valid(0)
    assert not s2cell.is_valid(7 << 61 | 1)
    with pytest.raises(ValueError):
        s2cell.cell_level(0)


def test_parent_rejects_finer_level():
    cell = s2cell.parent(s2cell.cell_id_from_lat_lng(*SF), 10)
    with pytest.raises(ValueError):
        s2cell.parent(cell, 11)