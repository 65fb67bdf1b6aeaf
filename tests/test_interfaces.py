import pytest

from s2sgeo.cycling import CyclingContextProvider
from s2sgeo.geometry import S2GeometryIndex
from s2sgeo.interfaces import ContextProvider, GeometryIndex, LocationFilter
from s2sgeo.kalman import KalmanFilter
from s2sgeo.structs import LocationFix


@pytest.mark.parametrize("cls", [ContextProvider, GeometryIndex, LocationFilter])
def test_interfaces_are_abstract(cls):
    with pytest.raises(TypeError):
        cls()


def test_cycling_provider_implements_context_provider():
    provider = CyclingContextProvider()
    assert isinstance(provider, ContextProvider)
    assert provider.name == "cycling"


def test_geometry_index_implementation():
    index = S2GeometryIndex()
    assert isinstance(index, GeometryIndex)
    assert index.crossed_boundary(10.0, 20.0, 10.0, 20.0) is False


def test_kalman_filter_implements_location_filter():
    flt = KalmanFilter()
    assert isinstance(flt, LocationFilter)
    flt.update(LocationFix(37.7749, -122.4194, 1000))
    assert flt.smoothed_state().smoothed_lat == pytest.approx(37.7749, abs=0.01)
    flt.reset()
    assert flt.smoothed_state().smoothed_lat == 0.0