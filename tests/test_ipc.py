import uuid

import pytest

from s2sgeo import ipc
from s2sgeo.shared_memory import SharedMemoryManager
from s2sgeo.structs import ContextFrame, WorldState


@pytest.fixture
def manager():
    mgr = SharedMemoryManager(name=f"s2t_{uuid.uuid4().hex[:12]}")
    mgr.initialize_server()
    yield mgr
    mgr.cleanup()


@pytest.fixture
def idle_manager():
    mgr = SharedMemoryManager(name=f"s2t_{uuid.uuid4().hex[:12]}")
    yield mgr
    mgr.cleanup()


def _sample_state():
    return WorldState(
        smoothed_lat=37.7749,
        smoothed_lon=-122.4194,
        smoothed_altitude=50.0,
        is_moving=True,
        step_count=42,
    )


def test_write_read(manager):
    ipc.write_state(_sample_state(), ContextFrame(road_name="Main St"), manager)
    entry = manager.read_entry(0)
    assert entry.state.smoothed_lat == 37.7749
    assert entry.state.smoothed_lon == -122.4194


def test_read_latest_returns_written_state(manager):
    ipc.write_state(_sample_state(), ContextFrame(road_name="Main St"), manager)
    result = ipc.read_latest_state(manager)
    assert result is not None
    state, context = result
    assert state.smoothed_altitude == 50.0
    assert state.is_moving is True
    assert state.step_count == 42
    assert context.road_name == "Main St"


def test_write_advances_counters(manager):
    ipc.write_state(_sample_state(), ContextFrame(), manager)
    ipc.write_state(_sample_state(), ContextFrame(), manager)
    header = manager.header()
    assert header.write_index == 2
    assert header.global_sequence == 2
    assert header.total_updates == 2
    assert manager.read_entry(0).sequence == 0
    assert manager.read_entry(1).sequence == 1


def test_write_index_wraps(manager):
    manager.header().write_index = 1023
    ipc.write_state(_sample_state(), ContextFrame(), manager)
    assert manager.header().write_index == 0
    assert manager.read_entry(1023).state.step_count == 42
    state, _ = ipc.read_latest_state(manager)
    assert state.step_count == 42


def test_read_at_zero_index_uses_last_slot(manager):
    manager.write_entry(1023, 7, WorldState(step_count=9), ContextFrame())
    state, _ = ipc.read_latest_state(manager)
    assert state.step_count == 9


def test_update_location(manager):
    ipc.write_state(_sample_state(), ContextFrame(road_name="Main St"), manager)
    manager.header().write_index = 0
    ipc.update_location(1.5, 2.5, 3.5, 1234, manager)
    entry = manager.read_entry(0)
    assert (entry.state.smoothed_lat, entry.state.smoothed_lon) == (1.5, 2.5)
    assert entry.state.smoothed_altitude == 3.5
    assert entry.state.last_update_ms == 1234
    assert entry.state.step_count == 42
    assert entry.context.road_name == "Main St"
    header = manager.header()
    assert header.write_index == 1
    assert header.total_updates == 1


def test_alive_signal(manager):
    header = manager.header()
    header.location_service_alive = False
    assert ipc.is_location_service_alive(manager) is False
    ipc.signal_alive(manager)
    assert header.location_service_alive is True
    assert ipc.is_location_service_alive(manager) is True


def test_header_metadata(manager):
    header = manager.header()
    header.accuracy_level = 0.75
    header.active_plugin = "cycling"
    assert ipc.accuracy_level(manager) == pytest.approx(0.75)
    assert ipc.active_plugin(manager) == "cycling"


def test_not_ready_defaults(idle_manager):
    ipc.write_state(_sample_state(), ContextFrame(), idle_manager)
    ipc.update_location(1.0, 2.0, 3.0, 4, idle_manager)
    ipc.signal_alive(idle_manager)
    assert ipc.read_latest_state(idle_manager) is None
    assert ipc.is_location_service_alive(idle_manager) is False
    assert ipc.active_plugin(idle_manager) == ""
    assert ipc.accuracy_level(idle_manager) == 1.0