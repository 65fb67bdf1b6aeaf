from s2sgeo.structs import WorldState
from s2sgeo.world_state import WorldStateStore, get_world_state


def test_initial_state_is_zeroed():
    assert WorldStateStore().state() == WorldState()


def test_update_position_and_sequence():
    store = WorldStateStore()
    store.update_position(37.7749, -122.4194, 50.0, 1000)
    store.update_position(37.7750, -122.4195, 51.0, 1100)
    state = store.state()
    assert store.latitude() == 37.7750
    assert store.longitude() == -122.4195
    assert state.smoothed_altitude == 51.0
    assert state.last_update_ms == 1100
    assert state.update_sequence == 2


def test_other_updates():
    store = WorldStateStore()
    store.update_s2_cell(12345, 16)
    store.set_moving(True)
    store.update_step_count(42)
    store.update_estimated_distance(29.4)
    state = store.state()
    assert store.s2_cell_id() == 12345
    assert state.s2_cell_level == 16
    assert state.is_moving is True
    assert state.step_count == 42
    assert state.estimated_distance_m == 29.4


def test_context_truncated_to_capacity():
    store = WorldStateStore()
    store.update_context("x" * 5000)
    assert len(store.context_json()) == WorldState.CONTEXT_JSON_SIZE - 1


def test_state_is_a_copy():
    store = WorldStateStore()
    snapshot = store.state()
    snapshot.smoothed_lat = 99.0
    assert store.latitude() == 0.0


def test_print_state(capsys):
    store = WorldStateStore()
    store.update_context('{"road":"Main St"}')
    store.update_step_count(7)
    store.print_state()
    out = capsys.readouterr().out
    assert "=== WorldState ===" in out
    assert "Steps: 7" in out
    assert 'Context: {"road":"Main St"}' in out
    assert "Moving: No" in out


def test_singleton_shares_state():
    store = get_world_state()
    previous = store.state().step_count
    try:
        store.update_step_count(5)
        assert get_world_state().state().step_count == 5
    finally:
        store.update_step_count(previous)