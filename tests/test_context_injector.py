from s2sgeo.context_injector import build_system_instruction, format_context_prompt
from s2sgeo.structs import ContextFrame, WorldState


def _frame():
    return ContextFrame(
        road_name="Main Street",
        road_type="asphalt",
        traffic_level="moderate",
        current_speed=18.0,
        speed_limit=50.0,
        elevation_gain_m=45.0,
        gradient_percent=5.5,
    )


def test_format_context_prompt_full_text():
    assert format_context_prompt(_frame()) == (
        "Road: Main Street (asphalt)\n"
        "Traffic: moderate\n"
        "Grade: 5.5%\n"
        "Elevation gain: 45.0m\n"
        "Current speed: 18.0 m/s\n"
        "Speed limit: 50.0 km/h\n"
    )


def test_format_context_prompt_has_six_lines():
    lines = format_context_prompt(ContextFrame()).splitlines()
    assert len(lines) == 6
    assert lines[0] == "Road:  ()"


def test_format_rounds_to_one_decimal():
    ctx = ContextFrame(gradient_percent=5.55, elevation_gain_m=12.04)
    text = format_context_prompt(ctx)
    assert "Elevation gain: 12.0m" in text


def test_stationary_instruction():
    state = WorldState(smoothed_lat=37.7749, smoothed_lon=-122.4194)
    text = build_system_instruction(state)
    assert text.startswith("You are an expert cycling AI assistant. ")
    assert "37.774900, -122.419400" in text
    assert text.endswith("User is stationary. ")
    assert "Detected" not in text


def test_moving_instruction():
    state = WorldState(
        smoothed_lat=1.0,
        smoothed_lon=2.0,
        is_moving=True,
        step_count=42,
        estimated_distance_m=12.34,
    )
    text = build_system_instruction(state)
    assert "User is moving. " in text
    assert text.endswith("Detected 42 steps, 12.3m traveled. ")
    assert "stationary" not in text