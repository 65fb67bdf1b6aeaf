"""Prompt text built from location context."""

from __future__ import annotations

from .structs import ContextFrame, WorldState

_ROLE = "expert cycling AI assistant"


def format_context_prompt(ctx: ContextFrame) -> str:
    """Render a context frame as plain text, one fact per line."""
    return (
        f"Road: {ctx.road_name} ({ctx.road_type})\n"
        f"Traffic: {ctx.traffic_level}\n"
        f"Grade: {ctx.gradient_percent:.1f}%\n"
        f"Elevation gain: {ctx.elevation_gain_m:.1f}m\n"
        f"Current speed: {ctx.current_speed:.1f} m/s\n"
        f"Speed limit: {ctx.speed_limit:.1f} km/h\n"
    )


def build_system_instruction(state: WorldState) -> str:
    """Build the system instruction text from the world state."""
    parts = [
        f"You are an {_ROLE}. ",
        f"User is at coordinates {state.smoothed_lat:.6f}, {state.smoothed_lon:.6f}. ",
    ]
    if state.is_moving:
        parts.append("User is moving. ")
        parts.append(
            f"Detected {state.step_count} steps, "
            f"{state.estimated_distance_m:.1f}m traveled. "
        )
    else:
        parts.append("User is stationary. ")
    return "".join(parts)