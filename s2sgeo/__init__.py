"""Kalman-smoothed location, S2 cells, pluggable context providers, a shared-memory ring buffer and prompt building for speech-to-speech sessions."""

__version__ = "1.0.0"