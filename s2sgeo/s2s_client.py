"""Speech-to-speech client session for the live model endpoint."""

from __future__ import annotations

import base64
import logging
from typing import Any, Callable, Optional

from .websocket_manager import NotConnectedError

_log = logging.getLogger(__name__)

LIVE_ENDPOINT = (
    "wss://generativelanguage.googleapis.com/"
    "google.ai.generativelanguage.v1alpha.GenerativeService.BidiGenerateContent"
)
RESPONSE_BYTES = 16000  # one second of silence

AudioCallback = Callable[[bytes], None]


class S2SClient:
    """Builds and sends audio and context messages over a live session."""

    def __init__(self) -> None:
        self.api_key = ""
        self.websocket_url = ""
        self._connected = False
        self._audio_callback: Optional[AudioCallback] = None
        self.sent_messages: list[dict[str, Any]] = []
        _log.info("Initialized")

    def connect(self, api_key: str) -> bool:
        """Open the session with the given API key."""
        self.api_key = api_key
        self.websocket_url = LIVE_ENDPOINT
        _log.info("Connecting to live endpoint: %s", self.websocket_url)
        self._connected = True
        _log.info("Connected")
        return True

    def _require_connection(self) -> None:
        if not self._connected:
            raise NotConnectedError("Not connected")

    def send_audio(self, pcm_data: bytes) -> dict[str, Any]:
        """Send a PCM audio chunk and return the message sent."""
        self._require_connection()
        data = bytes(pcm_data)
        message = {
            "client_content": {
                "turns": [
                    {
                        "parts": [
                            {
                                "inline_data": {
                                    "mime_type": "audio/pcm",
                                    "data": base64.b64encode(data).decode("ascii"),
                                }
                            }
                        ]
                    }
                ]
            }
        }
        self.sent_messages.append(message)
        _log.info("Sent audio chunk (%d bytes)", len(data))
        if self._audio_callback is not None:
            self._audio_callback(bytes(RESPONSE_BYTES))
        return message

    def send_context(self, json_context: str) -> dict[str, Any]:
        """Send a system-instruction update and return the message sent."""
        self._require_connection()
        message = {"system_instruction": json_context}
        self.sent_messages.append(message)
        _log.info("Sent context update: %s", json_context)
        return message

    def disconnect(self) -> None:
        """Close the session if open."""
        if self._connected:
            _log.info("Disconnecting")
            self._connected = False

    def set_audio_response_callback(self, callback: Optional[AudioCallback]) -> None:
        """Set the function that receives audio responses."""
        self._audio_callback = callback

    def is_connected(self) -> bool:
        return self._connected