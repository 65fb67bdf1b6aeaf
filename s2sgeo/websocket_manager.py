"""WebSocket connection lifecycle and message passing."""

from __future__ import annotations

import logging
from typing import Callable, Optional

_log = logging.getLogger(__name__)

OnMessageCallback = Callable[[str], None]
OnConnectedCallback = Callable[[], None]
OnErrorCallback = Callable[[str], None]


class NotConnectedError(ConnectionError):
    """A message was sent while no connection was open."""


class WebSocketManager:
    """Tracks a WebSocket connection and the messages sent over it."""

    def __init__(self) -> None:
        self.url = ""
        self._connected = False
        self.message_callback: Optional[OnMessageCallback] = None
        self.error_callback: Optional[OnErrorCallback] = None
        self.sent_messages: list[str] = []

    def connect(self, url: str, on_connected: Optional[OnConnectedCallback] = None) -> bool:
        """Open the connection and run the on-connected callback."""
        self.url = url
        _log.info("Connecting to: %s", url)
        self._connected = True
        if on_connected is not None:
            on_connected()
        _log.info("Connected")
        return True

    def send_message(self, message: str) -> bool:
        """Send a message.

        When not connected, the error callback receives "Not connected" and
        False is returned; without an error callback NotConnectedError is raised.
        """
        if not self._connected:
            if self.error_callback is not None:
                self.error_callback("Not connected")
                return False
            raise NotConnectedError("Not connected")
        self.sent_messages.append(message)
        _log.info("Sending message (%d bytes)", len(message.encode("utf-8")))
        return True

    def set_message_callback(self, callback: Optional[OnMessageCallback]) -> None:
        self.message_callback = callback

    def set_error_callback(self, callback: Optional[OnErrorCallback]) -> None:
        self.error_callback = callback

    def disconnect(self) -> None:
        """Close the connection if open."""
        if self._connected:
            _log.info("Disconnecting")
            self._connected = False

    def is_connected(self) -> bool:
        return self._connected