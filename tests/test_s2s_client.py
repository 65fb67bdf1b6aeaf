import pytest

from s2sgeo.s2s_client import LIVE_ENDPOINT, RESPONSE_BYTES, S2SClient
from s2sgeo.websocket_manager import NotConnectedError


@pytest.fixture
def client():
    c = S2SClient()
    c.connect("placeholder")
    return c


def test_connect_sets_endpoint(client):
    assert client.is_connected() is True
    assert client.websocket_url == LIVE_ENDPOINT
    assert client.api_key == "placeholder"


def test_send_audio_encodes_base64(client):
    message = client.send_audio(b"\x01\x02")
    inline = message["client_content"]["turns"][0]["parts"][0]["inline_data"]
    assert inline["mime_type"] == "audio/pcm"
    assert inline["data"] == "AQI="
    assert client.sent_messages[-1] is message


def test_audio_callback_gets_silence(client):
    received = []
    client.set_audio_response_callback(received.append)
    client.send_audio(b"\x00" * 10)
    assert len(received) == 1
    assert received[0] == bytes(16000)
    assert len(received[0]) == RESPONSE_BYTES


def test_send_context_message(client):
    message = client.send_context("hello")
    assert message == {"system_instruction": "hello"}
    assert client.sent_messages == [message]


def test_not_connected_raises():
    c = S2SClient()
    with pytest.raises(NotConnectedError):
        c.send_audio(b"\x00")
    with pytest.raises(NotConnectedError):
        c.send_context("x")


def test_disconnect(client):
    client.disconnect()
    assert client.is_connected() is False
    with pytest.raises(NotConnectedError):
        client.send_context("x")