"""
Tests for Send Message Functionality

Tests for the send-message entry points including:
- Merging call arguments with the configured defaults
- Room resolution (id, name, default) and MissingRoom
- Validation and truncation before dispatch
- Convenience wrappers and the MessageParams options object
- Transport failures
"""

import pytest

from hipchat import (
    BackgroundColor,
    ClientConfig,
    HipChatClient,
    InvalidParameter,
    MessageParams,
    MissingRoom,
    RoomId,
    RoomName,
    TransportFailure,
)


class MockTransport:
    """Mock transport recording every call."""

    def __init__(self, status=200, body='{"status": "sent"}'):
        self.calls = []
        self.status = status
        self.body = body

    def send(self, method, url, params):
        self.calls.append((method, url, dict(params)))
        return self.status, self.body

    @property
    def last_params(self):
        return self.calls[-1][2]


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def client(transport):
    return HipChatClient(token="abc", room=123, transport=transport)


# Defaults


def test_send_message_uses_configured_defaults(client, transport):
    """token=abc, default room 123, send_message("hello")."""
    client.send_message("hello")

    assert len(transport.calls) == 1
    method, url, params = transport.calls[0]
    assert method == "POST"
    assert url == "https://api.hipchat.com/v1/rooms/message"
    assert params["room_id"] == "123"
    assert params["message"] == "hello"
    assert params["auth_token"] == "abc"
    assert params["from"] == client.sender
    assert params["notify"] == "0"
    assert params["color"] == "yellow"
    assert params["format"] == "json"
    assert params["message_format"] == "html"


def test_send_message_with_explicit_values(client, transport):
    """send_message("hi", "42", "bot", True) targets room "42" with notify."""
    client.send_message("hi", "42", "bot", True)

    params = transport.last_params
    assert params["room_id"] == "42"
    assert params["from"] == "bot"
    assert params["notify"] == "1"


def test_send_message_by_room_name(client, transport):
    client.send_message("hi", room="Development")
    assert transport.last_params["room_id"] == "Development"


def test_send_message_accepts_room_ref(client, transport):
    client.send_message("hi", room=RoomName("Ops"))
    assert transport.last_params["room_id"] == "Ops"


def test_valid_sender_is_not_modified(client, transport):
    client.send_message("hi", sender="Deploy-Bot_01")
    assert transport.last_params["from"] == "Deploy-Bot_01"


def test_color_can_be_given_as_string(client, transport):
    client.send_message("hi", color="Red")
    assert transport.last_params["color"] == "red"


def test_unknown_color_is_rejected(client, transport):
    with pytest.raises(InvalidParameter) as exc_info:
        client.send_message("hi", color="orange")

    assert exc_info.value.field == "color"
    assert transport.calls == []


def test_plain_text_message_format(client, transport):
    client.send_message("<b>not bold</b>", message_format="text")
    assert transport.last_params["message_format"] == "text"


def test_configured_format_is_sent(client, transport):
    client.format = "xml"
    client.send_message("hi")
    assert transport.last_params["format"] == "xml"


# Call arguments are request-scoped


def test_call_arguments_do_not_change_defaults(client, transport):
    client.send_message("hi", room=7, sender="other", notify=True, color="green")

    assert client.room == RoomId(123)
    assert client.sender == "API"
    assert client.notify is False
    assert client.color == BackgroundColor.YELLOW

    client.send_message("again")
    params = transport.last_params
    assert params["room_id"] == "123"
    assert params["from"] == "API"
    assert params["notify"] == "0"
    assert params["color"] == "yellow"


def test_property_changes_apply_to_later_calls(client, transport):
    client.room_name = "Ops"
    client.sender = "cron"
    client.notify = True
    client.color = BackgroundColor.PURPLE

    client.send_message("hi")

    params = transport.last_params
    assert params["room_id"] == "Ops"
    assert params["from"] == "cron"
    assert params["notify"] == "1"
    assert params["color"] == "purple"


# Missing room


def test_missing_room_raises():
    transport = MockTransport()
    client = HipChatClient(token="abc", transport=transport)

    with pytest.raises(MissingRoom):
        client.send_message("hello")

    assert transport.calls == []


def test_missing_room_for_every_wrapper():
    client = HipChatClient(token="abc", transport=MockTransport())

    with pytest.raises(MissingRoom):
        client.send_message_as("hello", "bot")
    with pytest.raises(MissingRoom):
        client.send_colored_message("hello", "red")
    with pytest.raises(MissingRoom):
        client.send(MessageParams(message="hello"))
    with pytest.raises(MissingRoom):
        client.send_message_to_room("hello", "   ")


def test_blank_room_name_is_missing(transport):
    client = HipChatClient(token="abc", room="", transport=transport)
    with pytest.raises(MissingRoom):
        client.send_message("hello")


# Validation and truncation


def test_long_sender_is_truncated_by_default(client, transport):
    client.send_message("hi", sender="abcdefghijklmnopqrst")
    assert transport.last_params["from"] == "abcdefghijklmno"


def test_sender_with_bad_tail_is_truncated_and_sent(client, transport):
    client.send_message("hi", sender="release-bot-0123!!!")
    assert transport.last_params["from"] == "release-bot-012"


def test_long_sender_is_rejected_without_truncation(client, transport):
    client.auto_truncate = False

    with pytest.raises(InvalidParameter) as exc_info:
        client.send_message("hi", sender="abcdefghijklmnopqrst")

    assert exc_info.value.field == "from"
    assert transport.calls == []


def test_build_request_returns_canonical_request(client):
    request = client.build_request("hi", room=5, sender="bot", color="gray")

    assert request.message == "hi"
    assert request.room == RoomId(5)
    assert request.sender == "bot"
    assert request.notify is False
    assert request.color == BackgroundColor.GRAY


def test_send_request_validates_prebuilt_requests(client, transport):
    request = client.build_request("hi")
    request.sender = "x" * 20

    client.send_request(request)

    assert transport.last_params["from"] == "x" * 15


# Convenience wrappers


def test_send_message_to_room(client, transport):
    client.send_message_to_room("hi", 99, sender="bot", notify=True)

    params = transport.last_params
    assert params["room_id"] == "99"
    assert params["from"] == "bot"
    assert params["notify"] == "1"


def test_send_message_as(client, transport):
    client.send_message_as("hi", "alice", color="green")

    params = transport.last_params
    assert params["room_id"] == "123"
    assert params["from"] == "alice"
    assert params["color"] == "green"


def test_send_colored_message(client, transport):
    client.send_colored_message("hi", BackgroundColor.RED, notify=True)

    params = transport.last_params
    assert params["color"] == "red"
    assert params["notify"] == "1"


def test_send_with_message_params(client, transport):
    client.send(
        MessageParams(
            message="deployed", sender="ci", room_name="Ops", color=BackgroundColor.GREEN
        )
    )

    params = transport.last_params
    assert params["message"] == "deployed"
    assert params["from"] == "ci"
    assert params["room_id"] == "Ops"
    assert params["color"] == "green"


# Token and transport errors


def test_missing_token_is_rejected():
    transport = MockTransport()
    client = HipChatClient(room=1, transport=transport, config=ClientConfig())

    with pytest.raises(InvalidParameter) as exc_info:
        client.send_message("hi")

    assert exc_info.value.field == "auth_token"
    assert transport.calls == []


def test_non_2xx_status_raises_transport_failure(client):
    client._transport = MockTransport(
        status=401,
        body='{"error": {"code": 401, "type": "Unauthorized", "message": "Auth token invalid."}}',
    )

    with pytest.raises(TransportFailure) as exc_info:
        client.send_message("hi")

    assert exc_info.value.status_code == 401
    assert "Auth token invalid." in str(exc_info.value)


def test_transport_errors_propagate(client):
    class FailingTransport:
        def send(self, method, url, params):
            raise TransportFailure(ConnectionError("unreachable"))

    client._transport = FailingTransport()

    with pytest.raises(TransportFailure, match="unreachable"):
        client.send_message("hi")
