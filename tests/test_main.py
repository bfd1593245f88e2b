"""
Tests for the Command Line Client

Tests argument parsing and command execution against a mock transport.
"""

import json

import pytest

from hipchat import HipChatClient, ResponseFormat
from hipchat.main import build_parser, main, run

ROOMS = {"rooms": [{"room_id": 7, "name": "Development", "topic": "APIs"}]}
HISTORY = {
    "messages": [
        {
            "date": "2012-03-01T09:00:00+0000",
            "from": {"name": "alice", "user_id": 1},
            "message": "morning",
        }
    ]
}


class MockTransport:
    def __init__(self):
        self.calls = []

    def send(self, method, url, params):
        self.calls.append((method, url, dict(params)))
        if url.endswith("rooms/list"):
            return 200, json.dumps(ROOMS)
        if url.endswith("rooms/history"):
            return 200, json.dumps(HISTORY)
        return 200, '{"status": "sent"}'


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def client(transport):
    return HipChatClient(token="env-token", room=1, transport=transport)


def test_send_command(client, transport, capsys):
    args = build_parser().parse_args(
        ["send", "Build finished", "--room", "42", "--from", "CI", "--notify", "--color", "green"]
    )

    run(args, client)

    params = transport.calls[0][2]
    assert params["room_id"] == "42"
    assert params["from"] == "CI"
    assert params["notify"] == "1"
    assert params["color"] == "green"
    assert params["message_format"] == "html"
    assert "Message sent" in capsys.readouterr().out


def test_send_command_uses_defaults(client, transport):
    run(build_parser().parse_args(["send", "hello", "--text"]), client)

    params = transport.calls[0][2]
    assert params["room_id"] == "1"
    assert params["notify"] == "0"
    assert params["message_format"] == "text"


def test_global_options_override_client_settings(client, transport):
    args = build_parser().parse_args(["--token", "cli-token", "--format", "xml", "rooms", "--raw"])

    run(args, client)

    assert client.format == ResponseFormat.XML
    assert transport.calls[0][2]["auth_token"] == "cli-token"


def test_rooms_command(client, capsys):
    run(build_parser().parse_args(["rooms"]), client)
    assert "7\tDevelopment\tAPIs" in capsys.readouterr().out


def test_history_command(client, transport, capsys):
    run(build_parser().parse_args(["history", "--date", "2012-03-01", "--room", "Ops"]), client)

    params = transport.calls[0][2]
    assert params["date"] == "2012-03-01"
    assert params["room_id"] == "Ops"
    assert "[2012-03-01 09:00] alice: morning" in capsys.readouterr().out


def test_invalid_date_is_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["history", "--date", "March 1st"])


def test_main_reports_errors(monkeypatch, capsys):
    monkeypatch.delenv("HIPCHAT_ROOM", raising=False)
    monkeypatch.setenv("HIPCHAT_TOKEN", "abc")

    with pytest.raises(SystemExit) as exc_info:
        main(["send", "hello"])

    assert exc_info.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_main_reports_bad_timeout(monkeypatch, capsys):
    monkeypatch.setenv("HIPCHAT_TOKEN", "abc")
    monkeypatch.setenv("HIPCHAT_TIMEOUT", "soon")

    with pytest.raises(SystemExit) as exc_info:
        main(["rooms"])

    assert exc_info.value.code == 1
    assert "Error:" in capsys.readouterr().err
