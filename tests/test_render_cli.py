import json

import pytest

from hltracker import cli
from hltracker.render import format_table
from hltracker.session import TrackerSession


def test_table_layout(servers):
    lines = format_table(servers).splitlines()
    assert lines[0].startswith("IP" + " " * 19 + "NAME")
    row = lines[1]
    assert row[:21] == "10.0.0.1:5500".ljust(21)
    assert row[21:58] == "Alice".ljust(37)
    assert row[58:65] == "3".ljust(7)
    assert row[65:] == "Chat"

def test_long_names_truncated(servers):
    s = servers[0].model_copy(update={"name": "N" * 80})
    row = format_table([s]).splitlines()[1]
    assert row[21:58] == "N" * 36 + " "

def test_missing_host_prints_usage(capsys):
    with pytest.raises(SystemExit) as ei:
        cli.main([])
    assert ei.value.code != 0
    assert "usage" in capsys.readouterr().err

def _patch_session(monkeypatch, sock, seen=None):
    def from_config(cfg):
        if seen is not None:
            seen.append(cfg)
        return TrackerSession(sock)
    monkeypatch.setattr(cli.TrackerSession, "from_config", from_config)

def test_prints_table(monkeypatch, capsys, fake_socket, listing_bytes):
    seen = []
    _patch_session(monkeypatch, fake_socket([listing_bytes]), seen)
    assert cli.main(["tracker.example", "--port", "6000"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[1].startswith("10.0.0.1:5500")
    assert seen[0].host == "tracker.example"
    assert seen[0].port == 6000

def test_prints_json(monkeypatch, capsys, fake_socket, listing_bytes):
    _patch_session(monkeypatch, fake_socket([listing_bytes]))
    assert cli.main(["tracker.example", "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["servers"][0]["address"] == "10.0.0.1"
    assert doc["header"]["declared_count"] == 3

def test_tracker_error_exit_status(monkeypatch, capsys, fake_socket, listing_bytes):
    _patch_session(monkeypatch, fake_socket([listing_bytes[:10]]))
    assert cli.main(["tracker.example"]) == 1
    assert "error:" in capsys.readouterr().err

def test_connection_error_exit_status(monkeypatch, capsys):
    def refuse(cfg):
        raise ConnectionRefusedError("connection refused")
    monkeypatch.setattr(cli.TrackerSession, "from_config", refuse)
    assert cli.main(["tracker.example"]) == 1
    assert "refused" in capsys.readouterr().err

def test_non_text_encoding_is_a_settings_error(capsys):
    assert cli.main(["127.0.0.1", "--port", "1", "--encoding", "rot13"]) == 2
    assert "invalid settings" in capsys.readouterr().err
