import pytest
from pydantic import ValidationError

from hltracker.config import TrackerConfig

def test_defaults():
    cfg = TrackerConfig(host=" hltracker.com ")
    assert cfg.host == "hltracker.com"
    assert cfg.port == 5498
    assert cfg.chunk_size == 1024
    assert cfg.encoding == "mac_roman"

def test_env_and_overrides(monkeypatch):
    monkeypatch.setenv("HLTRACKER_HOST", "env.example")
    monkeypatch.setenv("HLTRACKER_PORT", "7000")
    cfg = TrackerConfig.from_env()
    assert (cfg.host, cfg.port) == ("env.example", 7000)
    cfg = TrackerConfig.from_env(host="cli.example", port=None)
    assert (cfg.host, cfg.port) == ("cli.example", 7000)

@pytest.mark.parametrize("kwargs", [
    {"host": ""},
    {"host": "x", "port": 0},
    {"host": "x", "timeout": 0},
    {"host": "x", "encoding": "no-such-codec"},
    {"host": "x", "encoding": "rot13"},
    {"host": "x", "encoding": "hex"},
    {"host": "x", "encoding": "base64"},
])
def test_invalid(kwargs):
    with pytest.raises(ValidationError):
        TrackerConfig(**kwargs)
