# tests/test_config.py

import pytest

from config import Settings


@pytest.mark.parametrize("raw,expected", [
    ("", []),
    ("http://a.com, http://b.com", ["http://a.com", "http://b.com"]),
    ('["http://a.com", " http://b.com "]', ["http://a.com", "http://b.com"]),
    (["http://c.com"], ["http://c.com"]),
])
def test_allowed_origins_parsing(raw, expected):
    assert Settings(ALLOWED_ORIGINS=raw).ALLOWED_ORIGINS == expected


def test_defaults(monkeypatch):
    for name in ("PERSIST_BACKEND", "SESSION_TTL_SECONDS", "SERVICE_TIMEOUT_SEC", "AI_BACKEND"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.PERSIST_BACKEND == "memory"
    assert s.SESSION_TTL_SECONDS == 1800
    assert s.SERVICE_TIMEOUT_SEC == 10.0
    assert s.AI_BACKEND == "simulated"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("session_ttl_seconds", "60")
    monkeypatch.setenv("TICKET_API_URL", "http://tickets.local")
    s = Settings(_env_file=None)
    assert s.SESSION_TTL_SECONDS == 60
    assert s.TICKET_API_URL == "http://tickets.local"
