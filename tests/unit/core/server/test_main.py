"""Tests for the server entry point: bind guard, transports and startup summary."""

from __future__ import annotations

import pytest

from lifemirror.core.config.settings import Settings
from lifemirror.core.server import main


class _RecordingServer:
    def __init__(self):
        self.calls = []

    def run(self, **kwargs):
        self.calls.append(kwargs)


@pytest.fixture
def server(monkeypatch):
    """Stand-in for the FastMCP app so run() returns instead of serving."""
    recorder = _RecordingServer()
    monkeypatch.setattr(main, "create_app", lambda: recorder)
    return recorder


class TestCheckBind:
    def test_loopback_allowed(self):
        main.check_bind(Settings())

    def test_public_host_refused(self):
        with pytest.raises(RuntimeError, match="non-loopback"):
            main.check_bind(Settings(lifemirror_host="0.0.0.0"))

    def test_public_host_with_opt_in(self):
        main.check_bind(Settings(lifemirror_host="0.0.0.0", lifemirror_allow_insecure_bind=True))

    def test_stdio_never_binds(self):
        main.check_bind(Settings(lifemirror_host="0.0.0.0", lifemirror_transport="stdio"))


class TestDescribeSession:
    def test_empty_baseline(self):
        summary = main.describe_session(Settings())
        assert "session=empty baseline" in summary
        assert "risk_window=6 moments" in summary
        assert "streak_window=7 days" in summary

    def test_demo_week(self):
        assert "session=demo week" in main.describe_session(Settings(seed_demo_data=True))


class TestRun:
    def test_streamable_http_by_default(self, server):
        main.run()
        assert server.calls == [{"transport": "streamable-http", "host": "127.0.0.1", "port": 8001}]

    def test_stdio_transport(self, server, monkeypatch):
        monkeypatch.setenv("LIFEMIRROR_TRANSPORT", "stdio")
        monkeypatch.setenv("LIFEMIRROR_HOST", "0.0.0.0")
        main.run()
        assert server.calls == [{"transport": "stdio"}]

    def test_refused_bind_never_creates_app(self, server, monkeypatch):
        monkeypatch.setenv("LIFEMIRROR_HOST", "10.0.0.5")
        with pytest.raises(RuntimeError):
            main.run()
        assert server.calls == []

    def test_logs_session_summary(self, server, caplog):
        with caplog.at_level("INFO", logger="lifemirror.core.server.main"):
            main.run()
        assert "session=empty baseline" in caplog.text
