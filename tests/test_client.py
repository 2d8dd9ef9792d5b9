"""Tests for HttpSessionStore against the real app and a mocked transport."""

import subprocess
import sys
from datetime import date
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from overtimer.api.app import create_app
from overtimer.api.client import HttpSessionStore
from overtimer.api.routes import get_store
from overtimer.sessions.errors import SessionStoreError, StoreUnavailable, ValidationError
from overtimer.sessions.recorder import SessionRecorder
from overtimer.sessions.store import NewSession
from overtimer.timer.engine import FinishedRun, TimerMode


@pytest.fixture
def remote(store):
    app = create_app(manage_database=False)
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield HttpSessionStore(client=test_client)


def _mocked(handler):
    return HttpSessionStore(
        client=httpx.Client(base_url="http://overtimer.test", transport=httpx.MockTransport(handler))
    )


def _new(name="Remote", extra=0):
    return NewSession(name, 60, 60 + extra, extra)


class TestAgainstApp:

    def test_create_and_list(self, remote):
        created = remote.create_session(_new(extra=15))
        assert created.session_name == "Remote"
        assert created.extra_time_seconds == 15
        assert created.session_date == date(2026, 10, 19)

        [listed] = remote.list_sessions()
        assert listed == created

    def test_list_by_date(self, remote):
        remote.create_session(_new())
        assert len(remote.list_sessions_by_date("2026-10-19")) == 1
        assert remote.list_sessions_by_date(date(2026, 10, 18)) == []

    def test_bad_date_rejected_before_request(self, remote):
        with pytest.raises(ValidationError):
            remote.list_sessions_by_date("tomorrow")

    def test_limit(self, remote):
        for i in range(4):
            remote.create_session(_new(name=f"r{i}"))
        assert [r.session_name for r in remote.list_sessions(2)] == ["r3", "r2"]

    def test_delete(self, remote):
        record = remote.create_session(_new())
        assert remote.delete_session(record.id) is True
        assert remote.delete_session(record.id) is False

    def test_delete_all(self, remote):
        for _ in range(3):
            remote.create_session(_new())
        assert remote.delete_all_sessions() == 3
        assert remote.list_sessions() == []

    def test_invalid_limit_is_validation_error(self, remote):
        with pytest.raises(ValidationError):
            remote.list_sessions(0)

    def test_recorder_over_http(self, qapp, remote, store, clock):
        rec = SessionRecorder(remote, clock=clock)
        rec.session_name = "Via HTTP"
        rec.record(FinishedRun(5, clock.now_ms - 9000, TimerMode.OVERTIME, 4))
        assert rec.wait_for_pending(5000)
        [record] = store.list_sessions()
        assert record.session_name == "Via HTTP"
        assert record.actual_duration_seconds == 9
        assert record.extra_time_seconds == 4


class TestTransportFailures:

    def test_connection_error_is_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StoreUnavailable, match="connection refused"):
            _mocked(handler).list_sessions()

    def test_server_error_is_unavailable(self):
        def handler(request):
            return httpx.Response(503, json={"success": False, "error": "Session store unavailable"})

        with pytest.raises(StoreUnavailable, match="Session store unavailable"):
            _mocked(handler).create_session(_new())

    def test_plain_text_error_body(self):
        def handler(request):
            return httpx.Response(500, text="Internal Server Error")

        with pytest.raises(StoreUnavailable, match="Internal Server Error"):
            _mocked(handler).delete_all_sessions()

    def test_unexpected_status(self):
        def handler(request):
            return httpx.Response(403, json={"success": False, "error": "forbidden"})

        with pytest.raises(SessionStoreError, match="403"):
            _mocked(handler).list_sessions()

    def test_delete_sends_id(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"success": True, "deleted": True})

        assert _mocked(handler).delete_session(7) is True
        assert seen[0].method == "DELETE"
        assert seen[0].url.path == "/api/timer-sessions"
        assert seen[0].url.params["id"] == "7"

    def test_close(self):
        store = _mocked(lambda request: httpx.Response(200, json={}))
        store.close()
        with pytest.raises(RuntimeError):
            store._client.get("/")


class TestImports:

    def test_desktop_app_does_not_build_the_server(self):
        code = (
            "import sys, overtimer.app; "
            "print('overtimer.api.app' in sys.modules, 'fastapi' in sys.modules)"
        )
        result = subprocess.run(
            [sys.executable, "-c", code],
            cwd=Path(__file__).resolve().parents[1],
            capture_output=True,
            text=True,
            check=True,
        )
        assert result.stdout.split() == ["False", "False"]
