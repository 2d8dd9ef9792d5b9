"""Shared pytest fixtures for Overtimer tests."""

import os
import sys
import tempfile

# before any Qt or overtimer import: headless Qt, and keep files out of $HOME
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("OVERTIMER_HOME", tempfile.mkdtemp(prefix="overtimer-tests-"))

import pytest

from PyQt6.QtWidgets import QApplication

from overtimer.database.db import configure_engine, init_db
from overtimer.database.repository import SqlSessionStore
from overtimer.sessions.recorder import SessionRecorder
from overtimer.timer.engine import TimerEngine

from helpers import FakeClock, StepDateTime


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def drain_recorders(monkeypatch):
    """Let background saves queued by a test finish before the next test
    swaps the database engine out from under them."""
    recorders = []
    original_init = SessionRecorder.__init__

    def tracking_init(self, *args, **kwargs):
        original_init(self, *args, **kwargs)
        recorders.append(self)

    monkeypatch.setattr(SessionRecorder, "__init__", tracking_init)
    yield
    for recorder in recorders:
        try:
            recorder.wait_for_pending()
        except RuntimeError:
            pass  # underlying Qt object already deleted (its pool waited on destruction)


@pytest.fixture(autouse=True)
def settings_path(tmp_path, monkeypatch):
    """Never write settings.json outside the test's tmp dir."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("overtimer.settings.SETTINGS_PATH", path)
    return path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(qapp, clock):
    """Fresh TimerEngine with the default 25 minute target."""
    return TimerEngine(parent=None, clock=clock)


@pytest.fixture
def short_engine(qapp, clock):
    """TimerEngine with a five second target."""
    return TimerEngine(parent=None, target_seconds=5, clock=clock)


@pytest.fixture
def store():
    """Database store whose completed_at moves forward one minute per write."""
    return SqlSessionStore(clock=StepDateTime())
