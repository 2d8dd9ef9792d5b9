"""Turns finished timer runs into stored session records.

The recorder listens to ``TimerEngine.run_finished``.  The engine has
already returned to IDLE by the time the write happens: saving runs on a
one-thread pool, so a slow or broken store never holds up the UI.  A
failed save is logged and dropped.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from ..timer.clock import now_millis
from ..timer.engine import FinishedRun, TimerEngine
from .errors import SessionStoreError
from .store import NewSession, SessionStore, default_session_name

logger = logging.getLogger(__name__)


class _SaveSignals(QObject):
    saved = pyqtSignal(object)
    failed = pyqtSignal(str)


class _SaveTask(QRunnable):
    """One create-session call, executed off the GUI thread."""

    def __init__(self, store: SessionStore, new: NewSession, signals: _SaveSignals) -> None:
        super().__init__()
        self._store = store
        self._new = new
        self._signals = signals

    def run(self) -> None:
        try:
            record = self._store.create_session(self._new)
        except SessionStoreError as exc:
            logger.warning("Could not save session %r: %s", self._new.session_name, exc)
            self._signals.failed.emit(str(exc))
            return
        except Exception:
            logger.exception("Unexpected error saving session %r", self._new.session_name)
            self._signals.failed.emit("unexpected error")
            return
        logger.info(
            "Saved session %d (%r, %ds actual, %ds overtime)",
            record.id,
            record.session_name,
            record.actual_duration_seconds,
            record.extra_time_seconds,
        )
        self._signals.saved.emit(record)


class SessionRecorder(QObject):
    """Fire-and-forget writer for finished runs.

    Signals
    -------
    saved(record: SessionRecord)
        A session was stored.  Delivered on the recorder's thread.
    save_failed(message: str)
        The store rejected or could not take the write.
    """

    saved = pyqtSignal(object)
    save_failed = pyqtSignal(str)

    def __init__(
        self,
        store: SessionStore,
        parent: QObject | None = None,
        *,
        clock: Callable[[], int] = now_millis,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._clock = clock
        self._today = today
        self._session_name: str = ""

        # one worker: writes reach the store in the order runs finished
        self._pool = QThreadPool(self)
        self._pool.setMaxThreadCount(1)

        self._signals = _SaveSignals(self)
        self._signals.saved.connect(self.saved)
        self._signals.failed.connect(self.save_failed)

    # ── configuration ─────────────────────────────────────────────────

    @property
    def store(self) -> SessionStore:
        return self._store

    @store.setter
    def store(self, store: SessionStore) -> None:
        self._store = store

    @property
    def session_name(self) -> str:
        return self._session_name

    @session_name.setter
    def session_name(self, value: str) -> None:
        self._session_name = value.strip()

    def attach(self, engine: TimerEngine) -> None:
        engine.run_finished.connect(self.record)

    # ── recording ─────────────────────────────────────────────────────

    def build_request(self, run: FinishedRun) -> NewSession:
        """Summarise *run* as a create-session request, timed at now."""
        elapsed_ms = max(0, self._clock() - run.started_at_ms)
        return NewSession(
            session_name=self._session_name or default_session_name(self._today()),
            target_duration_seconds=run.target_duration_seconds,
            actual_duration_seconds=elapsed_ms // 1000,
            extra_time_seconds=run.overtime_seconds,
        )

    def record(self, run: FinishedRun) -> NewSession:
        """Queue a save for *run* and return the request that was queued."""
        new = self.build_request(run)
        self._pool.start(_SaveTask(self._store, new, self._signals))
        return new

    def wait_for_pending(self, timeout_ms: int = -1) -> bool:
        """Block until queued saves are done.  Used on shutdown and in tests."""
        return self._pool.waitForDone(timeout_ms)
