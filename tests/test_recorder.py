"""Tests for SessionRecorder: what gets written when a run is reset."""

import logging
import threading
from datetime import date

import pytest
from PyQt6.QtWidgets import QApplication

from overtimer.sessions.recorder import SessionRecorder
from overtimer.sessions.store import NewSession
from overtimer.timer.engine import FinishedRun, TimerEngine, TimerMode

from helpers import BrokenStore, SignalCollector, run_ticks

MONDAY = date(2026, 10, 19)


@pytest.fixture
def recorder(qapp, store, clock):
    rec = SessionRecorder(store, clock=clock, today=lambda: MONDAY)
    yield rec
    rec.wait_for_pending()


class BlockingStore:
    """Holds every create_session call until released."""

    def __init__(self, inner):
        self._inner = inner
        self.entered = threading.Event()
        self.release = threading.Event()

    def create_session(self, new):
        self.entered.set()
        self.release.wait(5)
        return self._inner.create_session(new)


class TestBuildRequest:

    def test_elapsed_is_wall_clock(self, recorder, clock):
        run = FinishedRun(
            target_duration_seconds=60,
            started_at_ms=clock.now_ms,
            mode=TimerMode.COUNTING_DOWN,
            remaining_seconds=30,
        )
        clock.advance(95.7)
        new = recorder.build_request(run)
        assert new.actual_duration_seconds == 95
        assert new.extra_time_seconds == 0
        assert new.target_duration_seconds == 60

    def test_overtime_copied_from_run(self, recorder, clock):
        run = FinishedRun(60, clock.now_ms, TimerMode.OVERTIME, 12)
        clock.advance(72)
        assert recorder.build_request(run).extra_time_seconds == 12

    def test_clock_going_backwards_is_zero(self, recorder, clock):
        run = FinishedRun(60, clock.now_ms + 10_000, TimerMode.COUNTING_DOWN, 60)
        assert recorder.build_request(run).actual_duration_seconds == 0

    def test_blank_name_falls_back_to_date(self, recorder, clock):
        recorder.session_name = "   "
        run = FinishedRun(60, clock.now_ms, TimerMode.COUNTING_DOWN, 60)
        assert recorder.build_request(run).session_name == "Monday, October 19, 2026"

    def test_name_is_stripped(self, recorder, clock):
        recorder.session_name = "  Deep work  "
        run = FinishedRun(60, clock.now_ms, TimerMode.COUNTING_DOWN, 60)
        assert recorder.build_request(run).session_name == "Deep work"


class TestRecording:

    def test_reset_without_start_writes_nothing(self, recorder, engine, store):
        recorder.attach(engine)
        engine.reset()
        recorder.wait_for_pending()
        assert store.list_sessions() == []

    def test_set_custom_time_writes_nothing(self, recorder, engine, store):
        recorder.attach(engine)
        engine.start()
        run_ticks(engine, 3)
        engine.set_custom_time(10)
        recorder.wait_for_pending()
        assert store.list_sessions() == []

    def test_one_record_per_started_run(self, recorder, engine, store, clock):
        recorder.attach(engine)
        for _ in range(3):
            engine.start()
            run_ticks(engine, 2, clock)
            engine.reset()
        recorder.wait_for_pending()
        assert len(store.list_sessions()) == 3

    def test_five_second_run_with_overtime(self, qapp, recorder, store, clock):
        eng = TimerEngine(parent=None, target_seconds=5, clock=clock)
        recorder.attach(eng)
        recorder.session_name = "Short"

        eng.start()
        run_ticks(eng, 9, clock)
        eng.reset()
        recorder.wait_for_pending()

        [record] = store.list_sessions()
        assert record.session_name == "Short"
        assert record.target_duration_seconds == 5
        assert record.actual_duration_seconds == 9
        assert record.extra_time_seconds == 4
        assert record.has_overtime

    def test_paused_time_counts_as_elapsed(self, recorder, engine, store, clock):
        recorder.attach(engine)
        engine.start()
        run_ticks(engine, 10, clock)
        engine.pause()
        clock.advance(50)
        engine.reset()
        recorder.wait_for_pending()
        [record] = store.list_sessions()
        assert record.actual_duration_seconds == 60
        assert record.extra_time_seconds == 0

    def test_record_returns_queued_request(self, recorder, clock):
        run = FinishedRun(30, clock.now_ms, TimerMode.COUNTING_DOWN, 10)
        clock.advance(20)
        new = recorder.record(run)
        assert isinstance(new, NewSession)
        assert new.actual_duration_seconds == 20


class TestFailures:

    def test_failed_save_is_logged_and_dropped(self, qapp, engine, clock, caplog):
        broken = BrokenStore()
        rec = SessionRecorder(broken, clock=clock)
        rec.attach(engine)

        engine.start()
        run_ticks(engine, 3, clock)
        with caplog.at_level(logging.WARNING, logger="overtimer.sessions.recorder"):
            engine.reset()
            rec.wait_for_pending()

        assert engine.mode == TimerMode.IDLE
        assert engine.started_at_ms is None
        assert broken.calls == 1
        assert "database is locked" in caplog.text

    def test_unexpected_error_is_logged(self, qapp, clock, caplog):
        class Exploding:
            def create_session(self, new):
                raise RuntimeError("boom")

        rec = SessionRecorder(Exploding(), clock=clock)
        run = FinishedRun(30, clock.now_ms, TimerMode.COUNTING_DOWN, 30)
        with caplog.at_level(logging.ERROR, logger="overtimer.sessions.recorder"):
            rec.record(run)
            rec.wait_for_pending()
        assert "Unexpected error saving session" in caplog.text

    def test_reset_does_not_wait_for_store(self, qapp, store, engine, clock):
        blocking = BlockingStore(store)
        rec = SessionRecorder(blocking, clock=clock)
        rec.attach(engine)

        engine.start()
        run_ticks(engine, 2, clock)
        engine.reset()

        # back to idle while the write is still held
        assert blocking.entered.wait(5)
        assert engine.mode == TimerMode.IDLE
        assert engine.remaining == engine.target_duration
        assert store.list_sessions() == []

        blocking.release.set()
        assert rec.wait_for_pending(5000)
        assert len(store.list_sessions()) == 1

    def test_store_can_be_swapped(self, recorder, store, clock):
        broken = BrokenStore()
        recorder.store = broken
        recorder.record(FinishedRun(10, clock.now_ms, TimerMode.COUNTING_DOWN, 10))
        recorder.wait_for_pending()
        assert broken.calls == 1
        recorder.store = store
        recorder.record(FinishedRun(10, clock.now_ms, TimerMode.COUNTING_DOWN, 10))
        recorder.wait_for_pending()
        assert len(store.list_sessions()) == 1

    def test_save_signals(self, qapp, store, clock):
        ok = SessionRecorder(store, clock=clock)
        bad = SessionRecorder(BrokenStore(), clock=clock)
        saved, failed = SignalCollector(), SignalCollector()
        ok.saved.connect(saved)
        bad.save_failed.connect(failed)

        run = FinishedRun(10, clock.now_ms, TimerMode.COUNTING_DOWN, 10)
        ok.record(run)
        bad.record(run)
        ok.wait_for_pending()
        bad.wait_for_pending()
        for _ in range(5):
            QApplication.processEvents()

        assert len(saved) == 1
        assert saved.last.target_duration_seconds == 10
        assert failed.items == ["database is locked"]
