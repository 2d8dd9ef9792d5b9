"""Shared test helpers for Overtimer."""

from datetime import datetime, timedelta

from overtimer.sessions.errors import StoreUnavailable
from overtimer.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


class StepDateTime:
    """datetime source that moves one minute forward on every call."""

    def __init__(self, start: datetime = datetime(2026, 10, 19, 9, 0, 0)):
        self._next = start

    def __call__(self) -> datetime:
        value = self._next
        self._next += timedelta(minutes=1)
        return value


class BrokenStore:
    """Store whose every operation fails as if the database were locked."""

    def __init__(self):
        self.calls = 0

    def _fail(self, *args, **kwargs):
        self.calls += 1
        raise StoreUnavailable("database is locked")

    create_session = _fail
    list_sessions = _fail
    list_sessions_by_date = _fail
    delete_session = _fail
    delete_all_sessions = _fail


def run_ticks(engine: TimerEngine, count: int, clock: FakeClock | None = None) -> None:
    """Deliver *count* timer ticks, moving the fake clock along with them."""
    for _ in range(count):
        if clock is not None:
            clock.advance(1)
        engine._on_tick()
