"""Timer state machine for Overtimer.

Modes
-----
IDLE           Not started — showing the configured target.
COUNTING_DOWN  Counting toward 00:00.
OVERTIME       Past the target — counting up with no upper bound.

Running/paused is orthogonal to the mode: both COUNTING_DOWN and
OVERTIME can be paused, and pausing never changes the mode.

Transitions
-----------
IDLE → COUNTING_DOWN                         (start)
COUNTING_DOWN → COUNTING_DOWN                (tick, remaining > 0)
COUNTING_DOWN → OVERTIME at 00:01            (tick, remaining == 0)
OVERTIME → OVERTIME                          (tick, +1 s)
Any → same mode, stopped                     (pause)
Any → IDLE                                   (reset / set_custom_time)

A reset of a run that was actually started emits ``run_finished`` with a
``FinishedRun`` snapshot; the engine itself never touches storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .clock import (
    DEFAULT_TARGET_SECONDS,
    OVERTIME_START_SECONDS,
    TICK_INTERVAL_MS,
    WARNING_THRESHOLD_SECONDS,
    clamp_custom_time,
    countdown_step,
    format_clock,
    now_millis,
    overtime_step,
    split,
)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerMode(Enum):
    IDLE = "idle"
    COUNTING_DOWN = "counting_down"
    OVERTIME = "overtime"


# ── snapshots ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FinishedRun:
    """State of a started run at the moment it was reset."""

    target_duration_seconds: int
    started_at_ms: int
    mode: TimerMode
    remaining_seconds: int

    @property
    def overtime_seconds(self) -> int:
        return self.remaining_seconds if self.mode == TimerMode.OVERTIME else 0


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based countdown timer with an unbounded overtime phase.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted every second while running.  In overtime the value is
        the overtime elapsed.
    mode_changed(new_mode: TimerMode)
        Emitted on every mode transition, and on every return to IDLE
        (the displayed target may have changed even if the mode did not).
    running_changed(is_running: bool)
        Emitted when the timer starts or stops ticking.
    target_changed(target_seconds: int)
        Emitted after ``set_custom_time``.
    run_finished(run: FinishedRun)
        Emitted by ``reset`` when the run had been started.
    """

    tick = pyqtSignal(int)
    mode_changed = pyqtSignal(object)
    running_changed = pyqtSignal(bool)
    target_changed = pyqtSignal(int)
    run_finished = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        target_seconds: int = DEFAULT_TARGET_SECONDS,
        warning_seconds: int = WARNING_THRESHOLD_SECONDS,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        super().__init__(parent)
        assert target_seconds >= 0, "target duration cannot be negative"

        # ── configuration ─────────────────────────────────────────────
        self._target: int = target_seconds
        self._warning_seconds: int = warning_seconds
        self._clock = clock

        # ── run state ─────────────────────────────────────────────────
        self._mode: TimerMode = TimerMode.IDLE
        self._running: bool = False
        self._remaining: int = target_seconds
        self._started_at_ms: int | None = None

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> TimerMode:
        return self._mode

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def remaining(self) -> int:
        """Seconds left, or overtime elapsed when in OVERTIME."""
        return self._remaining

    @property
    def minutes(self) -> int:
        return split(self._remaining)[0]

    @property
    def seconds(self) -> int:
        return split(self._remaining)[1]

    @property
    def display_time(self) -> str:
        return format_clock(self._remaining)

    @property
    def target_duration(self) -> int:
        return self._target

    @property
    def started_at_ms(self) -> int | None:
        return self._started_at_ms

    @property
    def warning_seconds(self) -> int:
        return self._warning_seconds

    @warning_seconds.setter
    def warning_seconds(self, value: int) -> None:
        self._warning_seconds = max(0, value)

    @property
    def is_final_minutes(self) -> bool:
        """True during the last few minutes of a running countdown."""
        return (
            self._mode == TimerMode.COUNTING_DOWN
            and self._running
            and 0 < self._remaining <= self._warning_seconds
        )

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the countdown (1.0 in overtime)."""
        if self._mode == TimerMode.OVERTIME:
            return 1.0
        if self._target <= 0:
            return 0.0
        elapsed = self._target - self._remaining
        return max(0.0, min(1.0, elapsed / self._target))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start a new run, or resume a paused one in its current mode."""
        if self._running:
            return
        if self._started_at_ms is None:
            self._started_at_ms = self._clock()
        if self._mode == TimerMode.IDLE:
            self._set_mode(TimerMode.COUNTING_DOWN)
        self._qt_timer.stop()
        self._qt_timer.start()
        self._set_running(True)

    def pause(self) -> None:
        """Stop ticking.  ``remaining`` and ``mode`` are frozen."""
        if not self._running:
            return
        self._qt_timer.stop()
        self._set_running(False)

    def toggle(self) -> None:
        if self._running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """End the run and return to IDLE at the full target.

        A run that was started is handed to ``run_finished`` before the
        state is cleared.
        """
        self._qt_timer.stop()

        if self._started_at_ms is not None:
            self.run_finished.emit(FinishedRun(
                target_duration_seconds=self._target,
                started_at_ms=self._started_at_ms,
                mode=self._mode,
                remaining_seconds=self._remaining,
            ))

        self._return_to_idle()

    def set_custom_time(self, minutes: int, seconds: int = 0) -> None:
        """Set a new target.  Always stops and discards the current run."""
        minutes, seconds = clamp_custom_time(minutes, seconds)
        self._qt_timer.stop()
        self._target = minutes * 60 + seconds
        self._return_to_idle()
        self.target_changed.emit(self._target)

    def set_preset(self, minutes: int) -> None:
        self.set_custom_time(minutes, 0)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if not self._running:
            # stale timeout delivered after pause/reset
            return

        if self._mode == TimerMode.COUNTING_DOWN:
            if self._remaining > 0:
                self._remaining = countdown_step(self._remaining)
            else:
                self._remaining = OVERTIME_START_SECONDS
                self._set_mode(TimerMode.OVERTIME)
        elif self._mode == TimerMode.OVERTIME:
            self._remaining = overtime_step(self._remaining)
        else:
            raise AssertionError("tick while IDLE and running")

        self.tick.emit(self._remaining)

    def _return_to_idle(self) -> None:
        self._remaining = self._target
        self._started_at_ms = None
        self._set_running(False)
        self._set_mode(TimerMode.IDLE)

    def _set_mode(self, new_mode: TimerMode) -> None:
        if new_mode == TimerMode.OVERTIME:
            assert self._mode in (TimerMode.COUNTING_DOWN, TimerMode.OVERTIME)
        changed = new_mode != self._mode
        self._mode = new_mode
        if changed or new_mode == TimerMode.IDLE:
            self.mode_changed.emit(new_mode)

    def _set_running(self, running: bool) -> None:
        if running == self._running:
            return
        self._running = running
        self.running_changed.emit(running)
