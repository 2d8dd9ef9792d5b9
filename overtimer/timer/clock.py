"""Clock arithmetic for the Overtimer engine.

All time is kept as one integer total of whole seconds.  The
``(minutes, seconds)`` pair shown on screen is always derived from that
total with ``divmod`` so a missed or late tick can never leave the
seconds field out of range.
"""

from __future__ import annotations

import time

# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_TARGET_SECONDS = 25 * 60
WARNING_THRESHOLD_SECONDS = 5 * 60   # "final minutes" window
OVERTIME_START_SECONDS = 1           # first overtime tick shows 00:01
MAX_CUSTOM_MINUTES = 180
MAX_CUSTOM_SECONDS = 59
TICK_INTERVAL_MS = 1000
PRESET_MINUTES = (5, 15, 25, 45, 60)


# ── helpers ───────────────────────────────────────────────────────────────


def now_millis() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def split(total_seconds: int) -> tuple[int, int]:
    """Return ``(minutes, seconds)`` for a non-negative total."""
    assert total_seconds >= 0, f"negative clock value: {total_seconds}"
    return divmod(total_seconds, 60)


def format_clock(total_seconds: int) -> str:
    minutes, seconds = split(total_seconds)
    return f"{minutes:02d}:{seconds:02d}"


def format_duration(total_seconds: int) -> str:
    """Compact ``M:SS`` form used in the history list."""
    minutes, seconds = split(max(0, total_seconds))
    return f"{minutes}:{seconds:02d}"


def clamp_custom_time(minutes: int, seconds: int) -> tuple[int, int]:
    """Clamp user input to ``[0, 180]`` minutes and ``[0, 59]`` seconds.

    Out-of-range values are pulled to the nearest bound, never rejected.
    """
    minutes = max(0, min(MAX_CUSTOM_MINUTES, int(minutes)))
    seconds = max(0, min(MAX_CUSTOM_SECONDS, int(seconds)))
    return minutes, seconds


def countdown_step(remaining: int) -> int:
    """One countdown tick.  Callers switch to overtime at zero."""
    assert remaining > 0, "countdown_step called at 00:00"
    return remaining - 1


def overtime_step(elapsed: int) -> int:
    """One overtime tick.  Unbounded."""
    assert elapsed >= 0
    return elapsed + 1
