"""Timer package."""

from .clock import (
    DEFAULT_TARGET_SECONDS,
    WARNING_THRESHOLD_SECONDS,
    OVERTIME_START_SECONDS,
    MAX_CUSTOM_MINUTES,
    PRESET_MINUTES,
)
from .engine import TimerEngine, TimerMode, FinishedRun

__all__ = [
    "TimerEngine",
    "TimerMode",
    "FinishedRun",
    "DEFAULT_TARGET_SECONDS",
    "WARNING_THRESHOLD_SECONDS",
    "OVERTIME_START_SECONDS",
    "MAX_CUSTOM_MINUTES",
    "PRESET_MINUTES",
]
