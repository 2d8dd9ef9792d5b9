"""UI package."""

from .timer_widget import TimerWidget
from .custom_time_dialog import CustomTimeDialog
from .session_history import SessionHistoryWidget

__all__ = [
    "TimerWidget",
    "CustomTimeDialog",
    "SessionHistoryWidget",
]
