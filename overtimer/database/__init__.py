"""Database package."""

from .db import get_session, init_db, close_db, configure_engine
from .models import TimerSession
from .repository import SqlSessionStore

__all__ = [
    "get_session",
    "init_db",
    "close_db",
    "configure_engine",
    "TimerSession",
    "SqlSessionStore",
]
