"""Session recording and the store contract."""

from .errors import SessionStoreError, ValidationError, StoreUnavailable
from .store import (
    NewSession,
    SessionRecord,
    SessionStore,
    DEFAULT_LIST_LIMIT,
    default_session_name,
)
from .recorder import SessionRecorder

__all__ = [
    "SessionStoreError",
    "ValidationError",
    "StoreUnavailable",
    "NewSession",
    "SessionRecord",
    "SessionStore",
    "DEFAULT_LIST_LIMIT",
    "default_session_name",
    "SessionRecorder",
]
