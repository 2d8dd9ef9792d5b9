"""Session records and the store contract shared by the local database
and the HTTP client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from .errors import ValidationError

DEFAULT_LIST_LIMIT = 50


def default_session_name(today: date | None = None) -> str:
    """Name used when the user leaves the label blank,
    e.g. ``"Monday, October 19, 2026"``."""
    d = today or date.today()
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def parse_session_date(value: str | date) -> date:
    """Accept a ``date`` or a ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"invalid date {value!r}, expected YYYY-MM-DD") from None


@dataclass(frozen=True)
class NewSession:
    """The client-supplied part of a session record."""

    session_name: str
    target_duration_seconds: int
    actual_duration_seconds: int
    extra_time_seconds: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.session_name, str) or not self.session_name.strip():
            raise ValidationError("session_name is required")
        for name in (
            "target_duration_seconds",
            "actual_duration_seconds",
            "extra_time_seconds",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an integer")
            if value < 0:
                raise ValidationError(f"{name} cannot be negative")


@dataclass(frozen=True)
class SessionRecord:
    """A stored session.  Never mutated after creation."""

    id: int
    session_name: str
    target_duration_seconds: int
    actual_duration_seconds: int
    extra_time_seconds: int
    completed_at: datetime
    session_date: date

    @property
    def has_overtime(self) -> bool:
        return self.extra_time_seconds > 0

    @property
    def reached_target(self) -> bool:
        return self.actual_duration_seconds >= self.target_duration_seconds


class SessionStore(Protocol):
    """Create/list/delete contract.  Each call is individually atomic."""

    def create_session(self, new: NewSession) -> SessionRecord: ...

    def list_sessions(self, limit: int = DEFAULT_LIST_LIMIT) -> list[SessionRecord]: ...

    def list_sessions_by_date(self, day: str | date) -> list[SessionRecord]: ...

    def delete_session(self, session_id: int) -> bool: ...

    def delete_all_sessions(self) -> int: ...
