"""SQLAlchemy-backed implementation of the session store contract."""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Callable

from sqlalchemy import delete, select
from sqlalchemy.exc import OperationalError

from ..sessions.errors import StoreUnavailable, ValidationError
from ..sessions.store import (
    DEFAULT_LIST_LIMIT,
    NewSession,
    SessionRecord,
    parse_session_date,
)
from .db import get_session
from .models import TimerSession

logger = logging.getLogger(__name__)

# SQLite allows one writer at a time; take turns inside the process too.
_write_lock = threading.Lock()


def _to_record(row: TimerSession) -> SessionRecord:
    return SessionRecord(
        id=row.id,
        session_name=row.session_name,
        target_duration_seconds=row.target_duration,
        actual_duration_seconds=row.actual_duration,
        extra_time_seconds=row.extra_time,
        completed_at=row.completed_at,
        session_date=row.session_date,
    )


class SqlSessionStore:
    """Stores sessions in the local database configured in :mod:`.db`."""

    def __init__(self, *, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock

    def create_session(self, new: NewSession) -> SessionRecord:
        completed_at = self._clock().replace(microsecond=0)
        try:
            with _write_lock, get_session() as db:
                row = TimerSession(
                    session_name=new.session_name.strip(),
                    target_duration=new.target_duration_seconds,
                    actual_duration=new.actual_duration_seconds,
                    extra_time=new.extra_time_seconds,
                    completed_at=completed_at,
                    session_date=completed_at.date(),
                )
                db.add(row)
                db.flush()
                return _to_record(row)
        except OperationalError as exc:
            raise StoreUnavailable(f"could not save session: {exc.orig}") from exc

    def list_sessions(self, limit: int = DEFAULT_LIST_LIMIT) -> list[SessionRecord]:
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        stmt = (
            select(TimerSession)
            .order_by(TimerSession.completed_at.desc(), TimerSession.id.desc())
            .limit(limit)
        )
        return self._fetch(stmt)

    def list_sessions_by_date(self, day: str | date) -> list[SessionRecord]:
        wanted = parse_session_date(day)
        stmt = (
            select(TimerSession)
            .where(TimerSession.session_date == wanted)
            .order_by(TimerSession.completed_at.desc(), TimerSession.id.desc())
        )
        return self._fetch(stmt)

    def delete_session(self, session_id: int) -> bool:
        try:
            with _write_lock, get_session() as db:
                result = db.execute(
                    delete(TimerSession).where(TimerSession.id == session_id)
                )
                deleted = result.rowcount > 0
        except OperationalError as exc:
            raise StoreUnavailable(f"could not delete session: {exc.orig}") from exc
        if deleted:
            logger.info("Deleted session %d", session_id)
        return deleted

    def delete_all_sessions(self) -> int:
        try:
            with _write_lock, get_session() as db:
                count = db.execute(delete(TimerSession)).rowcount
        except OperationalError as exc:
            raise StoreUnavailable(f"could not clear sessions: {exc.orig}") from exc
        logger.info("Deleted all %d sessions", count)
        return count

    # ── helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _fetch(stmt) -> list[SessionRecord]:
        try:
            with get_session() as db:
                return [_to_record(row) for row in db.scalars(stmt)]
        except OperationalError as exc:
            raise StoreUnavailable(f"could not read sessions: {exc.orig}") from exc
