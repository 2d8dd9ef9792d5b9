"""Database connection and session management."""

import logging
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session as OrmSession
from sqlalchemy.pool import StaticPool

from .. import config
from .models import Base

logger = logging.getLogger(__name__)

# ── engine & session factory (created lazily) ─────────────────────────────

_engine = None
_SessionFactory = None


def _build_engine(url: str):
    parsed = make_url(url)
    kwargs = {"echo": False}
    in_memory = parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")

    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if in_memory:
            # every thread must see the same in-memory database
            kwargs["poolclass"] = StaticPool
        else:
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, **kwargs)

    if parsed.get_backend_name() == "sqlite" and not in_memory:
        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.close()

    return engine


def _get_engine():
    global _engine
    if _engine is None:
        _engine = _build_engine(config.DATABASE_URL)
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database instead of the real one on disk."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _SessionFactory = None
    _engine = _build_engine(url)


def init_db() -> None:
    """Create all tables.  Safe to call repeatedly."""
    engine = _get_engine()
    Base.metadata.create_all(engine)
    logger.debug("Database ready at %s", engine.url)


def close_db() -> None:
    """Dispose of the engine on shutdown.  The next call reopens lazily."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
        logger.debug("Database closed")
    _engine = None
    _SessionFactory = None


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
