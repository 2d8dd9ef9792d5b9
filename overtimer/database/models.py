"""SQLAlchemy ORM models for Overtimer."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Date, Index
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class TimerSession(Base):
    """One finished run.  Written once, never updated."""

    __tablename__ = "timer_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_name = Column(String(255), nullable=False)
    target_duration = Column(Integer, nullable=False)      # seconds
    actual_duration = Column(Integer, nullable=False)      # seconds
    extra_time = Column(Integer, nullable=False, default=0)  # overtime seconds
    completed_at = Column(DateTime, nullable=False, default=datetime.now)
    session_date = Column(Date, nullable=False)            # server-local date

    __table_args__ = (
        Index("ix_timer_sessions_completed_at", "completed_at"),
        Index("ix_timer_sessions_session_date", "session_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimerSession id={self.id} name={self.session_name!r} "
            f"actual={self.actual_duration} extra={self.extra_time}>"
        )
