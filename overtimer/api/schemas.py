from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..sessions.store import NewSession, SessionRecord


class CreateSessionRequest(BaseModel):
    session_name: str = Field(..., min_length=1, max_length=255)
    target_duration: int = Field(..., ge=0)   # seconds
    actual_duration: int = Field(..., ge=0)
    extra_time: int = Field(0, ge=0)

    def to_new_session(self) -> NewSession:
        return NewSession(
            session_name=self.session_name,
            target_duration_seconds=self.target_duration,
            actual_duration_seconds=self.actual_duration,
            extra_time_seconds=self.extra_time,
        )


class SessionOut(BaseModel):
    id: int
    session_name: str
    target_duration: int
    actual_duration: int
    extra_time: int
    completed_at: datetime
    session_date: date

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionOut":
        return cls(
            id=record.id,
            session_name=record.session_name,
            target_duration=record.target_duration_seconds,
            actual_duration=record.actual_duration_seconds,
            extra_time=record.extra_time_seconds,
            completed_at=record.completed_at,
            session_date=record.session_date,
        )

    def to_record(self) -> SessionRecord:
        return SessionRecord(
            id=self.id,
            session_name=self.session_name,
            target_duration_seconds=self.target_duration,
            actual_duration_seconds=self.actual_duration,
            extra_time_seconds=self.extra_time,
            completed_at=self.completed_at,
            session_date=self.session_date,
        )


class CreateSessionResponse(BaseModel):
    success: bool = True
    session: SessionOut


class SessionListResponse(BaseModel):
    success: bool = True
    sessions: list[SessionOut]


class DeleteSessionResponse(BaseModel):
    success: bool = True
    deleted: Optional[bool] = None
    deleted_count: Optional[int] = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
