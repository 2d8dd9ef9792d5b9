import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..database.repository import SqlSessionStore
from ..sessions.store import DEFAULT_LIST_LIMIT, SessionStore
from .schemas import (
    CreateSessionRequest,
    CreateSessionResponse,
    DeleteSessionResponse,
    ErrorResponse,
    SessionListResponse,
    SessionOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions"])

MAX_LIST_LIMIT = 500

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    503: {"model": ErrorResponse, "description": "Session store unavailable"},
}
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Session not found"}}


def get_store() -> SessionStore:
    """Store used by every route.  Tests override this dependency."""
    return SqlSessionStore()


@router.post(
    "/timer-sessions",
    response_model=CreateSessionResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
)
def create_session(request: CreateSessionRequest, store: SessionStore = Depends(get_store)):
    """Store a finished run.  completed_at and session_date are set here, not by the client."""
    record = store.create_session(request.to_new_session())
    logger.info("Created session %d (%r)", record.id, record.session_name)
    return CreateSessionResponse(session=SessionOut.from_record(record))


@router.get("/timer-sessions", response_model=SessionListResponse, responses=ERROR_RESPONSES)
def list_sessions(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT),
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    store: SessionStore = Depends(get_store),
):
    """Newest sessions first, optionally only those of one day."""
    if date is not None:
        records = store.list_sessions_by_date(date)
    else:
        records = store.list_sessions(limit)
    return SessionListResponse(sessions=[SessionOut.from_record(r) for r in records])


@router.delete(
    "/timer-sessions",
    response_model=DeleteSessionResponse,
    response_model_exclude_none=True,
    responses={**ERROR_RESPONSES, **NOT_FOUND},
)
def delete_sessions(
    id: Optional[int] = Query(None),
    store: SessionStore = Depends(get_store),
):
    """Delete one session by ``id``, or every session when no id is given."""
    if id is None:
        return _delete_all(store)
    if not store.delete_session(id):
        raise HTTPException(status_code=404, detail=f"Session {id} not found")
    return DeleteSessionResponse(deleted=True)


@router.delete(
    "/clear-data",
    response_model=DeleteSessionResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def clear_data(store: SessionStore = Depends(get_store)):
    return _delete_all(store)


def _delete_all(store: SessionStore) -> DeleteSessionResponse:
    count = store.delete_all_sessions()
    return DeleteSessionResponse(
        deleted_count=count,
        message=f"Successfully cleared {count} timer sessions",
    )
