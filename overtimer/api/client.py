"""HTTP implementation of the session store contract.

Lets the desktop app keep its history on an Overtimer API server
instead of the local database::

    store = HttpSessionStore("http://127.0.0.1:8000")
    store.list_sessions(limit=10)
"""

from __future__ import annotations

import logging
from datetime import date

import httpx

from ..config import API_PREFIX
from ..sessions.errors import SessionStoreError, StoreUnavailable, ValidationError
from ..sessions.store import (
    DEFAULT_LIST_LIMIT,
    NewSession,
    SessionRecord,
    parse_session_date,
)
from .schemas import SessionOut

logger = logging.getLogger(__name__)

SESSIONS_PATH = f"{API_PREFIX}/timer-sessions"


class HttpSessionStore:
    """Talks to ``/api/timer-sessions``.  One request per call, no retries."""

    def __init__(
        self,
        base_url: str = "",
        *,
        client: httpx.Client | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    # ── contract ──────────────────────────────────────────────────────

    def create_session(self, new: NewSession) -> SessionRecord:
        payload = {
            "session_name": new.session_name,
            "target_duration": new.target_duration_seconds,
            "actual_duration": new.actual_duration_seconds,
            "extra_time": new.extra_time_seconds,
        }
        data = self._request("POST", SESSIONS_PATH, json=payload)
        return SessionOut.model_validate(data["session"]).to_record()

    def list_sessions(self, limit: int = DEFAULT_LIST_LIMIT) -> list[SessionRecord]:
        data = self._request("GET", SESSIONS_PATH, params={"limit": limit})
        return self._records(data)

    def list_sessions_by_date(self, day: str | date) -> list[SessionRecord]:
        wanted = parse_session_date(day)
        data = self._request("GET", SESSIONS_PATH, params={"date": wanted.isoformat()})
        return self._records(data)

    def delete_session(self, session_id: int) -> bool:
        data = self._request(
            "DELETE", SESSIONS_PATH, params={"id": session_id}, missing_ok=True,
        )
        return data is not None

    def delete_all_sessions(self) -> int:
        data = self._request("DELETE", SESSIONS_PATH)
        return int(data["deleted_count"])

    # ── helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _records(data: dict) -> list[SessionRecord]:
        return [SessionOut.model_validate(item).to_record() for item in data["sessions"]]

    def _request(self, method: str, url: str, *, missing_ok: bool = False, **kwargs) -> dict | None:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise StoreUnavailable(f"{method} {url} failed: {exc}") from exc

        if response.status_code == 404 and missing_ok:
            return None
        if response.is_success:
            return response.json()

        message = _error_message(response)
        if response.status_code in (400, 422):
            raise ValidationError(message)
        if response.status_code >= 500:
            raise StoreUnavailable(f"server error {response.status_code}: {message}")
        raise SessionStoreError(f"unexpected status {response.status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json().get("error") or response.text
    except ValueError:
        return response.text
