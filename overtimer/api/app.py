"""FastAPI application serving the session history."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import API_PREFIX
from ..database.db import close_db, init_db
from ..sessions.errors import SessionStoreError, StoreUnavailable, ValidationError
from .routes import router

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@asynccontextmanager
async def _lifespan(app: FastAPI):
    init_db()
    logger.info("Overtimer API ready")
    try:
        yield
    finally:
        close_db()
        logger.info("Overtimer API stopped")


def create_app(*, manage_database: bool = True) -> FastAPI:
    """Build the application.

    With ``manage_database`` the database is opened on startup and
    disposed on shutdown.  Tests that configure their own database pass
    ``False``.
    """
    app = FastAPI(
        title="Overtimer API",
        description="Stores finished timer sessions",
        version=__version__,
        lifespan=_lifespan if manage_database else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # ── error envelope ────────────────────────────────────────────────

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _request_invalid(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query"))
        message = first.get("msg", "invalid request")
        return _error(400, f"{field}: {message}" if field else message)

    @app.exception_handler(ValidationError)
    async def _store_invalid(request: Request, exc: ValidationError):
        return _error(400, str(exc))

    @app.exception_handler(StoreUnavailable)
    async def _store_unavailable(request: Request, exc: StoreUnavailable):
        logger.warning("Store unavailable for %s %s: %s", request.method, request.url.path, exc)
        return _error(503, "Session store unavailable")

    @app.exception_handler(SessionStoreError)
    async def _store_failed(request: Request, exc: SessionStoreError):
        logger.error("Store error for %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "Session store error")

    return app

