"""HTTP service and client for the session history.

The server is built by :func:`overtimer.api.app.create_app`; it is not
imported here so the desktop app can use the client without FastAPI
building an application.
"""

from .client import HttpSessionStore

__all__ = ["HttpSessionStore"]
