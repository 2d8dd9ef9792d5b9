"""Errors raised by session stores."""


class SessionStoreError(Exception):
    """Base class for anything a session store can raise."""


class ValidationError(SessionStoreError, ValueError):
    """The caller sent something the store will not accept."""


class StoreUnavailable(SessionStoreError):
    """The store could not be reached or is locked.  Usually transient."""
