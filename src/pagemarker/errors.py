"""Exceptions raised by pagemarker.

All of them are fatal for the request being handled; nothing here is retried.
"""


class PageMarkerError(Exception):
    pass


class InvalidIdentity(PageMarkerError, ValueError):
    """The page name normalized to an empty string."""


class MissingRequestContext(PageMarkerError, RuntimeError):
    """No request is active, or it lacks the metadata we need."""


class StoreUnavailable(PageMarkerError, RuntimeError):
    """The session backend could not be read or written."""
