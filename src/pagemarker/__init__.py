"""Top-level package for pagemarker.

Remember the query parameters a client used on a page and send them back to
that state on their next bare visit.
"""
from pagemarker.context import RequestContext
from pagemarker.decision import Action, Decision, RedirectRequired, decide
from pagemarker.errors import (
    InvalidIdentity,
    MissingRequestContext,
    PageMarkerError,
    StoreUnavailable,
)
from pagemarker.marker import Marker, OverrideMode
from pagemarker.state import SessionStore

__all__ = [
    "Action",
    "Decision",
    "InvalidIdentity",
    "Marker",
    "MissingRequestContext",
    "OverrideMode",
    "PageMarkerError",
    "RedirectRequired",
    "RequestContext",
    "SessionStore",
    "StoreUnavailable",
    "decide",
]
