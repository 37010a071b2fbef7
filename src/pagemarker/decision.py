"""Redirect decision for a remembered page.

`decide` is pure: it looks at the query of the current request and the data
stored for the page, and says whether to leave the request alone, restore the
stored query, or clear everything and go back to the bare URL. Carrying the
decision out (deleting the entry, sending the redirect) is up to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from werkzeug.exceptions import HTTPException
from werkzeug.utils import redirect

from pagemarker.urls import with_query


class Action(Enum):
    NO_ACTION = "no_action"
    CLEAR_AND_REDIRECT = "clear_and_redirect"
    REDIRECT_WITH_QUERY = "redirect_with_query"


@dataclass(frozen=True)
class Decision:
    action: Action
    target: Optional[str] = None

    @property
    def redirects(self) -> bool:
        return self.action is not Action.NO_ACTION


NO_ACTION = Decision(Action.NO_ACTION)


def decide(
    current_query: Mapping[str, Any],
    stored: Optional[Mapping[str, Any]],
    base_url: str,
    reset_key: str,
) -> Decision:
    if reset_key in current_query:
        return Decision(Action.CLEAR_AND_REDIRECT, base_url)
    # explicit parameters always win over remembered ones
    if current_query:
        return NO_ACTION
    if not stored:
        return NO_ACTION
    return Decision(Action.REDIRECT_WITH_QUERY, with_query(base_url, stored))


class RedirectRequired(HTTPException):
    """Raised to stop the current view and send the client elsewhere.

    Flask renders any uncaught `HTTPException` through `get_response`, so
    raising this from a view produces the redirect response directly.
    """

    code = 307

    def __init__(self, target: str, code: int = 307) -> None:
        super().__init__(description=f"Redirecting to {target}")
        self.target = target
        self.code = code

    def get_response(self, environ=None, scope=None):
        return redirect(self.target, code=self.code)


def raise_redirect(target: str, code: int = 307) -> None:
    """Default redirector: halt the request by raising `RedirectRequired`."""
    raise RedirectRequired(target, code)
