"""The page marker: remember a page's query parameters, restore them later.

Typical use inside a request handler::

    marker = Marker(RequestContext.current(), SessionStore())
    marker.exclude("csrf_token").remember()

`remember` initializes the marker first. On a bare visit to a page that has
remembered data that raises `RedirectRequired`, which stops the handler and
sends the client to the page with the stored query string.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

import logging

from pagemarker.config import check_redirect_code, get_redirect_code, get_reset_key
from pagemarker.context import RequestContext
from pagemarker.decision import NO_ACTION, Action, Decision, decide, raise_redirect
from pagemarker.errors import InvalidIdentity, MissingRequestContext
from pagemarker.naming import clean_name, name_from_path
from pagemarker.state import SessionStore
from pagemarker.urls import strip_query

logger = logging.getLogger("pagemarker.marker")
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("[pagemarker.marker] %(message)s"))
    logger.addHandler(h)
    logger.setLevel(logging.INFO)

Redirector = Callable[[str, int], Any]


class OverrideMode(IntEnum):
    REPLACE = 0  # replace the working data with the given vars
    APPEND = 1  # merge the given vars into the working data


class Marker:
    def __init__(
        self,
        context: RequestContext,
        store: SessionStore,
        name: Optional[str] = None,
        url: Optional[str] = None,
        reset_key: Optional[str] = None,
        redirector: Optional[Redirector] = None,
        redirect_code: Optional[int] = None,
    ):
        self.context = context
        self.store = store
        self.reset_key = reset_key or get_reset_key()
        self._redirector = redirector or raise_redirect
        self._redirect_code = (
            check_redirect_code(redirect_code) if redirect_code is not None else get_redirect_code()
        )
        self._name: Optional[str] = None
        self._url: Optional[str] = None
        self._data: Optional[Dict[str, Any]] = None
        self._ready = False
        if name is not None:
            self.set_name(name)
        if url is not None:
            self.set_url(url)

    # -- identity -----------------------------------------------------------

    @property
    def name(self) -> Optional[str]:
        return self._name

    def set_name(self, raw: str) -> "Marker":
        name = clean_name(raw)
        if not name:
            raise InvalidIdentity(f"Page name {raw!r} is empty after normalization")
        self._name = name
        return self

    def set_name_from_url(self) -> "Marker":
        if self.context.path is None:
            raise MissingRequestContext("Request has no path to derive a page name from")
        name = name_from_path(self.context.path)
        if not name:
            raise InvalidIdentity(
                f"Path {self.context.path!r} gives an empty page name; set one explicitly"
            )
        self._name = name
        return self

    @property
    def url(self) -> Optional[str]:
        return self._url

    def set_url(self, raw: str) -> "Marker":
        self._url = strip_query(raw)
        return self

    def auto_set_url(self) -> "Marker":
        return self.set_url(self.context.url())

    # -- working data -------------------------------------------------------

    @property
    def data(self) -> Dict[str, Any]:
        return dict(self._data or {})

    def set_data(self, data: Mapping[str, Any]) -> "Marker":
        self._data = dict(data)
        return self

    def _working(self) -> Dict[str, Any]:
        # edits made before initialize start from the request query
        if self._data is None:
            return dict(self.context.query)
        return self._data

    def add(self, key: Union[str, Mapping[str, Any]], value: Any = None) -> "Marker":
        """Add one key, or merge a mapping into the working data.

        ``add(key, value)`` overwrites ``key``. ``add(mapping)`` only adds the
        keys that are not there yet; existing values are kept.
        """
        current = self._working()
        if isinstance(key, str):
            self._data = {**current, key: value}
        elif isinstance(key, Mapping):
            self._data = {**current, **{k: v for k, v in key.items() if k not in current}}
        else:
            raise TypeError(f"add() takes a key or a mapping, not {type(key).__name__}")
        return self

    def exclude(self, keys: Union[str, Iterable[str]]) -> "Marker":
        if isinstance(keys, str):
            keys = (keys,)
        drop = set(keys)
        self._data = {k: v for k, v in self._working().items() if k not in drop}
        return self

    # -- lifecycle ----------------------------------------------------------

    @property
    def ready(self) -> bool:
        return self._ready

    def _resolve(self) -> None:
        # identity and data are derived only while still unset
        if not self._name:
            self.set_name_from_url()
        if not self._url:
            self.auto_set_url()
        if self._data is None:
            self.set_data(self.context.query)

    def evaluate(self) -> Decision:
        """Work out what this request should do, without doing it."""
        self._resolve()
        stored = self.store.get(self._name)
        return decide(self._data, stored, self._url, self.reset_key)

    def initialize(self, bypass_redirect: bool = False) -> Decision:
        """Resolve name, URL and data, then redirect if the request calls for it.

        With the default redirector a redirect raises `RedirectRequired` and
        nothing after this call runs. A custom redirector that returns instead
        gets the decision handed back.
        """
        self._resolve()

        decision = NO_ACTION
        if not bypass_redirect:
            decision = self.evaluate()
            self._execute(decision)

        self._ready = True
        return decision

    def _execute(self, decision: Decision) -> None:
        if not decision.redirects:
            return
        if decision.action is Action.CLEAR_AND_REDIRECT:
            logger.info(f"reset requested for {self._name}, clearing")
            self.forget()
        else:
            logger.info(f"restoring {self._name} -> {decision.target}")
        self._redirector(decision.target, self._redirect_code)

    def remember(
        self,
        vars: Optional[Mapping[str, Any]] = None,
        mode: OverrideMode = OverrideMode.REPLACE,
    ) -> "Marker":
        if not self._ready:
            self.initialize(False)

        if vars:
            if mode == OverrideMode.APPEND:
                self.add(vars)
            else:
                self.set_data(vars)

        self.store.set(self._name, self._data or {})
        return self

    def forget(self) -> "Marker":
        if not self._name:
            self.set_name_from_url()
        self.store.delete(self._name)
        return self

    def get_reset_url(self) -> str:
        if not self._url:
            self.auto_set_url()
        return f"{self._url}?{self.reset_key}=1"
