"""Flask wiring for page markers.

`remember_page` is the usual entry point::

    @app.route("/items")
    @remember_page(exclude=["csrf_token"])
    def items():
        ...

Inside the view the marker is available as ``g.page_marker``; templates can
render the reset link with ``pagemarker_reset_url()`` once `init_app` ran.
"""
from __future__ import annotations

import functools
from typing import Iterable, Optional

from flask import Flask, current_app, g

from pagemarker.context import RequestContext
from pagemarker.marker import Marker
from pagemarker.state import SessionStore


def current_marker(name: Optional[str] = None, **kwargs) -> Marker:
    """Build a marker over the active Flask request and session.

    ``PAGEMARKER_*`` keys in the app config take precedence over the
    environment defaults.
    """
    config = current_app.config
    store = SessionStore(namespace=config.get("PAGEMARKER_NAMESPACE"))
    kwargs.setdefault("reset_key", config.get("PAGEMARKER_RESET_KEY"))
    kwargs.setdefault("redirect_code", config.get("PAGEMARKER_REDIRECT_CODE"))
    return Marker(RequestContext.current(), store, name=name, **kwargs)


def remember_page(name: Optional[str] = None, exclude: Iterable[str] = ()):
    exclude = tuple(exclude)

    def decorator(view):
        @functools.wraps(view)
        def wrapper(*args, **kwargs):
            marker = current_marker(name)
            if exclude:
                marker.exclude(exclude)
            # may raise RedirectRequired, in which case the view never runs
            marker.remember()
            g.page_marker = marker
            return view(*args, **kwargs)
        return wrapper
    return decorator


def reset_url() -> str:
    marker = g.get("page_marker")
    if marker is None:
        marker = current_marker()
    return marker.get_reset_url()


def init_app(app: Flask) -> Flask:
    app.add_template_global(reset_url, name="pagemarker_reset_url")
    return app
