# src/pagemarker/state.py
from __future__ import annotations
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

import logging
from flask import has_request_context, session

from pagemarker.config import get_namespace
from pagemarker.errors import StoreUnavailable

logger = logging.getLogger("pagemarker.state")
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("[pagemarker.state] %(message)s"))
    logger.addHandler(h)
    logger.setLevel(logging.INFO)


class SessionStore:
    """Remembered page data, one entry per page name, kept in the client session.

    Entries are stored as lists of ``[key, value]`` pairs rather than dicts so
    that key order survives session serializers which sort object keys.
    """

    def __init__(self, session: Optional[MutableMapping[str, Any]] = None, namespace: Optional[str] = None):
        # None means "use flask.session of the active request"
        self._session = session
        self.namespace = namespace or get_namespace()

    def key(self, name: str) -> str:
        return f"{self.namespace}.{name}"

    def _backend(self) -> MutableMapping[str, Any]:
        if self._session is not None:
            return self._session
        if not has_request_context():
            raise StoreUnavailable("Session access requires a request context")
        return session

    def get(self, name: str) -> Optional[Dict[str, Any]]:
        key = self.key(name)
        try:
            raw = self._backend().get(key)
            data = None if raw is None else _decode(raw)
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(f"Cannot read {key!r} from session: {e}") from e
        if data is not None:
            logger.debug(f"read {key}")
        return data

    def set(self, name: str, data: Mapping[str, Any]) -> None:
        key = self.key(name)
        try:
            self._backend()[key] = _encode(data)
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(f"Cannot write {key!r} to session: {e}") from e
        logger.debug(f"wrote {key} ({len(data)} keys)")

    def delete(self, name: str) -> None:
        key = self.key(name)
        try:
            self._backend().pop(key, None)
        except StoreUnavailable:
            raise
        except Exception as e:
            raise StoreUnavailable(f"Cannot delete {key!r} from session: {e}") from e
        logger.debug(f"deleted {key}")


def _encode(data: Mapping[str, Any]) -> List[List[Any]]:
    return [[k, list(v) if isinstance(v, (list, tuple)) else v] for k, v in data.items()]


def _decode(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (str, bytes)):
        raise TypeError(f"expected a list of pairs, got {type(raw).__name__}")
    return {k: v for k, v in raw}
