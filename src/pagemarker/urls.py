from __future__ import annotations

from typing import Mapping, Optional, Sequence, Union
from urllib.parse import urlencode

QueryValue = Union[str, Sequence[str], None]

# (secure, port) pairs that need no explicit port in the URL
_DEFAULT_PORTS = {(False, "80"), (True, "443")}


def strip_query(url: str) -> str:
    """Return ``url`` without its ``?query`` part."""
    return url.split("?", 1)[0]


def current_url(
    secure: bool,
    server_name: str,
    server_port: Optional[Union[str, int]],
    server_protocol: str,
    request_uri: str,
) -> str:
    """Build the canonical absolute URL of a request, query discarded.

    The scheme comes from the protocol token (``HTTP/1.1`` -> ``http``) with
    ``s`` appended for secure connections.
    """
    scheme = server_protocol.lower().split("/", 1)[0] + ("s" if secure else "")
    port = "" if server_port is None else str(server_port)
    if port and (secure, port) not in _DEFAULT_PORTS:
        host = f"{server_name}:{port}"
    else:
        host = server_name
    return strip_query(f"{scheme}://{host}{request_uri}")


def build_query(data: Mapping[str, QueryValue]) -> str:
    """Form-encode ``data`` in insertion order; list values repeat the key."""
    pairs = []
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, v) for v in value if v is not None)
        else:
            pairs.append((key, value))
    return urlencode(pairs)


def with_query(base_url: str, data: Mapping[str, QueryValue]) -> str:
    return f"{base_url}?{build_query(data)}"
