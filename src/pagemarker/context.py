# src/pagemarker/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from flask import has_request_context, request

from pagemarker.errors import MissingRequestContext
from pagemarker.urls import current_url

QueryDict = Dict[str, Union[str, List[str]]]


@dataclass(frozen=True)
class RequestContext:
    """Read-only view of the request metadata a marker needs.

    ``query`` keeps the request's key order; keys sent more than once map to
    a list of their values.
    """
    path: Optional[str] = None
    query: QueryDict = field(default_factory=dict)
    secure: bool = False
    server_name: Optional[str] = None
    server_port: Optional[str] = None
    server_protocol: Optional[str] = "HTTP/1.1"
    request_uri: Optional[str] = None

    @classmethod
    def from_request(cls, req) -> "RequestContext":
        """Build from a Flask/Werkzeug request object."""
        query: QueryDict = {}
        for key, values in req.args.lists():
            query[key] = values[0] if len(values) == 1 else list(values)
        # the Host the client asked for, not the address the server is bound to
        server_name, server_port = split_host(req.host)
        return cls(
            path=req.path,
            query=query,
            secure=req.is_secure,
            server_name=server_name,
            server_port=server_port,
            server_protocol=req.environ.get("SERVER_PROTOCOL"),
            request_uri=req.script_root + req.full_path,
        )

    @classmethod
    def current(cls) -> "RequestContext":
        if not has_request_context():
            raise MissingRequestContext("Page markers require an active request context")
        return cls.from_request(request)

    def url(self) -> str:
        if not self.server_name or not self.server_protocol:
            raise MissingRequestContext("Request has no server name or protocol to build a URL from")
        uri = self.request_uri if self.request_uri is not None else (self.path or "/")
        return current_url(self.secure, self.server_name, self.server_port, self.server_protocol, uri)


def split_host(host: str) -> Tuple[str, Optional[str]]:
    """Split ``host[:port]`` (IPv6 literals in brackets) into name and port."""
    name, sep, port = host.rpartition(":")
    if not sep or name.endswith(":") or "]" in port:
        return host, None
    return name, port or None
