from __future__ import annotations
import os

DEFAULT_NAMESPACE = "PageMarker"
DEFAULT_RESET_KEY = "__pagemarker_reset"
DEFAULT_REDIRECT_CODE = 307
DEFAULT_BIND = "127.0.0.1:8050"

def get_namespace() -> str:
    return os.getenv("PAGEMARKER_NAMESPACE") or DEFAULT_NAMESPACE

def get_reset_key() -> str:
    return os.getenv("PAGEMARKER_RESET_KEY") or DEFAULT_RESET_KEY

def get_redirect_code() -> int:
    raw = os.getenv("PAGEMARKER_REDIRECT_CODE")
    code = int(raw) if raw else DEFAULT_REDIRECT_CODE
    return check_redirect_code(code)

# 300 and 304 carry no usable Location
REDIRECT_CODES = {301, 302, 303, 307, 308}

def check_redirect_code(code: int) -> int:
    code = int(code)
    if code not in REDIRECT_CODES:
        raise ValueError(f"Redirect code must be one of {sorted(REDIRECT_CODES)}, got {code}")
    return code

def get_bind() -> tuple[str, int]:
    bind = os.getenv("PAGEMARKER_BIND", DEFAULT_BIND)  # e.g. 0.0.0.0:8050
    host, port = bind.rsplit(":", 1)
    return host, int(port)
