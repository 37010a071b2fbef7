"""Turn a URL path (or any free text) into a stable page identifier."""
from __future__ import annotations

import posixpath
import re

_SPACES = re.compile(r" {2,}")
_SEPARATORS = str.maketrans({"-": "_", "/": "_", "\\": "_", ".": "_", " ": "_"})


def clean_name(raw: str) -> str:
    """Collapse repeated spaces, then map separators to underscores.

    Applying it twice gives the same result as applying it once.
    """
    return _SPACES.sub(" ", raw).translate(_SEPARATORS)


def name_from_path(path: str) -> str:
    """Derive an identifier from a request path.

    >>> name_from_path("/Users/List.php")
    'users_list'

    An empty path (or just ``/``) gives ``""``; callers must reject that.
    """
    path = path.split("?", 1)[0].lower().strip("/")
    if not path:
        return ""
    directory, filename = posixpath.split(path)
    stem, _ext = posixpath.splitext(filename)
    joined = f"{directory}/{stem}" if directory else stem
    return clean_name(joined)
