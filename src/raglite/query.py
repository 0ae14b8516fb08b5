"""URL helpers for endpoint paths."""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit


def build_url(path: str, params: Optional[Mapping[str, Optional[str]]] = None) -> str:
    """Append the non-empty ``params`` to ``path`` as a query string.

    Empty strings and ``None`` mean "not provided" and are dropped, so an
    explicitly empty filter cannot be sent through this helper. Keys are
    sorted for a stable URL.

    Example:
        build_url("/api/v1/datasets", {"status": ""}) -> "/api/v1/datasets"
        build_url("/api/v1/datasets", {"status": "active"})
            -> "/api/v1/datasets?status=active"
    """
    provided = {k: v for k, v in (params or {}).items() if v}
    if not provided:
        return path

    parts = urlsplit(path)
    query = dict(parse_qsl(parts.query))
    query.update(provided)
    return urlunsplit(parts._replace(query=urlencode(sorted(query.items()))))


def segment(value: str) -> str:
    """Percent-encode ``value`` as a single path segment."""
    return quote(value, safe="")
