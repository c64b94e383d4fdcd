"""Small helpers shared by the HTTP clients."""

from __future__ import annotations

from collections.abc import Mapping
import json
from typing import Any
from urllib.parse import urljoin


def join_url(base_url: str, path: str) -> str:
    """Join base URL with path in a predictable way.

    Ensures base URL ends with '/' and strips leading '/' from path, so
    ``join_url("https://api.example.com/v1", "/predictions")`` keeps the
    ``/v1`` prefix.
    """
    base = base_url if base_url.endswith("/") else base_url + "/"
    return urljoin(base, path.lstrip("/"))


def safe_snippet(content: bytes, limit: int) -> str:
    """Decode at most ``limit`` bytes of a body for logs and error messages."""
    if not content:
        return ""
    return content[:limit].decode("utf-8", errors="replace")


def get_request_id(headers: Mapping[str, str]) -> str | None:
    """Extract a request ID from common tracing headers (case-insensitive)."""
    for key in ("x-request-id", "x-correlation-id", "request-id", "trace-id"):
        for hk, hv in headers.items():
            if hk.lower() == key:
                return hv
    return None


def parse_json_snippet(snippet: str | None) -> Any:
    """Parse a body snippet as JSON, returning None when it is not JSON.

    Snippets are truncated, so a long body may fail to parse even when the
    server sent valid JSON.
    """
    if not snippet:
        return None
    try:
        return json.loads(snippet)
    except ValueError:
        return None
