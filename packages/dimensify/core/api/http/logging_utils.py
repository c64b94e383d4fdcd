from __future__ import annotations

from collections.abc import Mapping
import logging
import time

from pydantic import BaseModel

logger = logging.getLogger("dimensify.core.api.http")

REDACTED = "***REDACTED***"


def redact_headers(headers: Mapping[str, str], redact: tuple[str, ...]) -> dict[str, str]:
    """Return a copy of ``headers`` with sensitive values replaced.

    Args:
        headers: Headers to redact
        redact: Header names to redact (case-insensitive)

    Returns:
        Headers safe to write to a log
    """
    red = {name.lower() for name in redact}
    return {k: (REDACTED if k.lower() in red else v) for k, v in headers.items()}


class RequestLogContext(BaseModel):
    """Fields shared by the request and response log lines of one exchange."""

    method: str
    url: str
    request_id: str | None = None


def log_request(
    ctx: RequestLogContext, headers: Mapping[str, str], redact: tuple[str, ...]
) -> float:
    """Log an outgoing request and return the start timestamp."""
    start = time.perf_counter()
    logger.debug(
        "HTTP request",
        extra={
            "method": ctx.method,
            "url": ctx.url,
            "request_id": ctx.request_id,
            "headers": redact_headers(headers, redact),
        },
    )
    return start


def log_response(ctx: RequestLogContext, status_code: int, elapsed_s: float) -> None:
    """Log a received response with its latency."""
    logger.debug(
        "HTTP response",
        extra={
            "method": ctx.method,
            "url": ctx.url,
            "request_id": ctx.request_id,
            "status_code": status_code,
            "elapsed_ms": int(elapsed_s * 1000),
        },
    )
