"""Transport errors raised by AsyncApiClient.

The generation layer only needs two facts from a failed exchange: whether a
response arrived (``status_code``) and what its body said
(``response_body_snippet``). Method, URL and request id are kept for logs.
"""

from __future__ import annotations


class ApiError(Exception):
    """Base exception for one failed HTTP exchange.

    Attributes:
        message: Short description of what went wrong
        method: HTTP method of the request
        url: Absolute request URL
        status_code: HTTP status, None when no response arrived
        request_id: ``X-Request-Id`` sent with the request
        response_body_snippet: Truncated, UTF-8 decoded response body
        cause: Underlying httpx or decoding exception, if any
    """

    def __init__(
        self,
        *,
        message: str,
        method: str,
        url: str,
        status_code: int | None = None,
        request_id: str | None = None,
        response_body_snippet: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message
        self.method = method
        self.url = url
        self.status_code = status_code
        self.request_id = request_id
        self.response_body_snippet = response_body_snippet
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [self.message, f"{self.method} {self.url}"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.request_id:
            parts.append(f"request_id={self.request_id}")
        return " | ".join(parts)


class NetworkError(ApiError):
    """No response: DNS failure, refused or reset connection."""


class TimeoutError(ApiError):
    """No response before the transport timeout elapsed."""


class DecodeError(ApiError):
    """Response arrived but its body could not be decoded."""


class RateLimitError(ApiError):
    """HTTP 429."""


class AuthError(ApiError):
    """HTTP 401 or 403."""


class ClientError(ApiError):
    """Any other HTTP 4xx."""


class ServerError(ApiError):
    """HTTP 5xx."""
