"""Async HTTP client wrapper built on HTTPX.

Provides:
- Structured error handling (every failure becomes an ApiError subclass)
- Request/response logging with header redaction
- Auth integration (API key headers)
- Pydantic response parsing

The client makes exactly one attempt per call. Callers that want retries
wrap the call themselves.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from dimensify.core.api.http.config import HttpClientConfig
from dimensify.core.api.http.errors import (
    ApiError,
    AuthError,
    ClientError,
    DecodeError,
    NetworkError,
    RateLimitError,
    ServerError,
    TimeoutError,
)
from dimensify.core.api.http.logging_utils import RequestLogContext, log_request, log_response
from dimensify.core.api.http.utils import get_request_id, join_url, safe_snippet

REQUEST_ID_HEADER = "X-Request-Id"


def _default_request_id() -> str:
    """Generate simple timestamp-based request ID."""
    return f"req_{int(time.time() * 1000)}"


def _is_json_response(resp: httpx.Response) -> bool:
    ctype = resp.headers.get("content-type", "")
    return "application/json" in ctype or "+json" in ctype


def _categorize_http_error(status_code: int) -> type[ApiError]:
    """Map an HTTP error status (>= 400) to its error class."""
    if status_code in (401, 403):
        return AuthError
    if status_code == 429:
        return RateLimitError
    if status_code < 500:
        return ClientError
    return ServerError


def _build_api_error(
    *,
    exc_type: type[ApiError],
    message: str,
    method: str,
    url: str,
    status_code: int | None = None,
    response: httpx.Response | None = None,
    request_id: str | None = None,
    body_snippet_limit: int = 4096,
    cause: BaseException | None = None,
) -> ApiError:
    """Build an API error, copying a body snippet from ``response``."""
    snippet: str | None = None
    if response is not None:
        snippet = safe_snippet(response.content or b"", body_snippet_limit)
        request_id = request_id or get_request_id(response.headers)

    return exc_type(
        message=message,
        method=method,
        url=url,
        status_code=status_code,
        request_id=request_id,
        response_body_snippet=snippet,
        cause=cause,
    )


class AsyncApiClient:
    """Asynchronous HTTP API client.

    Built on httpx.AsyncClient with structured errors and request logging.

    Args:
        config: Client configuration
        auth: Optional authentication handler (e.g. ApiKeyAuth)
        transport: Optional custom transport (useful for testing)

    Example:
        >>> from dimensify.core.api.http import AsyncApiClient, HttpClientConfig
        >>> config = HttpClientConfig(base_url="https://api.replicate.com")
        >>> async with AsyncApiClient(config) as client:
        ...     resp = await client.get("/v1/predictions/abc")
        ...     data = client.json(resp)
    """

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        auth: httpx.Auth | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.auth = auth
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"User-Agent": config.user_agent, **config.headers},
            timeout=config.timeout,
            auth=auth,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(self, method: str, path: str, *, json_body: Any = None) -> httpx.Response:
        """Send one request and return the response.

        Args:
            method: HTTP method
            path: Request path (relative to base_url)
            json_body: JSON-serializable request body

        Returns:
            HTTP response with a status below 400

        Raises:
            ApiError: Subclass chosen by status code, or NetworkError /
                TimeoutError when no response arrived
        """
        method_u = method.upper()
        url = join_url(str(self._client.base_url), path)
        req_id = _default_request_id()
        headers = {**self._client.headers, REQUEST_ID_HEADER: req_id}

        ctx = RequestLogContext(method=method_u, url=url, request_id=req_id)
        start = log_request(ctx, headers, self.config.redact_headers)

        try:
            resp = await self._client.request(
                method_u, url, headers={REQUEST_ID_HEADER: req_id}, json=json_body
            )
        except httpx.TimeoutException as e:
            raise _build_api_error(
                exc_type=TimeoutError,
                message="Request timed out",
                method=method_u,
                url=url,
                request_id=req_id,
                cause=e,
            ) from e
        except httpx.RequestError as e:
            raise _build_api_error(
                exc_type=NetworkError,
                message="Network error while sending request",
                method=method_u,
                url=url,
                request_id=req_id,
                cause=e,
            ) from e

        log_response(ctx, resp.status_code, time.perf_counter() - start)

        if resp.status_code >= 400:
            raise _build_api_error(
                exc_type=_categorize_http_error(resp.status_code),
                message="HTTP error response",
                method=method_u,
                url=url,
                status_code=resp.status_code,
                response=resp,
                request_id=req_id,
                body_snippet_limit=self.config.max_response_body_for_error,
            )

        return resp

    async def get(self, path: str) -> httpx.Response:
        """Perform async GET request."""
        return await self.request("GET", path)

    async def post(self, path: str, *, json_body: Any = None) -> httpx.Response:
        """Perform async POST request."""
        return await self.request("POST", path, json_body=json_body)

    def json(self, response: httpx.Response) -> Any:
        """Decode JSON response with structured error handling.

        Raises:
            DecodeError: If response is not JSON or parsing fails
        """
        if response.status_code == 204 or not response.content:
            return None
        if not _is_json_response(response):
            raise _build_api_error(
                exc_type=DecodeError,
                message="Response is not JSON (content-type mismatch)",
                method=response.request.method,
                url=str(response.request.url),
                status_code=response.status_code,
                response=response,
                body_snippet_limit=self.config.max_response_body_for_error,
            )
        try:
            return response.json()
        except ValueError as e:
            raise _build_api_error(
                exc_type=DecodeError,
                message="Failed to parse JSON response",
                method=response.request.method,
                url=str(response.request.url),
                status_code=response.status_code,
                response=response,
                body_snippet_limit=self.config.max_response_body_for_error,
                cause=e,
            ) from e

    def parse_pydantic(self, response: httpx.Response, model: type[BaseModel]) -> Any:
        """Parse and validate a JSON response with a Pydantic model.

        Raises:
            DecodeError: If JSON parsing or validation fails
        """
        data = self.json(response)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise _build_api_error(
                exc_type=DecodeError,
                message="Failed to validate response with Pydantic model",
                method=response.request.method,
                url=str(response.request.url),
                status_code=response.status_code,
                response=response,
                body_snippet_limit=self.config.max_response_body_for_error,
                cause=e,
            ) from e
