"""Closed error taxonomy for generation calls and the transport normalizer.

Every failure leaving the generation core is a ``GenerationError`` whose
``kind`` is one of the eight ``ErrorKind`` members. Adapters classify
transport failures with ``normalize_error`` and raise the result; nothing
in this module logs or retries.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from dimensify.core.api.http.errors import ApiError, DecodeError, NetworkError
from dimensify.core.api.http.errors import TimeoutError as TransportTimeoutError
from dimensify.core.api.http.utils import parse_json_snippet


class ErrorKind(str, Enum):
    """User-facing error categories."""

    CONFIGURATION = "ConfigurationError"
    AUTHENTICATION = "AuthenticationError"
    AUTHORIZATION = "AuthorizationError"
    RATE_LIMIT = "RateLimitError"
    BACKEND = "BackendError"
    CONNECTIVITY = "ConnectivityError"
    TIMEOUT = "TimeoutError"
    UNKNOWN = "UnknownError"


class GenerationError(Exception):
    """Base class for every classified generation failure.

    Attributes:
        kind: Taxonomy member, fixed per subclass
        message: Human-readable message, never empty
        status_code: HTTP status behind the failure, when there was one
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_message: str = "An unexpected error occurred. Please try again."

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(GenerationError):
    kind = ErrorKind.CONFIGURATION
    default_message = "API token not configured. Please check your environment variables."


class AuthenticationError(GenerationError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Invalid API token. Please check your credentials."


class AuthorizationError(GenerationError):
    kind = ErrorKind.AUTHORIZATION
    default_message = "Access forbidden. Please check your API permissions."


class RateLimitError(GenerationError):
    kind = ErrorKind.RATE_LIMIT
    default_message = "Rate limit exceeded. Please try again later."


class BackendError(GenerationError):
    kind = ErrorKind.BACKEND
    default_message = "Generation failed. Please try again."


class ConnectivityError(GenerationError):
    kind = ErrorKind.CONNECTIVITY
    default_message = "Unable to reach the API. Please check your internet connection."


class TimeoutError(GenerationError):
    kind = ErrorKind.TIMEOUT
    default_message = "Generation timed out. Please try again."


class UnknownError(GenerationError):
    kind = ErrorKind.UNKNOWN


_STATUS_ERRORS: dict[int, type[GenerationError]] = {
    401: AuthenticationError,
    403: AuthorizationError,
    429: RateLimitError,
}

API_ERROR_FALLBACK = "Unknown error occurred"


def require_credential(value: str | None, setting_name: str) -> str:
    """Return ``value`` stripped, or raise ConfigurationError when it is blank.

    Called before any network activity so a missing secret never costs a
    request.
    """
    if value is None or not value.strip():
        raise ConfigurationError(
            f"{setting_name} not configured. Please check your environment variables."
        )
    return value.strip()


def _body_error_text(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    for key in ("error", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
        if isinstance(value, dict) and isinstance(value.get("message"), str):
            return value["message"]
    return None


def normalize_error(exc: BaseException) -> GenerationError:
    """Classify ``exc`` into exactly one GenerationError.

    Rules:
        - GenerationError: returned unchanged
        - HTTP 401 / 403 / 429: Authentication / Authorization / RateLimit
        - any other HTTP status: BackendError, message from the body's
          ``error`` (or ``detail``) field, else a generic fallback
        - no response (network failure, transport timeout): ConnectivityError
        - anything else: UnknownError

    The function is pure: it builds and returns the error, it does not raise
    or log.
    """
    if isinstance(exc, GenerationError):
        return exc

    if isinstance(exc, (NetworkError, TransportTimeoutError)):
        return ConnectivityError()

    status = exc.status_code if isinstance(exc, ApiError) else None
    if status is not None and not isinstance(exc, DecodeError):
        error_cls = _STATUS_ERRORS.get(status)
        if error_cls is not None:
            return error_cls(status_code=status)
        detail = _body_error_text(parse_json_snippet(exc.response_body_snippet))
        return BackendError(f"API Error: {detail or API_ERROR_FALLBACK}", status_code=status)

    return UnknownError()
