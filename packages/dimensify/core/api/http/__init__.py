"""HTTPX wrapper used by the generation backends.

Exposes a small surface:
- AsyncApiClient: async client, one attempt per call
- HttpClientConfig: configuration
- ApiKeyAuth: static key header auth
- Exceptions: ApiError and subclasses
"""

from dimensify.core.api.http.auth import ApiKeyAuth
from dimensify.core.api.http.client import AsyncApiClient
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

__all__ = [
    "AsyncApiClient",
    "HttpClientConfig",
    "ApiKeyAuth",
    "ApiError",
    "NetworkError",
    "TimeoutError",
    "DecodeError",
    "RateLimitError",
    "AuthError",
    "ClientError",
    "ServerError",
]
