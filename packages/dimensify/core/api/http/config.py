from __future__ import annotations

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Headers whose values never reach a log line
SECRET_HEADERS = ("authorization", "x-api-key")


class HttpClientConfig(BaseModel):
    """Per-backend settings for AsyncApiClient.

    Args:
        base_url: Root URL of the backend (e.g. "https://api.replicate.com")
        timeout: HTTPX timeout; for the blocking video backend the read
            timeout is the only bound on a generation call
        headers: Default headers applied to all requests
        user_agent: User-Agent header value
        redact_headers: Headers to redact in logs (case-insensitive)
        max_response_body_for_error: Max response bytes kept on errors
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str
    timeout: httpx.Timeout = Field(default_factory=lambda: httpx.Timeout(30.0, connect=5.0))
    headers: dict[str, str] = Field(default_factory=dict)
    user_agent: str = "dimensify/0.1"
    redact_headers: tuple[str, ...] = SECRET_HEADERS
    max_response_body_for_error: int = 4096

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")
