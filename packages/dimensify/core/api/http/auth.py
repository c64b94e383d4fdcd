from __future__ import annotations

from collections.abc import AsyncGenerator, Generator

import httpx
from pydantic import BaseModel, Field


class ApiKeyAuth(httpx.Auth, BaseModel):
    """Static API key header authentication.

    Works for both sync and async clients.

    Args:
        header_name: Header carrying the key (e.g. "x-api-key")
        api_key: Secret value
        prefix: Optional scheme placed before the key (e.g. "Token")

    Example:
        >>> ApiKeyAuth(header_name="Authorization", api_key="r8_...", prefix="Token")
        >>> ApiKeyAuth(header_name="x-api-key", api_key="SG_...")
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    header_name: str
    api_key: str = Field(repr=False)
    prefix: str | None = None

    @property
    def header_value(self) -> str:
        return f"{self.prefix} {self.api_key}" if self.prefix else self.api_key

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers[self.header_name] = self.header_value
        yield request

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        request.headers[self.header_name] = self.header_value
        yield request
