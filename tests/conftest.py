"""Shared pytest fixtures for Dimensify tests."""

from __future__ import annotations

from collections.abc import Callable
import json
from typing import Any

import httpx
import pytest

from dimensify.core.config.models import ReplicateSettings, SegmindSettings

# ============================================================================
# Fakes
# ============================================================================


class FakeSleep:
    """Delay primitive that records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeReplicate:
    """In-memory predictions API served through ``httpx.MockTransport``.

    Args:
        statuses: Status bodies returned by successive polls; the last one
            repeats once the list is exhausted
        submit_response: Optional (status_code, body) for the submit call
    """

    def __init__(
        self,
        statuses: list[dict[str, Any]],
        submit_response: tuple[int, dict[str, Any]] | None = None,
    ) -> None:
        self.statuses = statuses
        self.submit_response = submit_response or (201, {"id": "pred-123", "status": "starting"})
        self.requests: list[httpx.Request] = []
        self.submit_bodies: list[dict[str, Any]] = []
        self.poll_count = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            self.submit_bodies.append(json.loads(request.content))
            status_code, body = self.submit_response
            return httpx.Response(status_code, json=body)

        self.poll_count += 1
        body = self.statuses[min(self.poll_count, len(self.statuses)) - 1]
        return httpx.Response(200, json={"id": "pred-123", **body})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def counting_transport(
    handler: Callable[[httpx.Request], httpx.Response],
) -> tuple[httpx.MockTransport, list[httpx.Request]]:
    """Wrap ``handler`` and record every request that reaches the network layer."""
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return httpx.MockTransport(_handler), seen


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def replicate_settings() -> ReplicateSettings:
    return ReplicateSettings(
        base_url="https://replicate.test",
        model_version="owner/model:abc123",
        api_token="r8_test_token",
    )


@pytest.fixture
def segmind_settings() -> SegmindSettings:
    return SegmindSettings(base_url="https://segmind.test", api_key="sg_test_key")


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def make_replicate() -> type[FakeReplicate]:
    """Factory for FakeReplicate backends."""
    return FakeReplicate


@pytest.fixture
def make_counting_transport() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    return counting_transport
