"""Protocols the generation orchestrator depends on."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from dimensify.core.generation.models import GenerationRequest, GenerationResult

SleepFn = Callable[[float], Awaitable[None]]
"""Delay primitive used between polls (``asyncio.sleep`` in production)."""


@runtime_checkable
class GenerationBackend(Protocol):
    """Anything that turns a request into a finished result.

    Implementations either poll a job to completion or make one blocking
    call; the orchestrator only sees this method. Failures are raised as
    ``GenerationError`` subclasses.
    """

    async def run(self, request: GenerationRequest) -> GenerationResult:
        """Generate assets for ``request``."""
        ...
