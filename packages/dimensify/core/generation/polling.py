"""Submit-then-poll adapter for the image backend (Replicate predictions API).

A run submits one prediction, then reads its status until it is terminal or
the poll ceiling is reached:

    pending -> polling -> polling* -> succeeded | failed | timed_out

Polls are strictly sequential and separated by ``poll_interval_s``. The
delay primitive is injected (``asyncio.sleep`` by default) so the wait is a
cooperative suspension point and tests can replace it. Cancelling the task
awaiting ``run`` stops the session at the next await; no further polls are
issued.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
import random
from typing import Any

import httpx

from dimensify.core.api.http import ApiError, ApiKeyAuth, AsyncApiClient, HttpClientConfig
from dimensify.core.config.models import ReplicateSettings
from dimensify.core.generation import errors
from dimensify.core.generation.models import (
    GenerationRequest,
    GenerationResult,
    JobHandle,
    JobSnapshot,
    JobStatus,
    MediaKind,
    PollState,
)
from dimensify.core.generation.protocols import SleepFn
from dimensify.core.utils.logging import get_logger

logger = logging.getLogger(__name__)

PREDICTIONS_PATH = "/v1/predictions"

# Largest integer a JSON consumer can hold exactly
MAX_SEED = 2**53 - 1

FIXED_INPUTS: dict[str, Any] = {
    "style_selections": "Fooocus V2,Fooocus Enhance,Fooocus Sharp",
    "image_number": 1,
    "refiner_switch": 0.5,
    "uov_method": "Disabled",
}


def normalize_output(output: Any) -> list[str]:
    """Turn a backend ``output`` field into an ordered list of asset references.

    A single reference becomes a one-element list; a sequence is passed
    through unchanged.

    Raises:
        BackendError: For an output that is not a reference or a sequence of
            references
    """
    if output is None:
        return []
    if isinstance(output, str):
        return [output]
    if isinstance(output, (list, tuple)):
        if not all(isinstance(item, str) for item in output):
            raise errors.BackendError("Unexpected output from backend: non-text asset reference")
        return list(output)
    raise errors.BackendError(f"Unexpected output from backend: {type(output).__name__}")


class PollingAdapter:
    """Drives one prediction per run from submission to a terminal status.

    Args:
        settings: Backend settings (URL, model version, token, poll policy)
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
        sleep: Delay primitive awaited between polls
        rng: Random source for generated seeds

    Example:
        >>> adapter = PollingAdapter(load_app_config().replicate)
        >>> result = await adapter.run(GenerationRequest(prompt="a red fox"))
        >>> result.assets
        ('https://replicate.delivery/.../0.png',)
    """

    media_kind = MediaKind.IMAGE

    def __init__(
        self,
        settings: ReplicateSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFn = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._sleep = sleep
        self._rng = rng or random.Random()

    def build_input(self, request: GenerationRequest) -> dict[str, Any]:
        """Merge fixed backend defaults under the caller's parameters.

        Caller values win for any key they set. ``seed`` is sent as
        ``image_seed``; a fresh seed is drawn when neither is given.
        """
        params = request.to_params()
        params.pop("seed", None)
        if not request.wants_random_seed:
            params["image_seed"] = request.seed
        elif params.get("image_seed") in (None, "random"):
            params["image_seed"] = self._rng.randint(0, MAX_SEED)
        return {**FIXED_INPUTS, **params}

    @asynccontextmanager
    async def _connect(self, client: AsyncApiClient | None) -> AsyncIterator[AsyncApiClient]:
        if client is not None:
            yield client
            return
        token = errors.require_credential(self.settings.api_token, "Replicate API token")
        config = HttpClientConfig(
            base_url=self.settings.base_url,
            timeout=httpx.Timeout(self.settings.request_timeout_s, connect=5.0),
            headers={"Content-Type": "application/json"},
        )
        auth = ApiKeyAuth(header_name="Authorization", api_key=token, prefix="Token")
        async with AsyncApiClient(config, auth=auth, transport=self._transport) as opened:
            yield opened

    async def submit(
        self, request: GenerationRequest, *, client: AsyncApiClient | None = None
    ) -> JobHandle:
        """Create a prediction and return its handle.

        Raises:
            ConfigurationError: If no API token is configured (no request is sent)
            GenerationError: Classified transport failure
        """
        payload = {"version": self.settings.model_version, "input": self.build_input(request)}
        async with self._connect(client) as c:
            try:
                resp = await c.post(PREDICTIONS_PATH, json_body=payload)
                handle: JobHandle = c.parse_pydantic(resp, JobHandle)
            except ApiError as e:
                raise errors.normalize_error(e) from e
        logger.info("Submitted prediction %s", handle.id)
        return handle

    async def poll(self, handle: JobHandle, *, client: AsyncApiClient | None = None) -> JobSnapshot:
        """Read the current status of ``handle`` once.

        Raises:
            ConfigurationError: If no API token is configured
            GenerationError: Classified transport failure
        """
        async with self._connect(client) as c:
            try:
                resp = await c.get(f"{PREDICTIONS_PATH}/{handle.id}")
                return c.parse_pydantic(resp, JobSnapshot)
            except ApiError as e:
                raise errors.normalize_error(e) from e

    async def run_to_completion(self, request: GenerationRequest) -> GenerationResult:
        """Submit ``request`` and poll until the prediction is terminal.

        Raises:
            BackendError: The prediction failed, or succeeded without output
            TimeoutError: No terminal status within ``max_poll_attempts`` polls
            GenerationError: Any classified submit/poll failure
        """
        max_attempts = self.settings.max_poll_attempts
        interval = self.settings.poll_interval_s
        state = PollState.PENDING

        async with self._connect(None) as client:
            handle = await self.submit(request, client=client)
            log = get_logger(__name__, job_id=handle.id)
            state = state.transition(PollState.POLLING)

            for attempt in range(1, max_attempts + 1):
                if attempt > 1:
                    await self._sleep(interval)
                snapshot = await self.poll(handle, client=client)
                log.debug("Poll %d/%d: %s", attempt, max_attempts, snapshot.status.value)

                if snapshot.status is JobStatus.SUCCEEDED:
                    state = state.transition(PollState.SUCCEEDED)
                    return self._result(handle, snapshot)
                if snapshot.status is JobStatus.FAILED:
                    state = state.transition(PollState.FAILED)
                    log.warning("Prediction failed: %s", snapshot.error or "no error detail")
                    raise errors.BackendError(snapshot.error or None)
                state = state.transition(PollState.POLLING)

            state.transition(PollState.TIMED_OUT)
            log.warning("Prediction still not finished after %d polls", max_attempts)
            raise errors.TimeoutError()

    async def run(self, request: GenerationRequest) -> GenerationResult:
        return await self.run_to_completion(request)

    def _result(self, handle: JobHandle, snapshot: JobSnapshot) -> GenerationResult:
        assets = normalize_output(snapshot.output)
        if not assets:
            raise errors.BackendError("Generation finished without output. Please try again.")
        logger.info("Prediction %s succeeded with %d asset(s)", handle.id, len(assets))
        return GenerationResult(media_kind=self.media_kind, assets=tuple(assets))
