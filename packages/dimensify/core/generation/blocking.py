"""Single-call adapter for the video backend (Segmind text-to-video).

The backend holds the connection open until the video is rendered and
answers with the raw file. There is no job handle, no polling and no retry
loop; the HTTP read timeout (``SegmindSettings.timeout_s``) is the only
bound on how long a call can take.
"""

from __future__ import annotations

import logging
import random
from typing import Any

import httpx

from dimensify.core.api.http import ApiError, ApiKeyAuth, AsyncApiClient, HttpClientConfig
from dimensify.core.config.models import SegmindSettings
from dimensify.core.generation import errors
from dimensify.core.generation.encoding import encode_data_uri
from dimensify.core.generation.models import GenerationRequest, GenerationResult, MediaKind

logger = logging.getLogger(__name__)

# Exclusive upper bound for generated seeds
SEED_RANGE = 1_000_000

DEFAULT_DURATION = "5"
DEFAULT_ASPECT_RATIO = "16:9"


class BlockingAdapter:
    """Generates one video per call and returns it as a data URI.

    Args:
        settings: Backend settings (URL, endpoint, key, timeout)
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
        rng: Random source for generated seeds
    """

    media_kind = MediaKind.VIDEO

    def __init__(
        self,
        settings: SegmindSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._rng = rng or random.Random()

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        """Fill backend defaults for every parameter the caller left out."""
        payload = request.to_params()
        if request.wants_random_seed:
            payload["seed"] = self._rng.randrange(SEED_RANGE)
        payload.setdefault("duration", DEFAULT_DURATION)
        payload.setdefault("aspect_ratio", DEFAULT_ASPECT_RATIO)
        return payload

    def _media_type(self, resp: httpx.Response) -> str:
        ctype = resp.headers.get("content-type", "").split(";")[0].strip().lower()
        if ctype.startswith("video/"):
            return ctype
        return self.settings.default_media_type

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run one blocking generation call.

        Raises:
            ConfigurationError: If no API key is configured (no request is sent)
            BackendError: The backend answered 2xx with an empty body
            GenerationError: Any other classified transport failure
        """
        api_key = errors.require_credential(self.settings.api_key, "Segmind API key")
        payload = self.build_payload(request)
        config = HttpClientConfig(
            base_url=self.settings.base_url,
            timeout=httpx.Timeout(self.settings.timeout_s, connect=10.0),
            headers={"Content-Type": "application/json"},
        )
        auth = ApiKeyAuth(header_name="x-api-key", api_key=api_key)

        logger.info("Requesting video (seed=%s)", payload.get("seed"))
        async with AsyncApiClient(config, auth=auth, transport=self._transport) as client:
            try:
                resp = await client.post(self.settings.endpoint, json_body=payload)
            except ApiError as e:
                raise errors.normalize_error(e) from e

        if not resp.content:
            raise errors.BackendError("Backend returned an empty video. Please try again.")

        media_type = self._media_type(resp)
        logger.info("Received %d bytes of %s", len(resp.content), media_type)
        return GenerationResult(
            media_kind=self.media_kind,
            assets=(encode_data_uri(resp.content, media_type),),
        )

    async def run(self, request: GenerationRequest) -> GenerationResult:
        return await self.generate(request)
