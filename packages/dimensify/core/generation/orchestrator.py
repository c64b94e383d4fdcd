"""Public entry point for image and video generation.

The orchestrator picks the backend for a media kind, runs it and hands the
result back. It never catches: every ``GenerationError`` raised by a
backend reaches the caller unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from dimensify.core.config.loader import load_app_config
from dimensify.core.config.models import AppConfig
from dimensify.core.generation.blocking import BlockingAdapter
from dimensify.core.generation.models import GenerationRequest, GenerationResult
from dimensify.core.generation.polling import PollingAdapter
from dimensify.core.generation.protocols import GenerationBackend

logger = logging.getLogger(__name__)

Params = GenerationRequest | Mapping[str, Any]

# Image-to-image runs as an upscale/variation job on the image backend
IMAGE_TO_IMAGE_DEFAULTS: dict[str, Any] = {"uov_method": "Vary (Subtle)"}


class GenerationOrchestrator:
    """Routes requests to the image or video backend.

    Args:
        image_backend: Backend producing images (polling adapter by default)
        video_backend: Backend producing videos (blocking adapter by default)

    Example:
        >>> orchestrator = GenerationOrchestrator.from_config(load_app_config())
        >>> urls = await orchestrator.generate_image({"prompt": "a red fox"})
        >>> video = await orchestrator.generate_video({"prompt": "waves at dusk"})
    """

    def __init__(self, image_backend: GenerationBackend, video_backend: GenerationBackend) -> None:
        self.image_backend = image_backend
        self.video_backend = video_backend

    @classmethod
    def from_config(cls, config: AppConfig) -> GenerationOrchestrator:
        return cls(
            image_backend=PollingAdapter(config.replicate),
            video_backend=BlockingAdapter(config.segmind),
        )

    async def _run(
        self, backend: GenerationBackend, request: GenerationRequest, label: str
    ) -> GenerationResult:
        logger.info("Starting %s generation", label)
        result = await backend.run(request)
        logger.info("Finished %s generation: %d asset(s)", label, len(result.assets))
        return result

    async def generate_image(self, params: Params) -> list[str]:
        """Generate images from a text prompt.

        Returns:
            Asset references in backend order, at least one
        """
        request = GenerationRequest.from_params(params)
        result = await self._run(self.image_backend, request, "image")
        return list(result.assets)

    async def generate_image_to_image(self, params: Params) -> list[str]:
        """Generate variations of a source image.

        The source goes in the ``image`` parameter (URL or data URI) and is
        sent to the image backend as ``uov_input_image``.
        """
        merged = {**IMAGE_TO_IMAGE_DEFAULTS, **GenerationRequest.from_params(params).to_params()}
        if "image" in merged:
            merged.setdefault("uov_input_image", merged.pop("image"))
        request = GenerationRequest.from_params(merged)
        result = await self._run(self.image_backend, request, "image-to-image")
        return list(result.assets)

    async def generate_video(self, params: Params) -> str:
        """Generate one video from a text prompt.

        Returns:
            A ``data:video/...;base64,`` reference holding the video bytes
        """
        request = GenerationRequest.from_params(params)
        result = await self._run(self.video_backend, request, "video")
        return result.first


def build_orchestrator(config: AppConfig | None = None) -> GenerationOrchestrator:
    """Build an orchestrator from ``config`` or the default app config."""
    return GenerationOrchestrator.from_config(config or load_app_config())
