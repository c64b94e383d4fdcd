"""Configuration models for Dimensify."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ReplicateSettings(BaseModel):
    """Polling image backend (Replicate predictions API).

    The API token is normally filled from ``REPLICATE_API_TOKEN`` by the
    loader; leaving it unset makes every image call fail with a
    ConfigurationError before any request is sent.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(default="https://api.replicate.com", description="API root URL")
    model_version: str = Field(
        default=(
            "konieshadow/fooocus-api:"
            "fda927242b1db6affa1ece4f54c37f19b964666bf23b0d06ae2439067cd344a4"
        ),
        description="Model version submitted with every prediction",
    )
    api_token: str | None = Field(default=None, repr=False, description="Replicate API token")
    poll_interval_s: float = Field(
        default=1.0, ge=0.0, description="Delay between two status polls"
    )
    max_poll_attempts: int = Field(
        default=60, gt=0, description="Polls performed before giving up with a timeout"
    )
    request_timeout_s: float = Field(
        default=30.0, gt=0.0, description="Timeout for each submit/poll HTTP call"
    )


class SegmindSettings(BaseModel):
    """Blocking video backend (Segmind text-to-video endpoint)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(default="https://api.segmind.com", description="API root URL")
    endpoint: str = Field(default="/v1/veo-2", description="Text-to-video endpoint path")
    api_key: str | None = Field(default=None, repr=False, description="Segmind API key")
    default_media_type: str = Field(
        default="video/mp4", description="Media type used when the response does not name one"
    )
    timeout_s: float = Field(
        default=300.0,
        gt=0.0,
        description="Read timeout of the single blocking call (the only bound on video jobs)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")
    filename: str | None = Field(default=None, description="Log file (stdout when unset)")


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    replicate: ReplicateSettings = ReplicateSettings()
    segmind: SegmindSettings = SegmindSettings()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("config.json")
