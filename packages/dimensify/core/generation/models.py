"""Data models for generation requests, job tracking and results."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dimensify.core.generation.errors import ConfigurationError

RANDOM_SEED = "random"


class MediaKind(str, Enum):
    """Kind of asset a request produces."""

    IMAGE = "image"
    VIDEO = "video"


class GenerationRequest(BaseModel):
    """Parameter set for one generation call.

    Known fields are typed; any other tunable (guidance_scale, sharpness,
    aspect_ratio, style_name, ...) is accepted as an extra field and
    forwarded to the backend untouched. Instances are frozen.

    Example:
        >>> req = GenerationRequest(prompt="a lighthouse", guidance_scale=7)
        >>> req.to_params()
        {'prompt': 'a lighthouse', 'guidance_scale': 7}
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    prompt: str = ""
    negative_prompt: str | None = None
    seed: int | Literal["random"] | None = None

    @classmethod
    def from_params(cls, params: GenerationRequest | Mapping[str, Any]) -> GenerationRequest:
        """Build a request from caller parameters.

        Raises:
            ConfigurationError: If a known parameter has the wrong type
                (e.g. a non-text prompt or a seed that is neither an integer
                nor "random"); nothing is sent to a backend
        """
        if isinstance(params, GenerationRequest):
            return params
        try:
            return cls.model_validate(dict(params))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid generation parameters: {e}") from e

    @property
    def wants_random_seed(self) -> bool:
        """True when no concrete seed was supplied."""
        return self.seed is None or self.seed == RANDOM_SEED

    def to_params(self) -> dict[str, Any]:
        """Return the non-null parameters as a plain dict (extras included)."""
        return self.model_dump(exclude_none=True)


class JobStatus(str, Enum):
    """Lifecycle status of an asynchronous job.

    ``pending`` and ``running`` are transient; ``succeeded`` and ``failed``
    are terminal.
    """

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)

    @classmethod
    def from_backend(cls, value: str) -> JobStatus:
        """Map a backend status string onto the four-state vocabulary.

        Raises:
            ValueError: For a status string the backend is not known to send
        """
        normalized = value.strip().lower()
        try:
            return _BACKEND_STATUSES[normalized]
        except KeyError:
            raise ValueError(f"Unknown job status: {value!r}") from None


_BACKEND_STATUSES: dict[str, JobStatus] = {
    "pending": JobStatus.PENDING,
    "starting": JobStatus.PENDING,
    "queued": JobStatus.PENDING,
    "running": JobStatus.RUNNING,
    "processing": JobStatus.RUNNING,
    "succeeded": JobStatus.SUCCEEDED,
    "failed": JobStatus.FAILED,
    "canceled": JobStatus.FAILED,
}


class JobHandle(BaseModel):
    """Opaque reference to one submitted job."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)


class JobSnapshot(BaseModel):
    """One status reading of a job, as returned by a poll."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    status: JobStatus
    output: Any = None
    error: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _map_backend_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return JobStatus.from_backend(v)
        return v

    @field_validator("error", mode="before")
    @classmethod
    def _stringify_error(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)


class GenerationResult(BaseModel):
    """Successful outcome of one generation call.

    Attributes:
        media_kind: What kind of asset was produced
        assets: Ordered asset references (URLs or data URIs), never empty
    """

    model_config = ConfigDict(frozen=True)

    media_kind: MediaKind
    assets: tuple[str, ...] = Field(min_length=1)

    @property
    def first(self) -> str:
        return self.assets[0]


class PollState(str, Enum):
    """States of one polling session."""

    PENDING = "pending"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (PollState.SUCCEEDED, PollState.FAILED, PollState.TIMED_OUT)

    def transition(self, target: PollState) -> PollState:
        """Return ``target`` if moving there from this state is legal.

        Raises:
            RuntimeError: On an illegal transition (e.g. leaving a terminal state)
        """
        if target not in _POLL_TRANSITIONS[self]:
            raise RuntimeError(f"Illegal poll state transition: {self.value} -> {target.value}")
        return target


_POLL_TRANSITIONS: dict[PollState, frozenset[PollState]] = {
    PollState.PENDING: frozenset({PollState.POLLING}),
    PollState.POLLING: frozenset(
        {PollState.POLLING, PollState.SUCCEEDED, PollState.FAILED, PollState.TIMED_OUT}
    ),
    PollState.SUCCEEDED: frozenset(),
    PollState.FAILED: frozenset(),
    PollState.TIMED_OUT: frozenset(),
}
