"""Media generation core: backends, error taxonomy and orchestrator."""

from dimensify.core.generation.blocking import BlockingAdapter
from dimensify.core.generation.encoding import decode_data_uri, encode_data_uri
from dimensify.core.generation.errors import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    ConfigurationError,
    ConnectivityError,
    ErrorKind,
    GenerationError,
    RateLimitError,
    TimeoutError,
    UnknownError,
    normalize_error,
)
from dimensify.core.generation.models import (
    GenerationRequest,
    GenerationResult,
    JobHandle,
    JobSnapshot,
    JobStatus,
    MediaKind,
    PollState,
)
from dimensify.core.generation.orchestrator import GenerationOrchestrator, build_orchestrator
from dimensify.core.generation.polling import PollingAdapter
from dimensify.core.generation.protocols import GenerationBackend

__all__ = [
    # Orchestration
    "GenerationOrchestrator",
    "build_orchestrator",
    "GenerationBackend",
    "PollingAdapter",
    "BlockingAdapter",
    # Models
    "GenerationRequest",
    "GenerationResult",
    "JobHandle",
    "JobSnapshot",
    "JobStatus",
    "MediaKind",
    "PollState",
    # Errors
    "ErrorKind",
    "GenerationError",
    "ConfigurationError",
    "AuthenticationError",
    "AuthorizationError",
    "RateLimitError",
    "BackendError",
    "ConnectivityError",
    "TimeoutError",
    "UnknownError",
    "normalize_error",
    # Encoding
    "encode_data_uri",
    "decode_data_uri",
]
