"""Tests for generation data models."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from dimensify.core.generation.encoding import decode_data_uri, encode_data_uri
from dimensify.core.generation.errors import ConfigurationError
from dimensify.core.generation.models import (
    GenerationRequest,
    GenerationResult,
    JobSnapshot,
    JobStatus,
    MediaKind,
    PollState,
)


class TestGenerationRequest:
    def test_extra_parameters_are_kept(self) -> None:
        req = GenerationRequest(prompt="fox", guidance_scale=7, style_name="anime")
        assert req.to_params() == {"prompt": "fox", "guidance_scale": 7, "style_name": "anime"}

    def test_none_values_are_dropped(self) -> None:
        req = GenerationRequest.from_params({"prompt": "fox", "negative_prompt": None})
        assert "negative_prompt" not in req.to_params()

    def test_is_frozen(self) -> None:
        req = GenerationRequest(prompt="fox")
        with pytest.raises(ValidationError):
            req.prompt = "cat"

    def test_from_params_returns_existing_request(self) -> None:
        req = GenerationRequest(prompt="fox")
        assert GenerationRequest.from_params(req) is req

    @pytest.mark.parametrize(("seed", "expected"), [(None, True), ("random", True), (42, False)])
    def test_wants_random_seed(self, seed, expected: bool) -> None:
        assert GenerationRequest(prompt="x", seed=seed).wants_random_seed is expected

    def test_rejects_other_seed_strings(self) -> None:
        with pytest.raises(ValidationError):
            GenerationRequest(prompt="x", seed="lucky")

    def test_from_params_classifies_bad_types(self) -> None:
        with pytest.raises(ConfigurationError, match="seed") as exc_info:
            GenerationRequest.from_params({"prompt": "x", "seed": "lucky"})

        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestJobStatus:
    @pytest.mark.parametrize(
        ("raw", "status"),
        [
            ("starting", JobStatus.PENDING),
            ("processing", JobStatus.RUNNING),
            ("succeeded", JobStatus.SUCCEEDED),
            ("failed", JobStatus.FAILED),
            ("canceled", JobStatus.FAILED),
            ("RUNNING", JobStatus.RUNNING),
        ],
    )
    def test_from_backend(self, raw: str, status: JobStatus) -> None:
        assert JobStatus.from_backend(raw) is status

    def test_unknown_status(self) -> None:
        with pytest.raises(ValueError, match="Unknown job status"):
            JobStatus.from_backend("exploded")

    def test_terminal_states(self) -> None:
        assert {s for s in JobStatus if s.is_terminal} == {JobStatus.SUCCEEDED, JobStatus.FAILED}


class TestJobSnapshot:
    def test_parses_backend_body(self) -> None:
        snap = JobSnapshot.model_validate(
            {"id": "p1", "status": "processing", "output": None, "logs": "..."}
        )
        assert snap.status is JobStatus.RUNNING
        assert snap.error is None

    def test_non_string_error_is_stringified(self) -> None:
        snap = JobSnapshot.model_validate({"status": "failed", "error": {"code": 1}})
        assert snap.error == "{'code': 1}"


class TestGenerationResult:
    def test_requires_at_least_one_asset(self) -> None:
        with pytest.raises(ValidationError):
            GenerationResult(media_kind=MediaKind.IMAGE, assets=())

    def test_first(self) -> None:
        result = GenerationResult(media_kind=MediaKind.IMAGE, assets=("a", "b"))
        assert result.first == "a"


class TestPollState:
    def test_happy_path(self) -> None:
        state = PollState.PENDING.transition(PollState.POLLING)
        state = state.transition(PollState.POLLING)
        assert state.transition(PollState.SUCCEEDED) is PollState.SUCCEEDED

    @pytest.mark.parametrize(
        "terminal", [PollState.SUCCEEDED, PollState.FAILED, PollState.TIMED_OUT]
    )
    def test_terminal_states_are_absorbing(self, terminal: PollState) -> None:
        assert terminal.is_terminal
        with pytest.raises(RuntimeError, match="Illegal poll state transition"):
            terminal.transition(PollState.POLLING)

    def test_cannot_finish_without_polling(self) -> None:
        with pytest.raises(RuntimeError):
            PollState.PENDING.transition(PollState.SUCCEEDED)


class TestDataUri:
    def test_round_trip(self) -> None:
        payload = bytes(range(256)) * 4
        uri = encode_data_uri(payload, "video/mp4")
        assert uri.startswith("data:video/mp4;base64,")
        assert decode_data_uri(uri) == ("video/mp4", payload)

    def test_empty_payload(self) -> None:
        assert decode_data_uri(encode_data_uri(b"", "image/png")) == ("image/png", b"")

    @pytest.mark.parametrize(
        "uri", ["https://example.test/a.png", "data:video/mp4,abc", "data:video/mp4;base64,@@@"]
    )
    def test_decode_rejects_malformed(self, uri: str) -> None:
        with pytest.raises(ValueError):
            decode_data_uri(uri)
