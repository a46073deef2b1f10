"""
Tests for AudioGenerationService - generate_audio dispatch.

Tests cover:
- Submit path: payload shape, ack result, guidance strings
- Poll path: GET only, response passed through verbatim
- Validation failures stop before any network call
- Remote failures and malformed responses propagate as GenerationError
- get_service()/reset_service() singleton
"""
import asyncio
import json

import httpx
import pytest

from minimax_music_mcp.api.schemas import SUBMIT_MESSAGE, SUBMIT_NEXT_STEP
from minimax_music_mcp.core.config import AimlConfig, Defaults, ServerConfig
from minimax_music_mcp.core.errors import (
    InvalidRemoteResponse,
    MissingCredential,
    MissingParameter,
    RemoteRequestFailed,
)
from minimax_music_mcp.remote.client import AimlAudioClient
from minimax_music_mcp.services.audio_service import AudioGenerationService, get_service, reset_service


class FakeAiml:
    """Scripted stand-in for the AIML endpoint."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else {"status": "queued", "id": "g1"}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def fake_aiml():
    return FakeAiml()


def _service(fake, api_key=None):
    config = ServerConfig(aiml=AimlConfig(api_key=api_key))
    client = AimlAudioClient.from_config(config.aiml, transport=httpx.MockTransport(fake))
    return AudioGenerationService(config, client=client)


class TestSubmitPath:
    """Tests for submissions (no generation_id)."""

    def test_end_to_end_submit(self, fake_aiml):
        """Default minimax-music submission wraps the prompt and adds reference audio."""
        service = _service(fake_aiml)
        result = asyncio.run(service.handle({"prompt": "test song", "api_key": "k1"}))

        assert len(fake_aiml.requests) == 1
        request = fake_aiml.requests[0]
        assert request.method == "POST"
        assert json.loads(request.content) == {
            "model": "minimax-music",
            "prompt": "##test song##",
            "reference_audio_url": Defaults.GENERATION_DEFAULT_REFERENCE_AUDIO_URL,
        }

        assert result["status"] == "queued"
        assert result["id"] == "g1"
        assert "generation_id" in result["message"]
        assert "generation_id" in result["next_step"]

    def test_ack_contains_only_expected_keys(self):
        """Extra response fields are not copied into the submit result."""
        fake = FakeAiml(body={"status": "queued", "id": "g1", "meta": {"x": 1}})
        result = asyncio.run(_service(fake).handle({"prompt": "p", "api_key": "k1"}))
        assert result == {
            "status": "queued",
            "id": "g1",
            "message": SUBMIT_MESSAGE,
            "next_step": SUBMIT_NEXT_STEP,
        }

    def test_stable_audio_submission(self, fake_aiml):
        service = _service(fake_aiml)
        asyncio.run(service.handle({
            "prompt": "rain on a tin roof",
            "api_key": "k1",
            "model": "stable-audio",
            "reference_audio_url": "https://example.com/ignored.mp3",
        }))
        assert json.loads(fake_aiml.requests[0].content) == {
            "model": "stable-audio",
            "prompt": "rain on a tin roof",
        }

    def test_fallback_key_sent(self, fake_aiml):
        """The configured key is used when the invocation carries none."""
        service = _service(fake_aiml, api_key="env-key")
        asyncio.run(service.handle({"prompt": "p"}))
        assert fake_aiml.requests[0].headers["Authorization"] == "Bearer env-key"

    def test_remote_500_propagates(self):
        fake = FakeAiml(status_code=500, body={})
        with pytest.raises(RemoteRequestFailed) as exc_info:
            asyncio.run(_service(fake).handle({"prompt": "p", "api_key": "k1"}))
        assert exc_info.value.http_status == 500

    def test_malformed_submit_response(self):
        fake = FakeAiml(body={"foo": 1})
        with pytest.raises(InvalidRemoteResponse):
            asyncio.run(_service(fake).handle({"prompt": "p", "api_key": "k1"}))


class TestPollPath:
    """Tests for status checks (generation_id present)."""

    def test_poll_uses_get_with_query(self):
        body = {
            "status": "completed",
            "id": "abc123",
            "audio_file": {
                "url": "https://cdn.aimlapi.com/abc123.mp3",
                "content_type": "audio/mpeg",
                "file_name": "abc123.mp3",
                "file_size": 1048576,
            },
        }
        fake = FakeAiml(body=body)
        result = asyncio.run(_service(fake).handle({
            "prompt": "test song",
            "api_key": "k1",
            "generation_id": "abc123",
        }))

        assert [r.method for r in fake.requests] == ["GET"]
        assert fake.requests[0].url.params["generation_id"] == "abc123"
        assert result == body

    def test_poll_error_field_passed_through(self):
        body = {"status": "error", "id": "abc123", "error": "reference audio unreachable"}
        fake = FakeAiml(body=body)
        result = asyncio.run(_service(fake).handle({"prompt": "p", "api_key": "k1", "generation_id": "abc123"}))
        assert result["error"] == "reference audio unreachable"

    def test_malformed_poll_response(self):
        fake = FakeAiml(body={"foo": 1})
        with pytest.raises(InvalidRemoteResponse):
            asyncio.run(_service(fake).handle({"prompt": "p", "api_key": "k1", "generation_id": "abc123"}))


class TestValidationBeforeNetwork:
    """Invalid invocations never reach the remote service."""

    def test_missing_prompt_no_request(self, fake_aiml):
        with pytest.raises(MissingParameter):
            asyncio.run(_service(fake_aiml).handle({"api_key": "k1", "generation_id": "abc"}))
        assert fake_aiml.requests == []

    def test_missing_key_no_request(self, fake_aiml):
        with pytest.raises(MissingCredential):
            asyncio.run(_service(fake_aiml).handle({"prompt": "p"}))
        assert fake_aiml.requests == []


class TestGlobalService:
    """Tests for the module-level singleton."""

    def test_get_service_returns_same_instance(self):
        reset_service()
        try:
            first = get_service(ServerConfig())
            second = get_service(ServerConfig(aiml=AimlConfig(api_key="other")))
            assert first is second
        finally:
            reset_service()

    def test_reset_service(self):
        reset_service()
        try:
            first = get_service(ServerConfig())
            reset_service()
            assert get_service(ServerConfig()) is not first
        finally:
            reset_service()
