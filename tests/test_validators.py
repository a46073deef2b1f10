"""
Tests for argument normalization and response validation.

Tests cover:
- normalize_params() - prompt required, api_key fallback, defaults, coercion
- wrap_prompt() - minimax-music wrapping and idempotence
- build_submission_payload() - reference_audio_url inclusion rules
- validate_generation_response() - status/id presence
"""
import pytest

from minimax_music_mcp.core.config import Defaults
from minimax_music_mcp.core.errors import (
    ErrorCode,
    InvalidRemoteResponse,
    MissingCredential,
    MissingParameter,
)
from minimax_music_mcp.services.validators import (
    GenerationParams,
    build_submission_payload,
    normalize_params,
    validate_generation_response,
    wrap_prompt,
)

DEFAULT_REF = Defaults.GENERATION_DEFAULT_REFERENCE_AUDIO_URL


class TestNormalizeParamsRequired:
    """Tests for required prompt and api_key handling."""

    def test_missing_prompt_raises(self):
        """normalize_params should reject arguments without prompt."""
        with pytest.raises(MissingParameter) as exc_info:
            normalize_params({"api_key": "k1"})
        assert exc_info.value.code == ErrorCode.MISSING_PARAMETER
        assert exc_info.value.message == "Missing required parameter: prompt"

    def test_empty_prompt_raises(self):
        """normalize_params should treat an empty prompt as missing."""
        with pytest.raises(MissingParameter):
            normalize_params({"prompt": "", "api_key": "k1"})

    def test_none_arguments_raises(self):
        """normalize_params should reject a missing arguments dict."""
        with pytest.raises(MissingParameter):
            normalize_params(None, fallback_api_key="k1")

    def test_prompt_checked_before_credential(self):
        """Missing prompt should be reported even when the key is also missing."""
        with pytest.raises(MissingParameter):
            normalize_params({})

    def test_missing_api_key_without_fallback_raises(self):
        """normalize_params should fail when no key is available anywhere."""
        with pytest.raises(MissingCredential) as exc_info:
            normalize_params({"prompt": "hello"})
        assert exc_info.value.code == ErrorCode.MISSING_CREDENTIAL
        assert "API key not found" in exc_info.value.message

    def test_empty_api_key_uses_fallback(self):
        """An empty api_key argument should fall back to the configured key."""
        params = normalize_params({"prompt": "hello", "api_key": ""}, fallback_api_key="env-key")
        assert params.api_key == "env-key"

    def test_argument_key_wins_over_fallback(self):
        """The api_key argument should take precedence over the fallback."""
        params = normalize_params({"prompt": "hello", "api_key": "arg-key"}, fallback_api_key="env-key")
        assert params.api_key == "arg-key"

    def test_fallback_key_used_when_absent(self):
        """The fallback key should be used when the argument is absent."""
        params = normalize_params({"prompt": "hello"}, fallback_api_key="env-key")
        assert params.api_key == "env-key"


class TestNormalizeParamsDefaults:
    """Tests for model and reference_audio_url defaults."""

    def test_model_defaults_to_minimax_music(self):
        params = normalize_params({"prompt": "hello", "api_key": "k1"})
        assert params.model == "minimax-music"

    def test_reference_audio_defaults_for_minimax_music(self):
        params = normalize_params({"prompt": "hello", "api_key": "k1"})
        assert params.reference_audio_url == DEFAULT_REF

    def test_reference_audio_not_defaulted_for_other_models(self):
        """Other models should not get a default reference audio URL."""
        params = normalize_params({"prompt": "hello", "api_key": "k1", "model": "stable-audio"})
        assert params.model == "stable-audio"
        assert params.reference_audio_url is None

    def test_custom_reference_audio_kept(self):
        params = normalize_params({
            "prompt": "hello",
            "api_key": "k1",
            "reference_audio_url": "https://example.com/ref.mp3",
        })
        assert params.reference_audio_url == "https://example.com/ref.mp3"

    def test_custom_defaults_injected(self):
        """Configured defaults should be used instead of the built-in ones."""
        params = normalize_params(
            {"prompt": "hello", "api_key": "k1"},
            default_model="stable-audio",
        )
        assert params.model == "stable-audio"
        assert params.reference_audio_url is None

    def test_prompt_not_wrapped_during_normalization(self):
        """Wrapping belongs to submission, not normalization."""
        params = normalize_params({"prompt": "hello", "api_key": "k1"})
        assert params.prompt == "hello"


class TestNormalizeParamsCoercion:
    """Tests for permissive str() coercion."""

    def test_numeric_prompt_is_stringified(self):
        params = normalize_params({"prompt": 42, "api_key": "k1"})
        assert params.prompt == "42"

    def test_numeric_generation_id_is_stringified(self):
        params = normalize_params({"prompt": "p", "api_key": "k1", "generation_id": 123})
        assert params.generation_id == "123"

    def test_numeric_api_key_is_stringified(self):
        params = normalize_params({"prompt": "p", "api_key": 987})
        assert params.api_key == "987"


class TestOperationMode:
    """Tests for poll/submit mode selection."""

    def test_generation_id_selects_poll(self):
        params = normalize_params({"prompt": "p", "api_key": "k1", "generation_id": "abc123"})
        assert params.is_poll is True

    def test_missing_generation_id_selects_submit(self):
        params = normalize_params({"prompt": "p", "api_key": "k1"})
        assert params.is_poll is False

    def test_empty_generation_id_selects_submit(self):
        params = normalize_params({"prompt": "p", "api_key": "k1", "generation_id": ""})
        assert params.generation_id is None
        assert params.is_poll is False


class TestWrapPrompt:
    """Tests for wrap_prompt()."""

    def test_wraps_minimax_prompt(self):
        assert wrap_prompt("hello", "minimax-music") == "##hello##"

    def test_wrapping_is_idempotent(self):
        assert wrap_prompt("##hello##", "minimax-music") == "##hello##"
        assert wrap_prompt(wrap_prompt("hello", "minimax-music"), "minimax-music") == "##hello##"

    def test_other_models_unchanged(self):
        assert wrap_prompt("hello", "stable-audio") == "hello"


class TestBuildSubmissionPayload:
    """Tests for build_submission_payload()."""

    def test_minimax_payload(self):
        params = GenerationParams(prompt="test song", api_key="k1")
        payload = build_submission_payload(params)
        assert payload == {
            "model": "minimax-music",
            "prompt": "##test song##",
            "reference_audio_url": DEFAULT_REF,
        }

    def test_other_model_omits_reference_audio(self):
        """reference_audio_url is dropped for non-minimax models even when supplied."""
        params = GenerationParams(
            prompt="ambient pads",
            api_key="k1",
            model="stable-audio",
            reference_audio_url="https://example.com/ref.mp3",
        )
        payload = build_submission_payload(params)
        assert payload == {"model": "stable-audio", "prompt": "ambient pads"}

    def test_api_key_never_in_payload(self):
        params = GenerationParams(prompt="x", api_key="secret")
        assert "secret" not in build_submission_payload(params).values()


class TestValidateGenerationResponse:
    """Tests for validate_generation_response()."""

    def test_valid_response_returned_unchanged(self):
        data = {"status": "queued", "id": "g1", "extra": True}
        assert validate_generation_response(data) is data

    def test_missing_fields_raises(self):
        with pytest.raises(InvalidRemoteResponse) as exc_info:
            validate_generation_response({"foo": 1})
        assert exc_info.value.code == ErrorCode.INVALID_REMOTE_RESPONSE
        assert exc_info.value.message == "Invalid response format from server"

    def test_missing_id_raises(self):
        with pytest.raises(InvalidRemoteResponse):
            validate_generation_response({"status": "queued"})

    def test_non_dict_raises(self):
        for value in (None, [], "queued", 3):
            with pytest.raises(InvalidRemoteResponse):
                validate_generation_response(value)

    def test_values_not_type_checked(self):
        """Only presence matters; null values are accepted."""
        data = {"status": None, "id": 7}
        assert validate_generation_response(data) == data
