"""
Input Normalization and Response Validation for generate_audio.

This module holds the two pure validation steps of a tool invocation:

    normalize_params(): loose MCP arguments -> strict GenerationParams
    validate_generation_response(): decoded AIML JSON -> trusted dict

plus the submission-time helpers wrap_prompt() and
build_submission_payload().

Normalization Rules:
    - prompt: Required, non-empty after str() coercion
    - api_key: From arguments, else the configured fallback key
    - model: Defaults to "minimax-music"
    - reference_audio_url: Defaults to a fixed sample only for minimax-music
    - generation_id: Optional; its presence selects the poll path

    Any scalar is coerced with str(), so a numeric prompt such as 42
    becomes "42" rather than being rejected. Empty strings and None are
    treated as absent.

Prompt Wrapping:
    minimax-music expects lyrics delimited by ##...##. The wrapping is
    applied when the submission payload is built, never for polls, and is
    idempotent: a prompt that already starts with "##" is left as is.

Usage:
    from minimax_music_mcp.services.validators import (
        normalize_params,
        build_submission_payload,
        validate_generation_response,
    )

    params = normalize_params(arguments, fallback_api_key=config.aiml.api_key)
    payload = build_submission_payload(params)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from minimax_music_mcp.core.config import Defaults
from minimax_music_mcp.core.errors import InvalidRemoteResponse, MissingCredential, MissingParameter
from minimax_music_mcp.core.logging import debug, get_logger, warn

_LOG = get_logger("minimax-mcp.validators")

MINIMAX_MUSIC_MODEL = "minimax-music"
PROMPT_DELIMITER = "##"

REQUIRED_RESPONSE_FIELDS = ("status", "id")


@dataclass
class GenerationParams:
    """
    Strict parameters for one generate_audio invocation.

    Attributes:
        prompt: Text prompt (lyrics for minimax-music).
        api_key: AIML API key, with or without a "Bearer " prefix.
        model: Generation model id.
        reference_audio_url: Reference track; only sent for minimax-music.
        generation_id: Id of an earlier submission to poll.
    """
    prompt: str
    api_key: str
    model: str = MINIMAX_MUSIC_MODEL
    reference_audio_url: Optional[str] = None
    generation_id: Optional[str] = None

    @property
    def is_poll(self) -> bool:
        """True when this invocation checks status instead of submitting."""
        return bool(self.generation_id)


def _optional_str(arguments: Mapping[str, Any], key: str) -> Optional[str]:
    value = arguments.get(key)
    if value is None or value == "":
        return None
    return str(value)


def normalize_params(
    arguments: Optional[Mapping[str, Any]],
    fallback_api_key: Optional[str] = None,
    default_model: str = Defaults.GENERATION_DEFAULT_MODEL,
    default_reference_audio_url: str = Defaults.GENERATION_DEFAULT_REFERENCE_AUDIO_URL,
) -> GenerationParams:
    """
    Validate and coerce raw tool arguments.

    Args:
        arguments: Arguments dict from the MCP tools/call request.
        fallback_api_key: Configured key used when arguments carry none.
        default_model: Model used when arguments carry none.
        default_reference_audio_url: Reference audio used for minimax-music.

    Returns:
        GenerationParams ready for dispatch.

    Raises:
        MissingParameter: If prompt is absent or empty.
        MissingCredential: If neither arguments nor config provide a key.
    """
    if not isinstance(arguments, Mapping):
        raise MissingParameter("prompt")

    prompt = _optional_str(arguments, "prompt")
    if prompt is None:
        raise MissingParameter("prompt")

    api_key = _optional_str(arguments, "api_key") or fallback_api_key
    if not api_key:
        raise MissingCredential()

    model = _optional_str(arguments, "model") or default_model
    reference_audio_url = _optional_str(arguments, "reference_audio_url")
    if reference_audio_url is None and model == MINIMAX_MUSIC_MODEL:
        reference_audio_url = default_reference_audio_url

    params = GenerationParams(
        prompt=prompt,
        api_key=api_key,
        model=model,
        reference_audio_url=reference_audio_url,
        generation_id=_optional_str(arguments, "generation_id"),
    )
    debug(
        _LOG,
        "params_normalized",
        model=params.model,
        poll=params.is_poll,
        key_source="arguments" if arguments.get("api_key") else "config",
    )
    return params


def wrap_prompt(prompt: str, model: str) -> str:
    """
    Wrap a minimax-music prompt in ## delimiters.

    Other models and prompts that already start with "##" are returned
    unchanged.
    """
    if model != MINIMAX_MUSIC_MODEL or prompt.startswith(PROMPT_DELIMITER):
        return prompt
    return f"{PROMPT_DELIMITER}{prompt}{PROMPT_DELIMITER}"


def build_submission_payload(params: GenerationParams) -> Dict[str, str]:
    """
    Build the JSON body for a new generation.

    reference_audio_url is only included for minimax-music; for other
    models it is dropped even when the caller supplied one.
    """
    payload = {
        "model": params.model,
        "prompt": wrap_prompt(params.prompt, params.model),
    }
    if params.model == MINIMAX_MUSIC_MODEL:
        payload["reference_audio_url"] = (
            params.reference_audio_url or Defaults.GENERATION_DEFAULT_REFERENCE_AUDIO_URL
        )
    return payload


def validate_generation_response(data: Any) -> Dict[str, Any]:
    """
    Check that a decoded AIML response has the minimum generation shape.

    Only presence of the status and id keys is checked; values are not
    coerced.

    Args:
        data: Decoded JSON body.

    Returns:
        The same dict, unchanged.

    Raises:
        InvalidRemoteResponse: If data is not a dict or lacks a required key.
    """
    if not isinstance(data, dict):
        warn(_LOG, "invalid_remote_response", type=type(data).__name__)
        raise InvalidRemoteResponse()

    missing = [key for key in REQUIRED_RESPONSE_FIELDS if key not in data]
    if missing:
        warn(_LOG, "invalid_remote_response", missing=missing)
        raise InvalidRemoteResponse()

    return data
