"""
AudioGenerationService - generate_audio dispatch.

This module provides the AudioGenerationService class, which runs one
generate_audio invocation end to end. The MCP layer (api/server.py) only
checks the tool name, sets the request id, and translates errors.

Architecture:
    arguments → normalize_params → [poll]   check_status → validate → response dict
                                 → [submit] wrap + payload → submit → validate → GenerationAck

The service is stateless: every invocation is independent and generation
state lives only on the AIML side, referenced by its id.

Example:
    >>> from minimax_music_mcp.core.config import ServerConfig
    >>> from minimax_music_mcp.services import AudioGenerationService
    >>>
    >>> service = AudioGenerationService(ServerConfig())
    >>> ack = await service.handle({"prompt": "test song", "api_key": "k1"})
    >>> follow_up = await service.handle({"prompt": "test song", "api_key": "k1",
    ...                                   "generation_id": ack["id"]})
"""
from __future__ import annotations

import threading
from typing import Any, Dict, Mapping, Optional

from minimax_music_mcp.api.schemas import GenerationAck
from minimax_music_mcp.core.config import ServerConfig
from minimax_music_mcp.core.logging import get_logger, info, success, verbose
from minimax_music_mcp.remote.client import AimlAudioClient
from minimax_music_mcp.services.validators import (
    GenerationParams,
    build_submission_payload,
    normalize_params,
    validate_generation_response,
)

_LOG = get_logger("minimax-mcp.service")


class AudioGenerationService:
    """
    Runs generate_audio invocations against the AIML API.

    Args:
        config: Validated server configuration. Its aiml.api_key is the
            fallback credential handed to the normalizer.
        client: Optional AimlAudioClient; built from config when omitted.
    """

    def __init__(self, config: ServerConfig, client: Optional[AimlAudioClient] = None):
        self._config = config
        self._client = client or AimlAudioClient.from_config(config.aiml)

    @property
    def config(self) -> ServerConfig:
        return self._config

    def normalize(self, arguments: Optional[Mapping[str, Any]]) -> GenerationParams:
        """Normalize raw tool arguments using this server's defaults."""
        return normalize_params(
            arguments,
            fallback_api_key=self._config.aiml.api_key,
            default_model=self._config.generation.default_model,
            default_reference_audio_url=self._config.generation.default_reference_audio_url,
        )

    async def handle(self, arguments: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Run one invocation: normalize, then poll or submit.

        Returns:
            Poll path: the validated AIML response, unchanged.
            Submit path: GenerationAck as a dict.

        Raises:
            GenerationError: Any normalization, remote or validation failure.
        """
        params = self.normalize(arguments)
        if params.is_poll:
            return await self.check_status(params)
        return await self.submit(params)

    async def check_status(self, params: GenerationParams) -> Dict[str, Any]:
        """Poll an existing generation and return its snapshot verbatim."""
        data = await self._client.check_status(params.generation_id, params.api_key)
        response = validate_generation_response(data)
        info(
            _LOG,
            "generation_polled",
            id=response["id"],
            status=response["status"],
            has_audio=bool(response.get("audio_file")),
        )
        return response

    async def submit(self, params: GenerationParams) -> Dict[str, Any]:
        """Start a new generation and return the acknowledgement payload."""
        payload = build_submission_payload(params)
        verbose(_LOG, "payload_built", model=payload["model"], prompt_chars=len(payload["prompt"]))

        data = await self._client.submit(payload, params.api_key)
        response = validate_generation_response(data)
        success(_LOG, "generation_submitted", id=response["id"], status=response["status"], model=params.model)
        return GenerationAck(status=response["status"], id=response["id"]).model_dump()


# =============================================================================
# Global Service Instance
# =============================================================================

_service: Optional[AudioGenerationService] = None
_service_lock = threading.Lock()


def get_service(config: ServerConfig) -> AudioGenerationService:
    """
    Get or create the global AudioGenerationService instance.

    Lazy singleton; the first config passed wins.
    """
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = AudioGenerationService(config)
    return _service


def reset_service() -> None:
    """Reset the global service instance (used by tests)."""
    global _service
    with _service_lock:
        _service = None
