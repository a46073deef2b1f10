"""
minimax-music-mcp Services Layer.

This package holds the business logic between the MCP layer and the
AIML client.

Components:
    - audio_service.py: AudioGenerationService (submit/poll dispatch)
    - validators.py: Argument normalization and response validation
"""
from .audio_service import AudioGenerationService, get_service, reset_service
from .validators import (
    GenerationParams,
    build_submission_payload,
    normalize_params,
    validate_generation_response,
    wrap_prompt,
)

__all__ = [
    "AudioGenerationService",
    "GenerationParams",
    "build_submission_payload",
    "get_service",
    "normalize_params",
    "reset_service",
    "validate_generation_response",
    "wrap_prompt",
]
