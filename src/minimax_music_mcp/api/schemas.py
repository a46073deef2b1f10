"""
Tool Schema and Result Models.

This module defines what the MCP client sees:
    - GENERATE_AUDIO_TOOL: name, description and JSON input schema returned
      by tools/list
    - GenerationAck: Pydantic model for the submit-path result

The poll path returns the AIML response dict as-is, so it has no model
here. Its documented shape is:

    {
        "status": "completed",
        "id": "a1b2c3",
        "audio_file": {
            "url": "https://cdn.aimlapi.com/.../audio.mp3",
            "content_type": "audio/mpeg",
            "file_name": "audio.mp3",
            "file_size": 1234567
        },
        "error": null
    }
"""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field

from minimax_music_mcp.core.config import Defaults

TOOL_NAME = "generate_audio"

TOOL_DESCRIPTION = (
    "Generate audio using AIML API. The process has two steps: "
    "1) Submit generation request 2) Get the generated audio. "
    "If generation_id is not provided, it will start a new generation."
)

GENERATE_AUDIO_INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "model": {
            "type": "string",
            "description": "The model to use for generation (stable-audio or minimax-music)",
            "default": Defaults.GENERATION_DEFAULT_MODEL,
        },
        "reference_audio_url": {
            "type": "string",
            "description": "URL of the reference audio (required for minimax-music)",
            "default": Defaults.GENERATION_DEFAULT_REFERENCE_AUDIO_URL,
        },
        "prompt": {
            "type": "string",
            "description": "The text prompt for audio generation. For minimax-music, wrap lyrics in ##...##",
        },
        "api_key": {
            "type": "string",
            "description": "Your AIML API Key (optional if set in environment variables)",
        },
        "generation_id": {
            "type": "string",
            "description": "Optional: The generation ID from a previous request to check status",
        },
    },
    "required": ["prompt"],
}

SUBMIT_MESSAGE = "Generation started! Use this generation_id to check status in subsequent calls."
SUBMIT_NEXT_STEP = "Call this tool again with the same API key and this generation_id to check status."


class GenerationAck(BaseModel):
    """
    Result returned after a successful submission.

    status and id are copied from the AIML response without coercion.
    message and next_step tell the caller to poll with generation_id.

    Example Response:
        {
            "status": "queued",
            "id": "g1",
            "message": "Generation started! Use this generation_id ...",
            "next_step": "Call this tool again with the same API key ..."
        }
    """
    status: Any = Field(..., description="Generation status reported by AIML")
    id: Any = Field(..., description="Generation id to pass back as generation_id")
    message: str = Field(default=SUBMIT_MESSAGE)
    next_step: str = Field(default=SUBMIT_NEXT_STEP)
