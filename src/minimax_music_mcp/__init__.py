"""
minimax-music-mcp: MCP server for AIML API audio generation.

Exposes a single tool, ``generate_audio``, over the Model Context Protocol
(stdio transport). The tool works in two steps:

    1. Submit: called without ``generation_id``, it starts a new generation
       on the AIML API and returns the generation id.
    2. Poll: called again with that ``generation_id``, it returns the current
       status snapshot (including ``audio_file`` once the audio is ready).

Supported Models:
    - minimax-music: Lyrics wrapped in ##...## plus a reference audio URL
    - stable-audio: Plain text prompt

Example Usage:
    >>> from minimax_music_mcp.services import AudioGenerationService
    >>> from minimax_music_mcp.core.config import Settings
    >>>
    >>> service = AudioGenerationService(Settings(raw={}).get_server_config())
    >>> result = await service.handle({"prompt": "la la la", "api_key": "k1"})
    >>> print(result["id"])
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
