"""
Shared Server Resources.

Provides process-wide singletons used by the entry point:

    get_settings()      - Loads and caches settings (YAML + env overrides)
    get_server_config() - Validated ServerConfig built from those settings
    get_audio_service() - Singleton AudioGenerationService

Lifecycle:
    main() → get_audio_service() → get_server_config() → get_settings()
        └── get_settings() reads MINIMAX_MCP_SETTINGS (default
            config/settings.yaml); a missing file means defaults plus
            environment overrides such as AIML_API_KEY.

Settings are read once at startup. To change configuration, restart the
server process (MCP hosts do this when their config changes).
"""
from __future__ import annotations

import os
from functools import lru_cache

from minimax_music_mcp.core.config import ServerConfig, Settings, load_settings_or_defaults
from minimax_music_mcp.services.audio_service import AudioGenerationService, get_service


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache application settings."""
    return load_settings_or_defaults(os.getenv("MINIMAX_MCP_SETTINGS", "config/settings.yaml"))


def get_server_config() -> ServerConfig:
    """
    Get the validated server configuration.

    Raises:
        ConfigValidationError: If settings contain invalid values.
    """
    return get_settings().get_server_config()


def get_audio_service() -> AudioGenerationService:
    """Get the singleton AudioGenerationService instance."""
    return get_service(get_server_config())
