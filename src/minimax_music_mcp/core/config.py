"""
Configuration Management for minimax-music-mcp.

This module provides centralized configuration handling with:
    - Default values (Defaults class)
    - Dataclass-based configuration objects
    - YAML file loading with environment variable overrides
    - Validation with meaningful error messages

Configuration Hierarchy (highest priority first):
    1. Environment variables (AIML_API_KEY, AIML_API_BASE_URL, etc.)
    2. YAML config file (config/settings.yaml)
    3. Defaults class values

Example settings.yaml:
    aiml:
      base_url: https://api.aimlapi.com/v2/generate/audio
      timeout_s: 30

    generation:
      default_model: minimax-music

    logging:
      level: 2  # NORMAL
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import os
import yaml


class ConfigValidationError(Exception):
    """
    Raised when configuration validation fails.

    This exception is thrown when a configuration value is outside
    acceptable bounds or of the wrong type.
    """
    pass


class Defaults:
    """
    Centralized default configuration values.

    Sections:
        - AIML: Remote audio generation endpoint
        - Generation: Tool argument defaults
        - Logging: Log level
        - Server: MCP server identity
    """

    # ─────────────────────────────────────────────────────────────────────────
    # AIML API
    # ─────────────────────────────────────────────────────────────────────────
    AIML_BASE_URL = "https://api.aimlapi.com/v2/generate/audio"
    AIML_TIMEOUT_S: Optional[float] = None  # None keeps the httpx default

    # ─────────────────────────────────────────────────────────────────────────
    # Generation Defaults
    # ─────────────────────────────────────────────────────────────────────────
    GENERATION_DEFAULT_MODEL = "minimax-music"
    GENERATION_DEFAULT_REFERENCE_AUDIO_URL = (
        "https://tand-dev.github.io/audio-hosting/spinning-head-271171.mp3"
    )

    # ─────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────
    LOGGING_LEVEL = 2                   # 1=MINIMAL, 2=NORMAL, 3=VERBOSE, 4=DEBUG

    # ─────────────────────────────────────────────────────────────────────────
    # MCP Server
    # ─────────────────────────────────────────────────────────────────────────
    SERVER_NAME = "minimax-music-server"
    SERVER_VERSION = "1.0.0"


@dataclass
class AimlConfig:
    """
    AIML API client configuration.

    api_key is the process-wide fallback credential, used only when a
    tool invocation does not carry its own api_key.
    """
    base_url: str = Defaults.AIML_BASE_URL
    timeout_s: Optional[float] = Defaults.AIML_TIMEOUT_S
    api_key: Optional[str] = None


@dataclass
class GenerationConfig:
    """Defaults applied to generate_audio arguments."""
    default_model: str = Defaults.GENERATION_DEFAULT_MODEL
    default_reference_audio_url: str = Defaults.GENERATION_DEFAULT_REFERENCE_AUDIO_URL


@dataclass
class LoggingConfig:
    """
    Logging configuration.

    Log levels:
        1 = MINIMAL: Startup, shutdown, critical errors only
        2 = NORMAL: Invocation lifecycle, remote status (default)
        3 = VERBOSE: Request payload shape, timings
        4 = DEBUG: Internal state, full tracing
    """
    level: int = Defaults.LOGGING_LEVEL


@dataclass
class ServerConfig:
    """
    Validated configuration for the MCP server.

    Usage:
        settings = load_settings("config/settings.yaml")
        config = ServerConfig.from_settings(settings)
        print(config.aiml.base_url)  # Typed access
    """
    aiml: AimlConfig = field(default_factory=AimlConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    name: str = Defaults.SERVER_NAME
    version: str = Defaults.SERVER_VERSION

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ServerConfig":
        """
        Create ServerConfig from Settings with validation.

        Args:
            settings: Raw Settings object loaded from YAML.

        Returns:
            Validated ServerConfig instance.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        raw = settings.raw

        # ─────────────────────────────────────────────────────────────────────
        # AIML configuration
        # ─────────────────────────────────────────────────────────────────────
        aiml_raw = raw.get("aiml", {}) or {}
        timeout_raw = aiml_raw.get("timeout_s", Defaults.AIML_TIMEOUT_S)
        try:
            timeout_s = float(timeout_raw) if timeout_raw is not None else None
        except (TypeError, ValueError):
            raise ConfigValidationError(f"aiml.timeout_s must be a number, got {timeout_raw!r}")
        api_key = aiml_raw.get("api_key")
        aiml = AimlConfig(
            base_url=str(aiml_raw.get("base_url", Defaults.AIML_BASE_URL)),
            timeout_s=timeout_s,
            api_key=str(api_key) if api_key else None,
        )
        cls._validate_url("aiml.base_url", aiml.base_url)
        if aiml.timeout_s is not None:
            cls._validate_positive("aiml.timeout_s", aiml.timeout_s)

        # ─────────────────────────────────────────────────────────────────────
        # Generation defaults
        # ─────────────────────────────────────────────────────────────────────
        generation_raw = raw.get("generation", {}) or {}
        generation = GenerationConfig(
            default_model=str(generation_raw.get("default_model", Defaults.GENERATION_DEFAULT_MODEL)),
            default_reference_audio_url=str(generation_raw.get(
                "default_reference_audio_url", Defaults.GENERATION_DEFAULT_REFERENCE_AUDIO_URL
            )),
        )
        if not generation.default_model:
            raise ConfigValidationError("generation.default_model must not be empty")
        cls._validate_url("generation.default_reference_audio_url", generation.default_reference_audio_url)

        # ─────────────────────────────────────────────────────────────────────
        # Logging configuration
        # ─────────────────────────────────────────────────────────────────────
        logging_raw = raw.get("logging", {}) or {}
        log_level_raw = logging_raw.get("level", Defaults.LOGGING_LEVEL)

        # Handle string log levels (e.g., "INFO", "DEBUG"); numeric strings come from env
        if isinstance(log_level_raw, str) and not log_level_raw.strip().isdigit():
            level_map = {
                "MINIMAL": 1,
                "NORMAL": 2, "INFO": 2,
                "VERBOSE": 3,
                "DEBUG": 4, "TRACE": 4,
            }
            log_level = level_map.get(log_level_raw.upper(), Defaults.LOGGING_LEVEL)
        else:
            log_level = int(log_level_raw)

        logging_cfg = LoggingConfig(level=log_level)
        cls._validate_range("logging.level", logging_cfg.level, 1, 4)

        server_raw = raw.get("server", {}) or {}
        return cls(
            aiml=aiml,
            generation=generation,
            logging=logging_cfg,
            name=str(server_raw.get("name", Defaults.SERVER_NAME)),
            version=str(server_raw.get("version", Defaults.SERVER_VERSION)),
        )

    @staticmethod
    def _validate_positive(name: str, value: int | float) -> None:
        """Validate that a value is positive (> 0)."""
        if value <= 0:
            raise ConfigValidationError(f"{name} must be positive, got {value}")

    @staticmethod
    def _validate_range(name: str, value: int | float, min_val: int | float, max_val: int | float) -> None:
        """Validate that a value is within a range [min_val, max_val]."""
        if not (min_val <= value <= max_val):
            raise ConfigValidationError(f"{name} must be between {min_val} and {max_val}, got {value}")

    @staticmethod
    def _validate_url(name: str, value: str) -> None:
        """Validate that a value is an http(s) URL."""
        if not value.startswith(("http://", "https://")):
            raise ConfigValidationError(f"{name} must be an http(s) URL, got {value!r}")


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings container loaded from YAML.

    This is the raw settings object before validation. Use
    get_server_config() to get validated ServerConfig.

    Attributes:
        raw: Dictionary of raw configuration values.
    """
    raw: Dict[str, Any]

    def get_server_config(self) -> ServerConfig:
        """
        Get validated ServerConfig from these settings.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return ServerConfig.from_settings(self)


def apply_env_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to a raw settings dict.

    Environment variable overrides:
        - AIML_API_KEY: Fallback API key (aiml.api_key)
        - AIML_API_BASE_URL: Endpoint override (aiml.base_url)
        - AIML_API_TIMEOUT_S: HTTP timeout in seconds (aiml.timeout_s)
        - MINIMAX_MCP_LOG_LEVEL: Log level 1-4 or name (logging.level)
    """
    overrides = {
        "api_key": os.getenv("AIML_API_KEY"),
        "base_url": os.getenv("AIML_API_BASE_URL"),
        "timeout_s": os.getenv("AIML_API_TIMEOUT_S"),
    }
    for key, value in overrides.items():
        if value:
            # an empty section loads as None
            raw["aiml"] = raw.get("aiml") or {}
            raw["aiml"][key] = value
    log_level = os.getenv("MINIMAX_MCP_LOG_LEVEL")
    if log_level:
        raw["logging"] = raw.get("logging") or {}
        raw["logging"]["level"] = log_level
    return raw


def load_settings(path: str = "config/settings.yaml") -> Settings:
    """
    Load settings from a YAML configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Settings object with loaded configuration.

    Raises:
        FileNotFoundError: If the settings file doesn't exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"settings file not found: {p.resolve()}")

    with p.open("r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    return Settings(raw=apply_env_overrides(raw))


def load_settings_or_defaults(path: str = "config/settings.yaml") -> Settings:
    """
    Load settings from YAML, falling back to defaults when the file is absent.

    Environment overrides apply in both cases, so AIML_API_KEY alone is
    enough to configure the fallback credential.
    """
    try:
        return load_settings(path)
    except FileNotFoundError:
        return Settings(raw=apply_env_overrides({}))
