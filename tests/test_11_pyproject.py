"""Tests for pyproject.toml and package installation."""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


class TestPackageInstallation:
    """Test that the package is properly installed."""

    def test_version_defined(self):
        import minimax_music_mcp
        assert isinstance(minimax_music_mcp.__version__, str)
        assert len(minimax_music_mcp.__version__) > 0

    def test_core_modules_importable(self):
        from minimax_music_mcp.api import dependencies, schemas, server
        from minimax_music_mcp.core import config, errors, logging
        from minimax_music_mcp.remote import client
        from minimax_music_mcp.services import audio_service, validators

        for module in (dependencies, schemas, server, config, errors, logging, client, audio_service, validators):
            assert module is not None


class TestPyprojectToml:
    """Test pyproject.toml configuration."""

    def test_pyproject_exists(self):
        assert PYPROJECT.exists()

    def test_pyproject_declares_stack(self):
        tomllib = pytest.importorskip("tomllib")  # Python 3.11+
        data = tomllib.loads(PYPROJECT.read_text())

        assert data["project"]["name"] == "minimax-music-mcp"
        dep_names = [d.split(">=")[0].split("[")[0] for d in data["project"]["dependencies"]]
        for name in ("mcp", "httpx", "pydantic", "PyYAML"):
            assert name in dep_names

    def test_console_script(self):
        tomllib = pytest.importorskip("tomllib")
        data = tomllib.loads(PYPROJECT.read_text())
        assert data["project"]["scripts"]["minimax-music-mcp"] == "minimax_music_mcp.main:main"


@pytest.mark.slow
class TestModuleEntryPoint:
    """The server starts and exits cleanly when stdin closes."""

    def test_exits_on_closed_stdin(self):
        result = subprocess.run(
            [sys.executable, "-m", "minimax_music_mcp"],
            input="",
            capture_output=True,
            text=True,
            timeout=30,
        )
        assert result.returncode == 0
        assert result.stdout == ""
