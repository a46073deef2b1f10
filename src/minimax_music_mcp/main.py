"""
MCP Server Entry Point.

Starts the generate_audio MCP server on the stdio transport. The process
reads JSON-RPC messages from stdin and writes responses to stdout; logs go
to stderr.

Usage:
    # Installed console script
    minimax-music-mcp

    # Or as a module
    python -m minimax_music_mcp

Example MCP host configuration (claude_desktop_config.json):
    {
      "mcpServers": {
        "minimax-music": {
          "command": "minimax-music-mcp",
          "env": {"AIML_API_KEY": "<your key>"}
        }
      }
    }
"""

from __future__ import annotations

from typing import Optional

import anyio
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from minimax_music_mcp.api.dependencies import get_audio_service, get_server_config
from minimax_music_mcp.api.server import create_server
from minimax_music_mcp.core.logging import configure_logging, get_logger, info, warn

_LOG = get_logger("minimax-mcp.main")


async def serve(server: Optional[Server] = None) -> None:
    """Run the MCP server on stdin/stdout until the client disconnects."""
    if server is None:
        server = create_server(get_audio_service())

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Console script entry point."""
    config = get_server_config()
    configure_logging(level=config.logging.level, force=True)

    service = get_audio_service()
    info(_LOG, "server_starting", name=config.name, version=config.version, endpoint=config.aiml.base_url)
    if not config.aiml.api_key:
        warn(_LOG, "no_fallback_api_key", hint="set AIML_API_KEY or pass api_key per call")

    anyio.run(serve, create_server(service))
    info(_LOG, "server_stopped")


if __name__ == "__main__":
    main()
