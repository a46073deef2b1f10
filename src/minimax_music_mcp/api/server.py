"""
MCP Server Definition.

This module wires AudioGenerationService into a low-level ``mcp`` Server
with two request handlers:

    tools/list  -> the single generate_audio tool (static schema)
    tools/call  -> dispatch_tool_call()

Error Contract:
    The protocol has no finer error codes for tool failures, so every
    failure leaves this module as McpError(INVALID_REQUEST, <message>):

        GenerationError subclasses  -> message copied from the error
        McpError raised downstream  -> re-raised unchanged
        anything else               -> "Failed to generate audio: <error>"

The tools/call handler is registered directly in request_handlers rather
than through the Server.call_tool() decorator. The decorator turns every
exception into an isError tool result, which would drop the error code;
registered directly, McpError reaches the session and is sent as a
JSON-RPC error. It also skips the SDK's input validation, so loosely
typed arguments reach normalize_params(), which coerces rather than
rejects them.
"""
from __future__ import annotations

import json
import uuid
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError

from minimax_music_mcp.api.schemas import GENERATE_AUDIO_INPUT_SCHEMA, TOOL_DESCRIPTION, TOOL_NAME
from minimax_music_mcp.core.errors import GenerationError, UnknownTool
from minimax_music_mcp.core.logging import error, fail, get_logger, info, set_request_id
from minimax_music_mcp.services.audio_service import AudioGenerationService

_LOG = get_logger("minimax-mcp.server")


def list_tools() -> List[types.Tool]:
    """Return the tools advertised by this server."""
    return [
        types.Tool(
            name=TOOL_NAME,
            description=TOOL_DESCRIPTION,
            inputSchema=GENERATE_AUDIO_INPUT_SCHEMA,
        )
    ]


def invalid_request(message: str) -> McpError:
    """Build the protocol error used for every failed invocation."""
    return McpError(types.ErrorData(code=types.INVALID_REQUEST, message=message))


async def dispatch_tool_call(
    service: AudioGenerationService,
    name: str,
    arguments: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Handle one tools/call request.

    Args:
        service: Service that runs the invocation.
        name: Requested tool name.
        arguments: Raw tool arguments (may be None).

    Returns:
        Result payload (poll snapshot or submission ack).

    Raises:
        McpError: INVALID_REQUEST for any failure.
    """
    rid = str(uuid.uuid4())[:12]
    set_request_id(rid)
    info(_LOG, "tool_call", tool=name)

    try:
        if name != TOOL_NAME:
            raise UnknownTool(name)
        return await service.handle(arguments)
    except McpError:
        raise
    except GenerationError as e:
        fail(_LOG, "tool_call_failed", code=e.code, error=e.message)
        raise invalid_request(e.message) from e
    except Exception as e:
        error(_LOG, "tool_call_crashed", error_type=type(e).__name__, error=str(e))
        raise invalid_request(f"Failed to generate audio: {str(e) or 'Unknown error'}") from e


def to_content(result: Dict[str, Any]) -> List[types.TextContent]:
    """Serialize a result payload as MCP text content."""
    return [types.TextContent(type="text", text=json.dumps(result, ensure_ascii=False, indent=2))]


def create_server(service: AudioGenerationService) -> Server:
    """
    Create the MCP server bound to a service instance.

    Args:
        service: AudioGenerationService handling tool calls.

    Returns:
        Configured low-level mcp Server, ready for run().
    """
    config = service.config
    server = Server(config.name, version=config.version)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return list_tools()

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        # McpError propagates to the session, which replies with a JSON-RPC error
        result = await dispatch_tool_call(service, req.params.name, req.params.arguments)
        return types.ServerResult(types.CallToolResult(content=to_content(result)))

    server.request_handlers[types.CallToolRequest] = handle_call_tool

    return server
