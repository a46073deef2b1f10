"""
MCP Protocol Layer for minimax-music-mcp.

This package defines what the MCP client talks to:
    - server.py: Low-level mcp Server with tools/list and tools/call
    - schemas.py: Tool schema and result models
    - dependencies.py: Settings and service singletons
"""
