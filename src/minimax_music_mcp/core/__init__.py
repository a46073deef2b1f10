"""
Core Infrastructure for minimax-music-mcp.

This package provides foundational components:
    - config.py: Configuration loading and validation
    - errors.py: Error codes and the GenerationError hierarchy
    - logging/: Structured logging with numeric levels
"""
