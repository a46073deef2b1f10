"""
Error Codes and Exceptions.

Every failure inside a tool invocation is raised as a GenerationError
subclass. The MCP boundary (api/server.py) collapses all of them into a
single INVALID_REQUEST protocol error, so the code attribute is only used
for logging and for to_dict() serialization.

Hierarchy:
    GenerationError
        ├── MissingParameter       - required argument absent
        ├── MissingCredential      - no API key in arguments or config
        ├── UnknownTool            - tool name is not generate_audio
        ├── RemoteRequestFailed    - transport fault or non-2xx status
        └── InvalidRemoteResponse  - body lacks status/id
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class ErrorCode:
    """Standardized error codes carried by GenerationError."""
    MISSING_PARAMETER = "MISSING_PARAMETER"
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    REMOTE_REQUEST_FAILED = "REMOTE_REQUEST_FAILED"
    INVALID_REMOTE_RESPONSE = "INVALID_REMOTE_RESPONSE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GenerationError(Exception):
    """
    Base exception for audio generation errors.

    Attributes:
        message: Human-readable error message.
        code: Error code from ErrorCode class.
        details: Optional dictionary with additional context.
    """
    def __init__(self, message: str, code: str = ErrorCode.INTERNAL_ERROR, details: Optional[Dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a standardized error dict."""
        result = {
            "ok": False,
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class MissingParameter(GenerationError):
    """Raised when a required tool argument is missing or empty."""
    def __init__(self, name: str):
        super().__init__(
            f"Missing required parameter: {name}",
            ErrorCode.MISSING_PARAMETER,
            {"parameter": name},
        )


class MissingCredential(GenerationError):
    """Raised when no API key is available from arguments or configuration."""
    def __init__(self, message: str = "API key not found. Please provide it in the AIML_API_KEY environment variable or as a parameter"):
        super().__init__(message, ErrorCode.MISSING_CREDENTIAL)


class UnknownTool(GenerationError):
    """Raised when an invocation names a tool this server does not provide."""
    def __init__(self, name: str):
        super().__init__("Tool not found", ErrorCode.UNKNOWN_TOOL, {"tool": name})


class RemoteRequestFailed(GenerationError):
    """
    Raised when the AIML API call fails.

    http_status is None for transport faults (connection refused, timeout)
    where no response was received.
    """
    def __init__(self, message: str, http_status: Optional[int] = None):
        self.http_status = http_status
        details = {"http_status": http_status} if http_status is not None else None
        super().__init__(message, ErrorCode.REMOTE_REQUEST_FAILED, details)


class InvalidRemoteResponse(GenerationError):
    """Raised when a decoded response lacks the status/id fields."""
    def __init__(self, message: str = "Invalid response format from server"):
        super().__init__(message, ErrorCode.INVALID_REMOTE_RESPONSE)
