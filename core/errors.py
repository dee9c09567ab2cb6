# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure a tool call can hit falls into one of two families:
#
#   ProtocolError  →  reported through the MCP error channel with a JSON-RPC
#                     code (unknown tool, bad arguments, missing file,
#                     unsupported format, unexpected internal failure).
#
#   PlatformError  →  Twitter said no.  Reported back to the agent as an
#                     error-flagged text envelope so it can react (e.g. wait
#                     out a rate limit) instead of treating it as a crash.
#
# The JSON-RPC codes are plain integers here so core/ stays free of the MCP
# SDK.  They match mcp.types.METHOD_NOT_FOUND / INVALID_PARAMS / INTERNAL_ERROR.
# =============================================================================

from typing import Optional

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

RATE_LIMIT_STATUS = 429
# "429" is the HTTP status used as a code; "88" is the v1.1 rate-limit code.
RATE_LIMIT_CODES = frozenset({"429", "88"})

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait a moment before trying again."


class TwitterMcpError(Exception):
    """Base class for every error this server raises on purpose."""


class ConfigError(TwitterMcpError):
    """Startup configuration is missing or malformed."""


# -----------------------------------------------------------------------------
# Protocol-level errors
# -----------------------------------------------------------------------------
class ProtocolError(TwitterMcpError):
    code = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownTool(ProtocolError):
    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.tool_name = name


class InvalidArguments(ProtocolError):
    code = INVALID_PARAMS


class MediaFileNotFound(InvalidArguments):
    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class UnsupportedMediaFormat(InvalidArguments):
    pass


class InternalError(ProtocolError):
    code = INTERNAL_ERROR

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)


# -----------------------------------------------------------------------------
# Platform errors
# -----------------------------------------------------------------------------
class PlatformError(TwitterMcpError):
    """A Twitter call failed.  `code` is always a string, `http_status` may be None."""

    def __init__(self, message: str, code: str = "unknown", http_status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    @property
    def is_rate_limit(self) -> bool:
        return self.http_status == RATE_LIMIT_STATUS or self.code in RATE_LIMIT_CODES

    def __repr__(self) -> str:
        return (f"PlatformError(message={self.message!r}, code={self.code!r}, "
                f"http_status={self.http_status!r})")
