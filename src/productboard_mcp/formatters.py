"""Response envelopes returned to the MCP host.

Every tool call ends in exactly one of these two shapes: a pretty-printed
JSON text block, or the same with ``isError`` set and an ``error`` body.
"""
import json
from typing import Any

from mcp.types import CallToolResult, TextContent

from productboard_core.errors import ProductboardApiError


def to_json_text(data: Any) -> str:
    """Pretty-print data as JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def error_payload(error: BaseException) -> dict:
    """Build the ``{"error": {...}}`` body for an exception."""
    body: dict[str, Any] = {"message": str(error) or type(error).__name__}
    if isinstance(error, ProductboardApiError):
        body["message"] = error.message
        if error.status is not None:
            body["status"] = error.status
        if error.retry_after is not None:
            body["retry_after_seconds"] = error.retry_after
        if error.details is not None:
            body["details"] = error.details
    return {"error": body}


def as_json_result(data: Any) -> CallToolResult:
    """Wrap a successful result."""
    return CallToolResult(content=[TextContent(type="text", text=to_json_text(data))])


def as_error_result(error: BaseException) -> CallToolResult:
    """Wrap a failure."""
    return CallToolResult(
        content=[TextContent(type="text", text=to_json_text(error_payload(error)))],
        isError=True,
    )
