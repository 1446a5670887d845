"""Productboard MCP Server - Expose Productboard to AI assistants."""
import asyncio
import logging
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from productboard_core.client import ProductboardClient
from productboard_core.config import get_settings
from productboard_core.errors import ProductboardApiError, ValidationError

from . import __version__
from . import formatters
from . import tools
from .handlers import HANDLERS

SERVER_NAME = "productboard-connector"

# Configure logging to stderr (stdout carries the MCP stdio stream)
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
    force=True
)
logger = logging.getLogger("productboard-mcp")


# MCP Server instance
app = Server(SERVER_NAME, version=__version__)


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available Productboard tools."""
    return tools.get_tools()


async def dispatch(
    name: str,
    arguments: Any,
    client: Optional[ProductboardClient] = None,
) -> CallToolResult:
    """Run one tool call and wrap the outcome in an envelope.

    Never raises: unknown tools, validation failures, API errors and
    unexpected exceptions all come back as error envelopes.
    """
    handler = HANDLERS.get(name)
    if handler is None:
        logger.warning(f"Unknown tool requested: {name}")
        return formatters.as_error_result(ValidationError(f"Unknown tool: {name}"))

    arguments = arguments if isinstance(arguments, dict) else {}
    logger.info(f"Tool call: {name} with arguments: {sorted(arguments)}")

    try:
        if client is not None:
            result = await handler(arguments, client)
        else:
            async with ProductboardClient() as pb_client:
                result = await handler(arguments, pb_client)
        return formatters.as_json_result(result)

    except ProductboardApiError as e:
        logger.error(f"Tool execution failed: {name}: {e.message} (status: {e.status})")
        if e.details is not None:
            logger.debug(f"  Details: {e.details}")
        return formatters.as_error_result(e)

    except Exception as e:
        logger.exception(f"Unexpected error during {name} call: {type(e).__name__}: {e}")
        return formatters.as_error_result(e)


@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict) -> CallToolResult:
    """Handle MCP tool calls by delegating to dispatch."""
    return await dispatch(name, arguments)


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP server running.")
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("MCP server stopped.")
    except Exception:
        logger.exception("Fatal startup error")
        sys.exit(1)


if __name__ == "__main__":
    run()
