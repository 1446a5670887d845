"""Productboard MCP Server - Model Context Protocol integration.

This package exposes the Productboard REST API to AI assistants as MCP tools.

Modules:
- server: stdio MCP server and dispatch boundary
- formatters: success/error response envelopes
- tools: MCP tool definitions
- handlers: tool implementations
"""

__version__ = "1.0.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
