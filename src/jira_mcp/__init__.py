"""Jira MCP Server - Model Context Protocol integration for Jira Server.

This package exposes a small set of Jira Server / Data Center REST API v2
operations to AI assistants over the Model Context Protocol.

Modules:
- server: stdio MCP server implementation
- config: environment configuration and connection profile
- client: Jira REST API client
- tools: MCP tool definitions
- handlers: Tool implementation handlers
- formatters: Response formatting utilities
"""

__version__ = "0.1.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
