"""Jira MCP Server - Expose Jira Server issues to AI assistants over stdio."""
import asyncio
import logging
import sys
from pathlib import Path

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolRequest, ServerResult, Tool

from . import __version__
from . import handlers
from . import tools
from .client import JiraClient
from .config import ConfigurationError, load_settings

SERVER_NAME = "jira-mcp-server"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("jira-mcp")


def configure_logging() -> None:
    """Log to stderr; stdout carries the MCP stdio channel."""
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True
    )
    # DEBUG records only ever go to the optional debug log file.
    for handler in logging.getLogger().handlers:
        handler.setLevel(logging.INFO)


def enable_debug_log(log_dir: Path) -> Path:
    """Add a DEBUG-level file log at ``<log_dir>/mcp.log``."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "mcp.log"
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return log_file


def create_server(client: JiraClient) -> Server:
    """Create the MCP server with the Jira tools bound to ``client``."""
    app = Server(SERVER_NAME, version=__version__)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available MCP tools for Jira."""
        return tools.get_tools()

    # Registered as a raw request handler so that McpError for unknown tools
    # reaches the client as a JSON-RPC error instead of tool output.
    async def call_tool(request: CallToolRequest) -> ServerResult:
        result = await handlers.call_tool(request.params.name, request.params.arguments, client)
        return ServerResult(result)

    app.request_handlers[CallToolRequest] = call_tool
    return app


async def serve(client: JiraClient) -> None:
    """Run the MCP server on stdio until the client disconnects."""
    app = create_server(client)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Server running on stdio")
        await app.run(read_stream, write_stream, app.create_initialization_options())


def main() -> None:
    """Entry point: load configuration, then serve."""
    configure_logging()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    if settings.mcp_debug:
        log_file = enable_debug_log(settings.log_dir)
        logger.info(f"Debug logging to {log_file}")

    client = JiraClient.from_settings(settings)
    logger.info(f"Configuration loaded successfully ({client.base_url}, auth: {settings.auth_type})")

    try:
        asyncio.run(serve(client))
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
