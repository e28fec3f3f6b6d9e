"""Formatting functions for MCP responses."""
import json
from typing import Any

from mcp.types import CallToolResult, TextContent


def format_json(data: Any) -> str:
    """Render a Jira API payload as indented JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def success_result(data: Any) -> CallToolResult:
    """Wrap a Jira API payload as a successful tool result."""
    return CallToolResult(content=[TextContent(type="text", text=format_json(data))], isError=False)


def error_result(text: str) -> CallToolResult:
    """Wrap an error message as a failed tool result."""
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=True)


def format_api_error(message: str) -> str:
    return f"Jira API Error: {message}"


def format_error(message: str) -> str:
    return f"Error: {message}"
