"""MCP tool definitions for Jira.

The tool set is closed: JiraTool enumerates every tool, and each tool has
exactly one description and one input model. Adding a tool means adding an
enum member plus its entries here, a handler in handlers.HANDLERS and a
JiraClient method.
"""
import enum

from mcp.types import Tool
from pydantic import BaseModel

from .schemas import AddCommentInput, CreateIssueInput, GetIssueInput, SearchIssuesInput


class JiraTool(str, enum.Enum):
    """Names of the tools exposed to MCP clients."""

    SEARCH_ISSUES = "jira_search_issues"
    GET_ISSUE = "jira_get_issue"
    CREATE_ISSUE = "jira_create_issue"
    ADD_COMMENT = "jira_add_comment"


TOOL_DESCRIPTIONS: dict[JiraTool, str] = {
    JiraTool.SEARCH_ISSUES: "Search for Jira issues using JQL (Jira Query Language). "
                            "Returns a list of issues matching the query.",
    JiraTool.GET_ISSUE: "Get detailed information about a specific Jira issue by its key (e.g., PROJ-123).",
    JiraTool.CREATE_ISSUE: "Create a new Jira issue in a specified project with the given details.",
    JiraTool.ADD_COMMENT: "Add a comment to an existing Jira issue. Supports Jira wiki markup formatting.",
}

TOOL_INPUT_MODELS: dict[JiraTool, type[BaseModel]] = {
    JiraTool.SEARCH_ISSUES: SearchIssuesInput,
    JiraTool.GET_ISSUE: GetIssueInput,
    JiraTool.CREATE_ISSUE: CreateIssueInput,
    JiraTool.ADD_COMMENT: AddCommentInput,
}


def lookup_tool(name: str) -> JiraTool | None:
    """Return the JiraTool for a tool name, or None if it is not one of ours."""
    try:
        return JiraTool(name)
    except ValueError:
        return None


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools for Jira."""
    return [
        Tool(
            name=tool.value,
            description=TOOL_DESCRIPTIONS[tool],
            inputSchema=TOOL_INPUT_MODELS[tool].model_json_schema(by_alias=True),
        )
        for tool in JiraTool
    ]
