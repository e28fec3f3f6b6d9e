"""MCP tool handlers for Jira.

All handlers follow a consistent pattern:
- Accept: the validated input model and a JiraClient
- Return: the Jira API payload, unchanged
- Log all operations for debugging

``call_tool`` is the only place that decides how a failure is reported. An
unknown tool name raises McpError (a protocol-level fault); every other failure
becomes a CallToolResult with ``isError=True``.
"""
import logging
import traceback
from typing import Any, Awaitable, Callable

import httpx
from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, CallToolResult, ErrorData
from pydantic import BaseModel, ValidationError

from . import formatters
from .client import JiraClient, JiraClientError
from .schemas import (
    AddCommentInput,
    CreateIssueFields,
    CreateIssueInput,
    GetIssueInput,
    SearchIssuesInput,
)
from .tools import TOOL_INPUT_MODELS, JiraTool, lookup_tool

logger = logging.getLogger("jira-mcp.handlers")


def build_issue_fields(data: CreateIssueInput) -> CreateIssueFields:
    """Reshape flat create-issue arguments into Jira's nested reference objects."""
    fields: CreateIssueFields = {
        "project": {"key": data.project_key},
        "summary": data.summary,
        "issuetype": {"name": data.issue_type},
    }
    if data.description is not None:
        fields["description"] = data.description
    if data.priority:
        fields["priority"] = {"name": data.priority}
    if data.assignee:
        fields["assignee"] = {"name": data.assignee}
    if data.labels is not None:
        fields["labels"] = data.labels
    if data.components is not None:
        fields["components"] = [{"name": name} for name in data.components]
    return fields


async def handle_search_issues(data: SearchIssuesInput, client: JiraClient) -> Any:
    """Search issues with JQL, returning a single page of results."""
    result = await client.search_issues(data.jql, max_results=data.max_results, fields=data.fields)
    logger.info(f"Search returned {len(result.get('issues', []))} of {result.get('total', 0)} issues")
    return result


async def handle_get_issue(data: GetIssueInput, client: JiraClient) -> Any:
    result = await client.get_issue(data.issue_key, fields=data.fields, expand=data.expand)
    logger.info(f"Successfully retrieved issue {data.issue_key}")
    return result


async def handle_create_issue(data: CreateIssueInput, client: JiraClient) -> Any:
    """Create an issue. Returns the new issue's id, key and self link."""
    result = await client.create_issue(build_issue_fields(data))
    logger.info(f"Successfully created issue {result.get('key')} in project {data.project_key}")
    return result


async def handle_add_comment(data: AddCommentInput, client: JiraClient) -> Any:
    """Add a comment, optionally restricted to a group or role.

    Jira may answer 204 with no body, in which case the result is ``{}``.
    """
    visibility = data.visibility.model_dump(by_alias=True) if data.visibility else None
    result = await client.add_comment(data.issue_key, data.body, visibility)
    logger.info(f"Successfully added comment to {data.issue_key}")
    return result


Handler = Callable[[Any, JiraClient], Awaitable[Any]]

HANDLERS: dict[JiraTool, Handler] = {
    JiraTool.SEARCH_ISSUES: handle_search_issues,
    JiraTool.GET_ISSUE: handle_get_issue,
    JiraTool.CREATE_ISSUE: handle_create_issue,
    JiraTool.ADD_COMMENT: handle_add_comment,
}


async def call_tool(name: str, arguments: dict | None, client: JiraClient) -> CallToolResult:
    """Validate arguments, run the matching handler and wrap the outcome.

    Raises:
        McpError: METHOD_NOT_FOUND if ``name`` is not a Jira tool.
    """
    tool = lookup_tool(name)
    if tool is None:
        logger.warning(f"Unknown tool requested: {name}")
        raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

    logger.info(f"Tool call: {name}")

    try:
        data: BaseModel = TOOL_INPUT_MODELS[tool].model_validate(arguments or {})
        result = await HANDLERS[tool](data, client)
        return formatters.success_result(result)

    except ValidationError as e:
        logger.info(f"Invalid arguments for {name}: {e.error_count()} error(s)")
        return formatters.error_result(formatters.format_error(str(e)))

    except JiraClientError as e:
        logger.error(f"Jira API error during {name} call:")
        logger.error(f"  Status: {e.status_code}")
        logger.error(f"  Message: {e.message}")
        if e.jira_errors:
            logger.debug(f"  Response body: {e.jira_errors}")
        return formatters.error_result(formatters.format_api_error(e.message))

    except httpx.RequestError as e:
        description = str(e) or type(e).__name__
        logger.error(f"Request error during {name} call:")
        logger.error(f"  Error type: {type(e).__name__}")
        logger.error(f"  Error message: {description}")
        return formatters.error_result(formatters.format_error(f"Connection failed - {description}"))

    except Exception as e:
        logger.error(f"Unexpected error during {name} call:")
        logger.error(f"  Error type: {type(e).__name__}")
        logger.error(f"  Error message: {str(e)}")
        logger.error(f"  Traceback:\n{traceback.format_exc()}")
        return formatters.error_result(formatters.format_error(f"{type(e).__name__}: {str(e)}"))
