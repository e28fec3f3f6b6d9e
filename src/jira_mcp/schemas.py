"""Pydantic schemas for tool input validation and Jira REST API v2 shapes."""
from typing import Any, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class ToolInput(BaseModel):
    """Base schema for tool arguments (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel)


# Tool input schemas

class SearchIssuesInput(ToolInput):
    """Arguments for jira_search_issues."""

    jql: StrictStr = Field(..., description='JQL query string (e.g., "project = TEST AND status = Open")')
    max_results: StrictInt = Field(
        50, ge=1, le=100,
        description="Maximum results to return (default: 50, max: 100)",
    )
    fields: Optional[list[StrictStr]] = Field(
        None,
        description="Issue fields to include (default: key, summary, status, assignee, issuetype, priority)",
    )


class GetIssueInput(ToolInput):
    """Arguments for jira_get_issue."""

    issue_key: StrictStr = Field(..., description='Issue key (e.g., "PROJ-123")')
    fields: Optional[list[StrictStr]] = Field(None, description="Specific fields to retrieve")
    expand: Optional[list[StrictStr]] = Field(
        None,
        description='Additional data to expand (e.g., "changelog", "transitions", "renderedFields")',
    )


class CreateIssueInput(ToolInput):
    """Arguments for jira_create_issue."""

    project_key: StrictStr = Field(..., description='Project key (e.g., "TEST")')
    summary: StrictStr = Field(..., description="Issue summary/title")
    issue_type: StrictStr = Field(..., description='Issue type (e.g., "Bug", "Task", "Story")')
    description: Optional[StrictStr] = Field(None, description="Issue description")
    priority: Optional[StrictStr] = Field(None, description='Priority name (e.g., "High", "Medium", "Low")')
    assignee: Optional[StrictStr] = Field(None, description="Username to assign the issue to")
    labels: Optional[list[StrictStr]] = Field(None, description="Labels to add")
    components: Optional[list[StrictStr]] = Field(None, description="Component names")


class CommentVisibility(ToolInput):
    """Restricts a comment to a group or project role."""

    type: Literal["group", "role"] = Field(..., description="Visibility type")
    value: StrictStr = Field(..., description="Group name or role name")


class AddCommentInput(ToolInput):
    """Arguments for jira_add_comment."""

    issue_key: StrictStr = Field(..., description='Issue key (e.g., "PROJ-123")')
    body: StrictStr = Field(..., description="Comment text (supports Jira wiki markup)")
    visibility: Optional[CommentVisibility] = Field(None, description="Optional visibility restriction")


# Jira REST API v2 shapes (passed through verbatim, declared for reference)

class JiraUser(TypedDict, total=False):
    self: str
    key: str
    name: str
    displayName: str
    emailAddress: str
    active: bool


class JiraVisibility(TypedDict):
    type: Literal["group", "role"]
    value: str


class JiraComment(TypedDict, total=False):
    self: str
    id: str
    author: JiraUser
    body: str
    created: str
    updated: str
    visibility: JiraVisibility


class JiraIssue(TypedDict, total=False):
    self: str
    id: str
    key: str
    fields: dict[str, Any]
    expand: str


class JiraSearchResponse(TypedDict, total=False):
    expand: str
    startAt: int
    maxResults: int
    total: int
    issues: list[JiraIssue]


class JiraCreateIssueResponse(TypedDict):
    id: str
    key: str
    self: str


class JiraErrorResponse(TypedDict, total=False):
    errorMessages: list[str]
    errors: dict[str, str]


class NameRef(TypedDict):
    name: str


class CreateIssueFields(TypedDict, total=False):
    """Issue fields in the nested-reference shape POST /issue expects."""

    project: dict[str, str]
    summary: str
    issuetype: NameRef
    description: str
    priority: NameRef
    assignee: NameRef
    labels: list[str]
    components: list[NameRef]
