"""Jira Server REST API v2 client.

One JiraClient owns the connection profile for the whole process. Every public
method is a thin wrapper around ``_request``, which classifies non-2xx
responses into JiraClientError. Network failures are left as
``httpx.RequestError`` for the caller to classify.
"""
import base64
import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .config import BasicAuth, ConnectionProfile, Settings
from .schemas import (
    CreateIssueFields,
    JiraComment,
    JiraCreateIssueResponse,
    JiraErrorResponse,
    JiraIssue,
    JiraSearchResponse,
    JiraVisibility,
)

logger = logging.getLogger("jira-mcp.client")

API_PATH = "/rest/api/2"

DEFAULT_SEARCH_FIELDS = [
    "key",
    "summary",
    "status",
    "assignee",
    "issuetype",
    "priority",
    "project",
    "created",
    "updated",
]


class JiraClientError(Exception):
    """Raised when Jira answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        jira_errors: Optional[JiraErrorResponse] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.jira_errors = jira_errors


def build_auth_header(profile: ConnectionProfile) -> str:
    """Derive the Authorization header value for a connection profile."""
    auth = profile.auth
    if isinstance(auth, BasicAuth):
        raw = f"{auth.username}:{auth.password.get_secret_value()}".encode("utf-8")
        return f"Basic {base64.b64encode(raw).decode('ascii')}"
    return f"Bearer {auth.token.get_secret_value()}"


def _parse_error_body(text: str) -> Optional[JiraErrorResponse]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _error_message(response: httpx.Response, error_data: Optional[JiraErrorResponse]) -> str:
    messages: list[str] = []
    if error_data:
        error_messages = error_data.get("errorMessages")
        if isinstance(error_messages, list):
            messages.extend(str(m) for m in error_messages)
        errors = error_data.get("errors")
        if isinstance(errors, dict):
            for field, msg in errors.items():
                messages.append(f"{field}: {msg}")
    if messages:
        return "; ".join(messages)
    return f"HTTP {response.status_code}: {response.reason_phrase}"


class JiraClient:
    """Client for the Jira Server / Data Center REST API v2."""

    def __init__(
        self,
        profile: ConnectionProfile,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = profile.base_url
        self.timeout = timeout
        self._auth_header = build_auth_header(profile)
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "JiraClient":
        return cls(settings.connection_profile(), timeout=settings.timeout, transport=transport)

    def __repr__(self) -> str:
        return f"JiraClient(base_url={self.base_url!r})"

    async def _request(
        self,
        method: str,
        endpoint: str,
        body: Optional[dict] = None,
        params: Optional[dict[str, str]] = None,
    ) -> Any:
        headers = {
            "Authorization": self._auth_header,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        content = json.dumps(body) if body is not None else None

        logger.info(f"{method} {endpoint}")

        async with httpx.AsyncClient(
            base_url=self.base_url + API_PATH,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(method, endpoint, content=content, params=params)

        text = response.text

        if not response.is_success:
            error_data = _parse_error_body(text)
            message = _error_message(response, error_data)
            logger.warning(f"{method} {endpoint} failed with {response.status_code}: {message}")
            raise JiraClientError(message, response.status_code, error_data)

        if response.status_code == 204 or not text.strip():
            return {}

        return json.loads(text)

    async def search_issues(
        self,
        jql: str,
        max_results: int = 50,
        start_at: int = 0,
        fields: Optional[list[str]] = None,
    ) -> JiraSearchResponse:
        """Search for issues using JQL."""
        body = {
            "jql": jql,
            "maxResults": max_results,
            "startAt": start_at,
            "fields": fields if fields is not None else list(DEFAULT_SEARCH_FIELDS),
        }
        return await self._request("POST", "/search", body)

    async def get_issue(
        self,
        issue_id_or_key: str,
        fields: Optional[list[str]] = None,
        expand: Optional[list[str]] = None,
    ) -> JiraIssue:
        """Get a single issue by key or ID.

        Empty ``fields``/``expand`` lists are not sent at all.
        """
        params: dict[str, str] = {}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)

        endpoint = f"/issue/{quote(issue_id_or_key, safe='')}"
        return await self._request("GET", endpoint, params=params or None)

    async def create_issue(self, fields: CreateIssueFields) -> JiraCreateIssueResponse:
        """Create a new issue from fields already in Jira's nested shape."""
        return await self._request("POST", "/issue", {"fields": fields})

    async def add_comment(
        self,
        issue_id_or_key: str,
        body: str,
        visibility: Optional[JiraVisibility] = None,
    ) -> JiraComment:
        """Add a comment to an issue."""
        payload: dict[str, Any] = {"body": body}
        if visibility:
            payload["visibility"] = visibility

        return await self._request(
            "POST",
            f"/issue/{quote(issue_id_or_key, safe='')}/comment",
            payload,
        )
