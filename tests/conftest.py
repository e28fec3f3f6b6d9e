"""Shared fixtures for Jira MCP tests."""
import httpx
import pytest

from jira_mcp.client import JiraClient
from jira_mcp.config import ConnectionProfile, TokenAuth

BASE_URL = "https://jira.example.com"
TOKEN = "secret-token-123"

ISSUE = {
    "self": f"{BASE_URL}/rest/api/2/issue/10001",
    "id": "10001",
    "key": "PROJ-123",
    "fields": {
        "summary": "Login button does nothing",
        "status": {"id": "1", "name": "Open"},
        "issuetype": {"id": "10004", "name": "Bug", "subtask": False},
        "project": {"id": "10000", "key": "PROJ", "name": "Project"},
        "labels": ["frontend"],
        "created": "2024-01-15T10:30:00.000+0000",
        "updated": "2024-01-16T08:00:00.000+0000",
    },
}


@pytest.fixture
def profile() -> ConnectionProfile:
    return ConnectionProfile(base_url=BASE_URL + "/", auth=TokenAuth(token=TOKEN))


@pytest.fixture
def make_client(profile):
    """Build a JiraClient whose HTTP traffic goes to ``handler``.

    Every request seen by the transport is appended to ``client.requests``.
    """
    def factory(handler) -> JiraClient:
        requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = JiraClient(profile, transport=httpx.MockTransport(recording_handler))
        client.requests = requests
        return client

    return factory


@pytest.fixture
def issue() -> dict:
    return ISSUE
