from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from issue_gateway.main import app
from issue_gateway.routers.issues import get_github_client, get_markdown_renderer
from issue_gateway.services.markdown_renderer import MarkdownRenderer

ISSUE = {
    "id": 1001,
    "number": 42,
    "title": "Crash on startup",
    "body": "<p>It crashes</p>",
    "state": "open",
    "labels": [{"name": "bug"}],
    "assignees": [],
}

COMMENT = {"id": 555, "body": "<p>Thanks!</p>", "user": {"login": "octocat"}}


@pytest.fixture
def mock_github():
    """Stub GitHubClient whose coroutine methods return canned upstream payloads."""
    github = MagicMock()
    github.create_issue = AsyncMock(return_value=ISSUE)
    github.list_issues = AsyncMock(return_value=[ISSUE, {**ISSUE, "id": 1002, "number": 43}])
    github.get_issue = AsyncMock(return_value=ISSUE)
    github.update_issue = AsyncMock(return_value=ISSUE)
    github.create_comment = AsyncMock(return_value=COMMENT)
    github.list_comments = AsyncMock(return_value=[COMMENT])
    return github


@pytest.fixture
async def client(mock_github):
    app.dependency_overrides[get_github_client] = lambda: mock_github
    renderer = MarkdownRenderer()
    app.dependency_overrides[get_markdown_renderer] = lambda: renderer
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
