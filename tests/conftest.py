"""Test configuration and fixtures."""

import json
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from gh_picker.github_client.models import FetchResult
from gh_picker.reporting import Reporter


def issue_node(number: int, title: str, repo: str = "octo-org/hello") -> dict:
    """Build a GraphQL issue node."""
    return {
        "__typename": "Issue",
        "number": number,
        "title": title,
        "url": f"https://github.com/{repo}/issues/{number}",
        "state": "OPEN",
        "repository": {"nameWithOwner": repo},
    }


def pull_request_node(number: int, title: str, repo: str = "octo-org/hello") -> dict:
    """Build a GraphQL pull request node."""
    return {
        "__typename": "PullRequest",
        "number": number,
        "title": title,
        "url": f"https://github.com/{repo}/pull/{number}",
        "state": "OPEN",
        "repository": {"nameWithOwner": repo},
    }


def notification(
    thread_id: str,
    subject_type: str,
    number: int,
    title: str,
    unread: bool = True,
    repo: str = "octo-org/hello",
) -> dict:
    """Build a REST notification thread."""
    segment = "pulls" if subject_type == "PullRequest" else "issues"
    return {
        "id": thread_id,
        "unread": unread,
        "reason": "subscribed",
        "subject": {
            "title": title,
            "url": f"https://api.github.com/repos/{repo}/{segment}/{number}",
            "type": subject_type,
        },
        "repository": {
            "full_name": repo,
            "html_url": f"https://github.com/{repo}",
        },
        "url": f"https://api.github.com/notifications/threads/{thread_id}",
    }


def graphql_page(path: str, nodes: list[Any], has_next: bool = False) -> str:
    """Build a raw GraphQL response page with nodes at a dotted path."""
    parts = path.split(".")
    connection: dict[str, Any] = {
        parts[-1]: nodes,
        "pageInfo": {"hasNextPage": has_next, "endCursor": "cursor"},
    }
    payload: dict[str, Any] = connection
    for part in reversed(parts[:-1]):
        payload = {part: payload}
    return json.dumps(payload)


@pytest.fixture
def reporter() -> Mock:
    """Reporter double recording messages."""
    return Mock(spec=Reporter)


@pytest.fixture
def client() -> Mock:
    """GitHub client double with async fetches."""
    mock_client = Mock()
    mock_client.graphql = AsyncMock(return_value=FetchResult(pages=[]))
    mock_client.rest = AsyncMock(return_value=FetchResult(pages=[]))
    mock_client.mark_notification_read = AsyncMock(return_value=None)
    mock_client.merge_pull_request = AsyncMock(return_value=None)
    return mock_client


@pytest.fixture
def presenter() -> Mock:
    """Presenter double recording session descriptors."""
    mock_presenter = Mock()
    mock_presenter.pick = AsyncMock(return_value=None)
    return mock_presenter
