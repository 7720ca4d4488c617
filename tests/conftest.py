"""Test configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from issue_digest.config import DigestConfig
from issue_digest.github_client.models import IssueLabel, IssueRecord


def make_api_issue(
    number: int, pull_request: bool = False, **overrides: Any
) -> dict[str, Any]:
    """Build one item as returned by GET /repos/{owner}/{repo}/issues."""
    item: dict[str, Any] = {
        "id": 1000 + number,
        "number": number,
        "title": f"Issue {number}",
        "body": f"Body of issue {number}",
        "html_url": f"https://github.com/octo/demo/issues/{number}",
        "state": "open",
        "created_at": "2024-01-01T12:00:00Z",
        "updated_at": "2024-01-02T12:00:00Z",
        "user": {"login": "octocat", "id": 1},
        "labels": [{"name": "bug", "color": "d73a4a", "description": "Broken"}],
        "assignees": [{"login": "hubot", "id": 2}],
        "comments": 3,
    }
    if pull_request:
        item["pull_request"] = {
            "url": f"https://api.github.com/repos/octo/demo/pulls/{number}"
        }
    item.update(overrides)
    return item


def make_record(number: int, repo: str = "octo/demo", **overrides: Any) -> IssueRecord:
    """Build a normalized IssueRecord."""
    values: dict[str, Any] = {
        "id": 1000 + number,
        "number": number,
        "repo": repo,
        "title": f"Issue {number}",
        "body": f"Body of issue {number}",
        "html_url": f"https://github.com/{repo}/issues/{number}",
        "state": "open",
        "created_at": "2024-01-01T12:00:00Z",
        "updated_at": "2024-01-02T12:00:00Z",
        "author_login": "octocat",
        "labels": [IssueLabel(name="bug", color="d73a4a")],
        "assignees": ["hubot"],
        "comments": 3,
    }
    values.update(overrides)
    return IssueRecord(**values)


@pytest.fixture
def record_factory() -> Callable[..., IssueRecord]:
    """Factory for IssueRecord objects."""
    return make_record


@pytest.fixture
def api_issue_factory() -> Callable[..., dict[str, Any]]:
    """Factory for raw GitHub API issue items."""
    return make_api_issue


@pytest.fixture
def config() -> DigestConfig:
    """Configuration with a fake key and the default chunk size."""
    return DigestConfig(api_key="test-key", github_token="test-token")


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Temporary SQLite cache file."""
    return tmp_path / "data" / "issues.db"
