"""Pydantic models for GitHub issue data.

``IssueRecord`` is the normalized shape stored in the cache. Fields map to
GitHub's REST API v3 issue object.
API Reference: https://docs.github.com/en/rest/issues/issues
"""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class IssueLabel(BaseModel):
    """Label attached to an issue.

    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str = Field(
        "", description="Hexadecimal color code without leading # (string)"
    )


class IssueRecord(BaseModel):
    """Open issue normalized for caching and analysis."""

    id: int = Field(..., description="Globally unique issue identifier (integer)")
    number: int = Field(..., description="Issue number within the repository")
    repo: str = Field(..., description="Owning repository as owner/name")
    title: str = Field(..., min_length=1, description="Issue title (string)")
    body: str | None = Field(
        None, description="Issue description in markdown (string)"
    )
    html_url: str = Field(..., description="Browser URL of the issue")
    state: str = Field("open", description="State at fetch time: 'open', 'closed'")
    created_at: str = Field(..., description="Timestamp of creation (ISO 8601)")
    updated_at: str = Field(..., description="Timestamp of last update (ISO 8601)")
    author_login: str | None = Field(
        None, description="Login of the author, None when the account is gone"
    )
    labels: list[IssueLabel] = Field(
        default_factory=list, description="Labels in upstream order"
    )
    assignees: list[str] = Field(
        default_factory=list, description="Assignee logins in upstream order"
    )
    comments: int = Field(0, ge=0, description="Number of comments (integer)")

    def label_names(self) -> list[str]:
        """Names of the attached labels, in order."""
        return [label.name for label in self.labels]

    def labels_json(self) -> str:
        """Stable JSON encoding of the labels for storage."""
        return json.dumps(
            [label.model_dump() for label in self.labels], separators=(",", ":")
        )

    def assignees_json(self) -> str:
        """Stable JSON encoding of the assignee logins for storage."""
        return json.dumps(self.assignees, separators=(",", ":"))

    @classmethod
    def from_api(cls, data: dict[str, Any], repo: str) -> "IssueRecord":
        """Build a record from one item of the GitHub list-issues response.

        Args:
            data: Raw issue object as returned by the REST API
            repo: Repository the issue was fetched from

        Returns:
            IssueRecord instance
        """
        user = data.get("user") or {}
        return cls(
            id=data["id"],
            number=data["number"],
            repo=repo,
            title=data["title"],
            body=data.get("body"),
            html_url=data["html_url"],
            state=data["state"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
            author_login=user.get("login") or None,
            labels=[
                IssueLabel(name=label["name"], color=label.get("color") or "")
                for label in data.get("labels") or []
            ],
            assignees=[
                assignee["login"] for assignee in data.get("assignees") or []
            ],
            comments=data.get("comments") or 0,
        )


class RateLimitStatus(BaseModel):
    """Core API quota as reported by ``GET /rate_limit``."""

    remaining: int
    limit: int
    reset: datetime


class ScanInfo(BaseModel):
    """Bookkeeping written every time a repository's cache is replaced.

    Separates "never scanned" (no ScanInfo) from "scanned, no open issues"
    (``issue_count == 0``).
    """

    repo: str = Field(..., description="Repository as owner/name")
    issue_count: int = Field(..., ge=0, description="Issues stored by the scan")
    scanned_at: datetime = Field(..., description="When the scan was saved")
