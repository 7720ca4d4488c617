"""Error types raised by the collection and analysis pipeline.

Every error carries a human readable message plus a ``details`` dict with
the data a caller needs to choose a user-facing response (status codes,
remaining rate-limit quota, the repository involved).
"""

from enum import Enum
from typing import Any


class IssueDigestError(Exception):
    """Base exception for all issue-digest errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(IssueDigestError):
    """Raised when required configuration is missing or invalid."""


class InvalidRepoFormatError(IssueDigestError):
    """Raised when a repository identifier is not ``owner/name``."""

    def __init__(self, repo: str):
        super().__init__(
            f"Invalid repository format '{repo}'. Expected format: owner/name",
            details={"repository": repo},
        )
        self.repo = repo


class UpstreamErrorKind(str, Enum):
    """Failure classes for GitHub API requests."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    OTHER = "other"


class UpstreamError(IssueDigestError):
    """Raised when a GitHub request fails or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        kind: UpstreamErrorKind,
        status_code: int | None = None,
        rate_limit_remaining: int | None = None,
        repository: str | None = None,
    ):
        details: dict[str, Any] = {"kind": kind.value}
        if status_code is not None:
            details["status_code"] = status_code
        if rate_limit_remaining is not None:
            details["rate_limit_remaining"] = rate_limit_remaining
        if repository:
            details["repository"] = repository
        super().__init__(message, details=details)
        self.kind = kind
        self.status_code = status_code
        self.rate_limit_remaining = rate_limit_remaining
        self.repository = repository


class LLMErrorKind(str, Enum):
    """Failure classes for LLM completion calls."""

    AUTH_ERROR = "auth_error"
    RATE_LIMITED = "rate_limited"
    CONTENT_BLOCKED = "content_blocked"
    OTHER = "other"


class LLMError(IssueDigestError):
    """Raised when an LLM completion call fails."""

    def __init__(
        self,
        message: str,
        kind: LLMErrorKind,
        status_code: int | None = None,
    ):
        details: dict[str, Any] = {"kind": kind.value}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details=details)
        self.kind = kind
        self.status_code = status_code
