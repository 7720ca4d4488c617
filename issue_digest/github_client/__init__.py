"""GitHub client package for API interaction."""

from .client import GitHubClient, is_valid_repo_format, validate_repo_format
from .models import IssueLabel, IssueRecord, RateLimitStatus, ScanInfo

__all__ = [
    "GitHubClient",
    "IssueLabel",
    "IssueRecord",
    "RateLimitStatus",
    "ScanInfo",
    "is_valid_repo_format",
    "validate_repo_format",
]
