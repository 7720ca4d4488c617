"""Local SQLite cache for collected issues."""

from .manager import IssueCache

__all__ = ["IssueCache"]
