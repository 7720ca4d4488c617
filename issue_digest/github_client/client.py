"""GitHub API client using PyGitHub."""

import logging
import re
from typing import Any

import requests
from github import Auth, Github
from github.GithubException import (
    BadCredentialsException,
    GithubException,
    RateLimitExceededException,
)

from ..config import DigestConfig
from ..exceptions import InvalidRepoFormatError, UpstreamError, UpstreamErrorKind
from .models import IssueRecord, RateLimitStatus

logger = logging.getLogger(__name__)

PER_PAGE = 100

DEFAULT_BASE_URL = "https://api.github.com"

REPO_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


def is_valid_repo_format(repo: str) -> bool:
    """Check that a repository identifier looks like ``owner/name``."""
    return bool(REPO_PATTERN.fullmatch(repo))


def validate_repo_format(repo: str) -> tuple[str, str]:
    """Split a repository identifier into owner and name.

    Raises:
        InvalidRepoFormatError: If the identifier is not ``owner/name``
    """
    if not is_valid_repo_format(repo):
        raise InvalidRepoFormatError(repo)
    owner, name = repo.split("/")
    return owner, name


def _remaining_from_headers(headers: dict[str, Any] | None) -> int | None:
    if not headers:
        return None
    value = next(
        (v for k, v in headers.items() if k.lower() == "x-ratelimit-remaining"), None
    )
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def classify_github_error(
    error: GithubException, repo: str | None = None
) -> UpstreamError:
    """Map a PyGitHub exception to an UpstreamError.

    A 403 is only treated as rate limiting when GitHub reports an exhausted
    quota; otherwise it is a permission problem.
    """
    status = error.status
    remaining = _remaining_from_headers(error.headers)
    target = repo or "GitHub resource"

    if status == 404:
        kind = UpstreamErrorKind.NOT_FOUND
        message = f"{target} not found"
    elif status == 401 or isinstance(error, BadCredentialsException):
        kind = UpstreamErrorKind.UNAUTHORIZED
        message = "GitHub rejected the provided credentials"
    elif (
        isinstance(error, RateLimitExceededException)
        or status == 429
        or (status == 403 and remaining == 0)
    ):
        kind = UpstreamErrorKind.RATE_LIMITED
        message = "GitHub API rate limit exceeded"
    elif status == 403:
        kind = UpstreamErrorKind.FORBIDDEN
        message = f"Access to {target} is forbidden"
    else:
        kind = UpstreamErrorKind.OTHER
        message = f"GitHub request failed with status {status}"

    return UpstreamError(
        message,
        kind=kind,
        status_code=status,
        rate_limit_remaining=remaining,
        repository=repo,
    )


class GitHubClient:
    """GitHub API client for collecting open issues."""

    def __init__(
        self,
        token: str | None = None,
        timeout: int = 30,
        base_url: str = DEFAULT_BASE_URL,
    ):
        """Initialize GitHub client.

        Args:
            token: GitHub token sent with every request. Anonymous access is
                used when None, with a lower rate limit.
            timeout: Request timeout in seconds
            base_url: API root, for GitHub Enterprise servers

        Failed requests are never retried; PyGitHub's default retry policy
        is disabled so errors and rate limits reach the caller as-is.
        """
        self.token = token
        if token:
            self.github = Github(
                auth=Auth.Token(token),
                base_url=base_url,
                per_page=PER_PAGE,
                timeout=timeout,
                retry=None,
            )
        else:
            self.github = Github(
                base_url=base_url, per_page=PER_PAGE, timeout=timeout, retry=None
            )

    @classmethod
    def from_config(cls, config: DigestConfig) -> "GitHubClient":
        """Create a client from the runtime configuration."""
        return cls(token=config.github_token, timeout=config.github_timeout)

    def _get_page(self, owner: str, name: str, page: int) -> list[dict[str, Any]]:
        """Fetch one raw page of the list-issues endpoint."""
        _, data = self.github.requester.requestJsonAndCheck(
            "GET",
            f"/repos/{owner}/{name}/issues",
            parameters={
                "state": "open",
                "per_page": PER_PAGE,
                "page": page,
                "sort": "created",
                "direction": "desc",
            },
        )
        return data or []

    def fetch_open_issues(self, repo: str) -> list[IssueRecord]:
        """Fetch every open issue of a repository.

        Pages are requested one after another until a page holds fewer than
        ``PER_PAGE`` items. Pull requests returned by the issues endpoint
        are dropped. An issue repeated across pages (when a new issue shifts
        the listing mid-scan) is kept once, at its first position.

        Args:
            repo: Repository as owner/name

        Returns:
            List of IssueRecord objects, newest first

        Raises:
            InvalidRepoFormatError: If repo is malformed (no request is made)
            UpstreamError: On any failed request
        """
        owner, name = validate_repo_format(repo)

        records: list[IssueRecord] = []
        seen: set[int] = set()
        page = 1
        while True:
            try:
                items = self._get_page(owner, name, page)
            except GithubException as e:
                error = classify_github_error(e, repo)
                logger.error("Fetching %s page %d failed: %s", repo, page, error)
                raise error from e
            except requests.exceptions.Timeout as e:
                raise UpstreamError(
                    f"GitHub request timed out for {repo}",
                    kind=UpstreamErrorKind.TIMEOUT,
                    repository=repo,
                ) from e
            except requests.exceptions.RequestException as e:
                raise UpstreamError(
                    f"GitHub request failed for {repo}: {e}",
                    kind=UpstreamErrorKind.OTHER,
                    repository=repo,
                ) from e

            for item in items:
                if "pull_request" in item or item["id"] in seen:
                    continue
                seen.add(item["id"])
                records.append(IssueRecord.from_api(item, repo))

            if len(items) < PER_PAGE:
                break
            page += 1
            logger.info("Fetched %d issues from %s so far...", len(records), repo)

        logger.info("Fetched %d open issues from %s", len(records), repo)
        return records

    def get_rate_limit(self) -> RateLimitStatus:
        """Return the current core API quota."""
        try:
            rate = self.github.get_rate_limit().rate
        except GithubException as e:
            raise classify_github_error(e) from e
        except requests.exceptions.RequestException as e:
            raise UpstreamError(
                f"Could not check rate limit: {e}", kind=UpstreamErrorKind.OTHER
            ) from e
        return RateLimitStatus(
            remaining=rate.remaining, limit=rate.limit, reset=rate.reset
        )
