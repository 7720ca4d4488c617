"""Tests for upstream failures as PyGitHub reports them over HTTP."""

import json
import threading
import time
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import pytest

from issue_digest.exceptions import UpstreamError, UpstreamErrorKind
from issue_digest.github_client.client import GitHubClient


class FakeGitHub:
    """Local HTTP server answering every request with one canned response."""

    def __init__(self) -> None:
        self.status = 200
        self.headers: dict[str, str] = {}
        self.body: Any = []
        self.paths: list[str] = []

        fake = self

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                fake.paths.append(self.path)
                payload = json.dumps(fake.body).encode()
                self.send_response(fake.status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(payload)))
                for name, value in fake.headers.items():
                    self.send_header(name, value)
                self.end_headers()
                self.wfile.write(payload)

            def log_message(self, format: str, *args: Any) -> None:
                pass

        self.server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        self.base_url = f"http://127.0.0.1:{self.server.server_address[1]}"

    def client(self) -> GitHubClient:
        return GitHubClient(token="test_token", timeout=5, base_url=self.base_url)


@pytest.fixture
def fake_github() -> Iterator[FakeGitHub]:
    fake = FakeGitHub()
    thread = threading.Thread(target=fake.server.serve_forever, daemon=True)
    thread.start()
    yield fake
    fake.server.shutdown()
    fake.server.server_close()


def test_exhausted_quota_is_rate_limited(fake_github: FakeGitHub) -> None:
    """A 403 with no quota left is reported once, as rate limiting."""
    fake_github.status = 403
    fake_github.headers = {
        "X-RateLimit-Limit": "60",
        "X-RateLimit-Remaining": "0",
        "X-RateLimit-Reset": str(int(time.time()) + 3600),
    }
    fake_github.body = {"message": "API rate limit exceeded for 127.0.0.1."}

    with pytest.raises(UpstreamError) as exc_info:
        fake_github.client().fetch_open_issues("octo/demo")

    assert exc_info.value.kind == UpstreamErrorKind.RATE_LIMITED
    assert exc_info.value.status_code == 403
    assert exc_info.value.rate_limit_remaining == 0
    assert len(fake_github.paths) == 1


def test_forbidden_with_quota_left(fake_github: FakeGitHub) -> None:
    fake_github.status = 403
    fake_github.headers = {"X-RateLimit-Remaining": "4999"}
    fake_github.body = {"message": "Resource not accessible by integration"}

    with pytest.raises(UpstreamError) as exc_info:
        fake_github.client().fetch_open_issues("octo/demo")

    assert exc_info.value.kind == UpstreamErrorKind.FORBIDDEN
    assert exc_info.value.rate_limit_remaining == 4999
    assert len(fake_github.paths) == 1


def test_server_error_is_not_retried(fake_github: FakeGitHub) -> None:
    fake_github.status = 502
    fake_github.body = {"message": "Server Error"}

    with pytest.raises(UpstreamError) as exc_info:
        fake_github.client().fetch_open_issues("octo/demo")

    assert exc_info.value.kind == UpstreamErrorKind.OTHER
    assert exc_info.value.status_code == 502
    assert len(fake_github.paths) == 1
    assert fake_github.paths[0].startswith("/repos/octo/demo/issues?")


def test_single_page_over_http(fake_github: FakeGitHub) -> None:
    fake_github.body = [
        {
            "id": 1001,
            "number": 1,
            "title": "Crash on start",
            "body": None,
            "html_url": "https://github.com/octo/demo/issues/1",
            "state": "open",
            "created_at": "2024-01-01T12:00:00Z",
            "updated_at": "2024-01-01T12:00:00Z",
            "user": {"login": "octocat"},
            "labels": [],
            "assignees": [],
            "comments": 0,
        }
    ]

    issues = fake_github.client().fetch_open_issues("octo/demo")

    assert [issue.title for issue in issues] == ["Crash on start"]
    assert len(fake_github.paths) == 1
