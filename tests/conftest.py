"""Shared fixtures: an in-memory stand-in for the GitHub REST API."""

from typing import Any, Dict, List, Tuple

import httpx
import pytest

from tools.contributor_stats.fetcher import GitHubClient

BASE_URL = "https://api.github.com"


class FakeGitHub:
    """
    Serve canned GitHub responses through an httpx.MockTransport.

    Paginated resources are registered as a list of pages; when there is
    more than one page a Link header pointing at the last page is sent.
    """

    def __init__(self):
        self.paginated: Dict[str, List[List[Dict[str, Any]]]] = {}
        self.records: Dict[str, Dict[str, Any]] = {}
        self.empty: List[str] = []
        self.failures: Dict[Tuple[str, Any], int] = {}
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def add_pages(self, path: str, *pages: List[Dict[str, Any]]) -> None:
        self.paginated[path] = list(pages)

    def add_record(self, path: str, record: Dict[str, Any]) -> None:
        self.records[path] = record

    def add_empty(self, path: str) -> None:
        """Answer 204 No Content, as GitHub does for an empty repository."""
        self.empty.append(path)

    def fail(self, path: str, page: Any = None, status: int = 500) -> None:
        self.failures[(path, page)] = status

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        page = request.url.params.get("page")

        status = self.failures.get((path, int(page) if page else None))
        if status:
            return httpx.Response(status, json={"message": "failure"})

        if path in self.empty:
            return httpx.Response(204)

        if path in self.paginated:
            pages = self.paginated[path]
            headers = {}
            if len(pages) > 1:
                headers["link"] = (
                    f'<{BASE_URL}{path}?per_page=100&page=2>; rel="next", '
                    f'<{BASE_URL}{path}?per_page=100&page={len(pages)}>; rel="last"'
                )
            body = pages[int(page) - 1] if page else pages[0]
            return httpx.Response(200, json=body, headers=headers)

        if path in self.records:
            return httpx.Response(200, json=self.records[path])

        return httpx.Response(404, json={"message": "Not Found"})

    def requested(self, path: str) -> List[httpx.Request]:
        """Requests made for one path, in order."""
        return [r for r in self.requests if r.url.path == path]

    def pages_requested(self, path: str) -> List[int]:
        """Page numbers requested for one path, in order."""
        return [
            int(r.url.params["page"])
            for r in self.requested(path)
            if "page" in r.url.params
        ]


class RecordingProgress:
    """Progress hooks that remember every tick."""

    def __init__(self):
        self.events: List[Any] = []

    def start(self, total: int) -> None:
        self.events.append(("start", total))

    def advance(self) -> None:
        self.events.append("advance")

    def finish(self) -> None:
        self.events.append("finish")


@pytest.fixture
def github():
    """Empty fake GitHub service."""
    return FakeGitHub()


@pytest.fixture
def client(github):
    """GitHubClient talking to the fake service."""
    return GitHubClient(user="me", password="secret", transport=github.transport)


@pytest.fixture
def progress():
    return RecordingProgress()
