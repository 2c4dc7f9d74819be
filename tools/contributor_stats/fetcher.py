"""GitHub REST access: endpoints, pagination and repository listing."""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import httpx

from shared.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 2.0
DEFAULT_PER_PAGE = 100

LAST_PAGE_PATTERN = re.compile(r'[?&]page=(\d+)[^>]*>;\s*rel="last"')


@dataclass
class Endpoints:
    """Endpoint templates for the three GitHub resources used by a run."""

    base_url: str = DEFAULT_BASE_URL
    org_repos: str = "/orgs/{organization}/repos"
    repo_contributors: str = "/repos/{repository}/contributors"
    user: str = "/users/{login}"

    def build(self, template: str, **params: str) -> str:
        """
        Build a request URI from a template.

        Args:
            template: Path template, e.g. "/users/{login}"
            **params: Values for the template placeholders

        Returns:
            Absolute URI
        """
        return self.base_url.rstrip("/") + template.format(**params)


class ProgressHooks:
    """
    Progress callbacks used by long-running operations.

    The base class ignores every tick; the CLI plugs in a rich progress bar.
    """

    def start(self, total: int) -> None:
        pass

    def advance(self) -> None:
        pass

    def finish(self) -> None:
        pass


def parse_last_page(link_header: Optional[str]) -> int:
    """
    Extract the last page number from a Link header.

    Args:
        link_header: Raw value of the Link response header

    Returns:
        Page number of the rel="last" link, or 1 if there is none
    """
    if not link_header:
        return 1

    match = LAST_PAGE_PATTERN.search(link_header)
    if not match:
        return 1

    return int(match.group(1))


def is_empty(response: httpx.Response) -> bool:
    """Check whether a response carries no content."""
    return response.status_code == 204 or not response.content.strip()


class GitHubClient:
    """
    Sequential GitHub API v3 (REST) client with Basic authentication.

    Every request opens its own httpx client; nothing is cached and
    failed requests are not retried.
    """

    def __init__(
        self,
        user: str,
        password: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        endpoints: Optional[Endpoints] = None,
        per_page: int = DEFAULT_PER_PAGE,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            user: Account used for authenticated requests
            password: Password or token for the account
            timeout: Timeout in seconds for each individual request
            endpoints: Endpoint templates (GitHub defaults if None)
            per_page: Page size requested from paginated endpoints
            transport: Custom httpx transport (used by tests)
        """
        self.auth = httpx.BasicAuth(user, password)
        self.timeout = timeout
        self.endpoints = endpoints or Endpoints()
        self.per_page = per_page
        self.transport = transport

        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "github-contributor-stats",
        }

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        logger.debug(f"GET {url} {params or ''}")

        with httpx.Client(
            headers=self.headers,
            auth=self.auth,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            return client.get(url, params=params)

    def fetch_all_pages(
        self,
        template: str,
        progress: Optional[ProgressHooks] = None,
        **path_params: str,
    ) -> List[Dict[str, Any]]:
        """
        Fetch every page of a paginated endpoint.

        The first request only discovers the page count; pages 1..N are
        then requested in order.

        Args:
            template: Endpoint template
            progress: Optional progress hooks, advanced once per page
            **path_params: Values for the template placeholders

        Returns:
            Records of all pages, in page order

        Raises:
            httpx.HTTPStatusError: If a page after the first request fails
            ValueError: If a page body is not a JSON array
        """
        url = self.endpoints.build(template, **path_params)
        progress = progress or ProgressHooks()

        response = self._get(url, params={"per_page": self.per_page})
        if not response.is_success:
            logger.warning(f"Nothing fetched from {url}: HTTP {response.status_code}")
            return []

        # Empty repositories answer 204 without a body
        if is_empty(response):
            logger.debug(f"{url}: no content")
            return []

        total_pages = parse_last_page(response.headers.get("link"))
        logger.debug(f"{url}: {total_pages} page(s)")

        records: List[Dict[str, Any]] = []
        progress.start(total_pages)

        for page in range(1, total_pages + 1):
            page_response = self._get(url, params={"per_page": self.per_page, "page": page})
            page_response.raise_for_status()
            progress.advance()

            if is_empty(page_response):
                continue

            body = page_response.json()
            if not isinstance(body, list):
                raise ValueError(
                    f"Expected a JSON array from {url} (page {page}), got {type(body).__name__}"
                )
            records.extend(body)

        progress.finish()
        return records

    def fetch_one(self, template: str, **path_params: str) -> Dict[str, Any]:
        """
        Fetch a single record.

        Args:
            template: Endpoint template
            **path_params: Values for the template placeholders

        Returns:
            Decoded record, or an empty dict if the request failed
        """
        url = self.endpoints.build(template, **path_params)

        response = self._get(url)
        if not response.is_success:
            logger.warning(f"Nothing fetched from {url}: HTTP {response.status_code}")
            return {}

        if is_empty(response):
            return {}

        return response.json()

    def list_repositories(
        self,
        organization: str,
        exclude_repositories: Iterable[str] = (),
        progress: Optional[ProgressHooks] = None,
    ) -> List[str]:
        """
        List the public, active, non-fork repositories of an organization.

        Args:
            organization: Organization login
            exclude_repositories: Full names to leave out
            progress: Optional progress hooks, advanced once per page

        Returns:
            Repository full names in the order GitHub returns them
        """
        logger.info(f"Listing repositories of {organization}")

        excluded = set(exclude_repositories)
        records = self.fetch_all_pages(
            self.endpoints.org_repos, progress=progress, organization=organization
        )

        repositories = []
        for record in records:
            if record.get("archived") or record.get("private") or record.get("fork"):
                continue
            if record["full_name"] in excluded:
                logger.debug(f"Skipping excluded repository {record['full_name']}")
                continue
            repositories.append(record["full_name"])

        logger.info(f"{len(repositories)} of {len(records)} repositories kept")
        return repositories

    def get_contributors(self, repository: str) -> List[Dict[str, Any]]:
        """Get all contributor records of a repository ("owner/repo")."""
        return self.fetch_all_pages(self.endpoints.repo_contributors, repository=repository)

    def get_user(self, login: str) -> Dict[str, Any]:
        """Get the public profile of a user."""
        return self.fetch_one(self.endpoints.user, login=login)
