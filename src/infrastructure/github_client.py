"""GitHub REST API client with rate limit and pagination support."""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Dict, Any
from urllib.parse import parse_qs, urlparse

import requests

from src.domain.account import AccountKind
from src.domain.repository import Repository

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"GitHub API error {status_code}: {message}")


class NotFoundError(GitHubAPIError):
    """Raised when the requested account or resource does not exist (HTTP 404)."""
    pass


class RateLimitExceeded(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded."""

    def __init__(self, status_code: int, message: str, rate_limit: "RateLimit"):
        super().__init__(status_code, message)
        self.rate_limit = rate_limit


@dataclass(frozen=True)
class RateLimit:
    """Rate limit state reported by the API on a response."""

    remaining: Optional[int]
    reset_at: Optional[int]  # Unix epoch seconds

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    @classmethod
    def from_headers(cls, headers) -> "RateLimit":
        return cls(
            remaining=_int_header(headers, "X-RateLimit-Remaining"),
            reset_at=_int_header(headers, "X-RateLimit-Reset"),
        )


@dataclass(frozen=True)
class RepositoryPage:
    """One page of a repository listing."""

    repositories: List[Repository]
    rate_limit: RateLimit
    next_page: Optional[int]


def _int_header(headers, name: str) -> Optional[int]:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring malformed {name} header: {value!r}")
        return None


def _next_page(response: requests.Response) -> Optional[int]:
    """Extract the page number of the rel="next" link, if there is one."""
    next_link = response.links.get("next")
    if not next_link:
        return None
    pages = parse_qs(urlparse(next_link.get("url", "")).query).get("page")
    if not pages:
        return None
    try:
        return int(pages[0])
    except ValueError:
        return None


class GitHubRESTClient:
    """Client for the GitHub REST API (accounts and repository listings)."""

    # Unauthenticated requests get 60 calls per hour; with GITHUB_TOKEN it is 5,000.
    # Tokens may also expose private repositories, which callers filter out.

    DEFAULT_API_URL = "https://api.github.com"
    PER_PAGE = 100  # GitHub maximum
    TIMEOUT_SECONDS = 30
    USER_AGENT = "github-wiki-scanner"

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub personal access token. If None, uses GITHUB_TOKEN env var.
            base_url: API root. If None, uses GITHUB_API_URL env var or api.github.com.
            session: HTTP session to issue requests with. A new one is created if None.
        """
        if token is None:
            token = os.getenv("GITHUB_TOKEN")
        if base_url is None:
            base_url = os.getenv("GITHUB_API_URL", self.DEFAULT_API_URL)

        self.token = token or None
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.USER_AGENT,
        }

        # Add authorization header if token is available
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Issue a GET request against the API and classify failures.

        Args:
            path: API path starting with "/"
            params: Query parameters

        Returns:
            The successful response

        Raises:
            NotFoundError: On HTTP 404
            RateLimitExceeded: On 403/429 with no remaining quota
            GitHubAPIError: On any other non-2xx status
            requests.RequestException: On transport failure
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} params={params}")
        response = self.session.get(
            url,
            params=params,
            headers=self.headers,
            timeout=self.TIMEOUT_SECONDS,
        )

        if response.ok:
            return response

        message = _error_message(response)
        if response.status_code == 404:
            raise NotFoundError(404, message)

        rate_limit = RateLimit.from_headers(response.headers)
        if response.status_code in (403, 429) and rate_limit.exhausted:
            raise RateLimitExceeded(response.status_code, message, rate_limit)

        raise GitHubAPIError(response.status_code, message)

    def get_organization(self, name: str) -> Dict[str, Any]:
        """Fetch organization metadata. Raises NotFoundError if it does not exist."""
        return self._get(f"/orgs/{name}").json()

    def get_user(self, name: str) -> Dict[str, Any]:
        """Fetch user metadata. Raises NotFoundError if it does not exist."""
        return self._get(f"/users/{name}").json()

    def list_repositories(self, kind: AccountKind, name: str, page: int = 1) -> RepositoryPage:
        """
        Fetch one page of repositories owned by an organization or user.

        Args:
            kind: AccountKind.ORG or AccountKind.USER
            name: Account login
            page: 1-based page number

        Returns:
            RepositoryPage with the page's repositories, the response's rate limit
            state and the next page number (None on the last page)
        """
        if kind is AccountKind.ORG:
            path = f"/orgs/{name}/repos"
        elif kind is AccountKind.USER:
            path = f"/users/{name}/repos"
        else:
            raise ValueError(f"Cannot list repositories for unresolved account kind: {kind}")

        response = self._get(path, params={"per_page": self.PER_PAGE, "page": page})

        repositories = []
        for node in response.json():
            private = bool(node.get("private", False))
            repositories.append(Repository(
                name=node.get("name", ""),
                url=node.get("html_url", ""),
                has_wiki=bool(node.get("has_wiki", False)),
                is_public=not private,
            ))

        return RepositoryPage(
            repositories=repositories,
            rate_limit=RateLimit.from_headers(response.headers),
            next_page=_next_page(response),
        )


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or response.reason or ""
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.reason or ""
