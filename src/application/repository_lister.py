"""Application service for listing an account's public repositories."""

import logging
from typing import List, Optional

from src.domain.account import AccountReference
from src.domain.repository import Repository
from src.infrastructure.clock import SystemClock
from src.infrastructure.github_client import GitHubRESTClient, RateLimit, RateLimitExceeded

logger = logging.getLogger(__name__)


class RepositoryLister:
    """Pages through an account's repositories, waiting out exhausted rate limits."""

    def __init__(self, github_client: GitHubRESTClient, clock: Optional[SystemClock] = None):
        """
        Initialize repository lister.

        Args:
            github_client: GitHub API client
            clock: Time source used for rate limit waits
        """
        self.github_client = github_client
        self.clock = clock or SystemClock()

    def list_public_repositories(self, account: AccountReference) -> List[Repository]:
        """
        Fetch every public repository of a resolved account.

        Pages of up to 100 repositories are requested until the API reports no
        next page. Private repositories (visible with a scoped token) are dropped.
        When the remaining quota hits zero the lister sleeps until the reset time;
        a request rejected for rate limiting is then retried as-is. Any other
        error aborts the listing.

        Args:
            account: Resolved organization or user reference

        Returns:
            Public repositories in API order
        """
        if not account.is_resolved:
            raise ValueError(f"Account '{account.name}' must be resolved before listing")

        repositories: List[Repository] = []
        page = 1

        while True:
            try:
                result = self.github_client.list_repositories(account.kind, account.name, page=page)
            except RateLimitExceeded as e:
                self._wait_for_reset(e.rate_limit)
                continue

            public = [repo for repo in result.repositories if repo.is_public]
            repositories.extend(public)
            logger.debug(
                f"Page {page} for {account.kind.value}:{account.name}: "
                f"{len(public)} public of {len(result.repositories)}"
            )

            if result.rate_limit.exhausted:
                self._wait_for_reset(result.rate_limit)

            if result.next_page is None:
                break
            page = result.next_page

        logger.info(f"Found {len(repositories)} public repositories for {account.name}")
        return repositories

    def _wait_for_reset(self, rate_limit: RateLimit) -> None:
        if rate_limit.reset_at is None:
            return
        wait_seconds = rate_limit.reset_at - self.clock.now()
        if wait_seconds > 0:
            logger.warning(f"Rate limit reached. Waiting {int(wait_seconds)} seconds...")
            self.clock.sleep(wait_seconds)
