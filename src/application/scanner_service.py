"""Application service that scans GitHub accounts for writable wikis."""

import logging
from typing import Iterable

import requests

from src.application.account_resolver import AccountNotFoundError, AccountResolver
from src.application.repository_lister import RepositoryLister
from src.application.wiki_probe import WikiProbe
from src.infrastructure.github_client import GitHubAPIError

logger = logging.getLogger(__name__)


class WikiScannerService:
    """Runs resolver, lister and wiki probe for each account input in turn."""

    def __init__(
        self,
        resolver: AccountResolver,
        lister: RepositoryLister,
        probe: WikiProbe
    ):
        self.resolver = resolver
        self.lister = lister
        self.probe = probe

    def scan_account(self, account_input: str) -> bool:
        """
        Scan every public repository of one account.

        Empty input, unknown accounts and API failures are logged and the
        account is skipped.

        Returns:
            True if the account's repositories were listed and probed
        """
        if not account_input:
            logger.error("Account name cannot be empty")
            return False

        try:
            account = self.resolver.resolve(account_input)
        except AccountNotFoundError as e:
            logger.error(f"Error detecting account type: {e}")
            return False
        except (GitHubAPIError, requests.RequestException) as e:
            logger.error(f"Error detecting account type for '{account_input}': {e}")
            return False

        try:
            repositories = self.lister.list_public_repositories(account)
        except (GitHubAPIError, requests.RequestException) as e:
            logger.error(f"Error fetching repositories for '{account.name}': {e}")
            return False

        for repo in repositories:
            self.probe.check_wiki(repo)
        return True

    def scan_inputs(self, lines: Iterable[str]) -> int:
        """
        Scan one account per line, trimming surrounding whitespace.

        Errors raised while reading lines (e.g. OSError from stdin) propagate.

        Returns:
            Number of accounts scanned successfully
        """
        scanned = 0
        for line in lines:
            if self.scan_account(line.strip()):
                scanned += 1
        return scanned
