"""Resolves free-form account input to an organization or user reference."""

import logging

from src.domain.account import AccountKind, AccountReference, parse_account_input
from src.infrastructure.github_client import GitHubRESTClient, NotFoundError

logger = logging.getLogger(__name__)


class AccountNotFoundError(Exception):
    """Raised when a name is neither an organization nor a user."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"account '{name}' not found")


class AccountResolver:
    """Turns "org:NAME", "user:NAME" or a bare "NAME" into an AccountReference."""

    def __init__(self, github_client: GitHubRESTClient):
        self.github_client = github_client

    def resolve(self, account_input: str) -> AccountReference:
        """
        Resolve account input, probing the API when no prefix is given.

        A bare name is looked up as an organization first and as a user only
        when the organization lookup answers 404. Any other failure (network,
        auth, rate limit) propagates unchanged.

        Raises:
            AccountNotFoundError: If neither lookup finds the account
        """
        kind, name = parse_account_input(account_input)
        if kind is not AccountKind.UNKNOWN:
            return AccountReference(kind, name)

        return AccountReference(self._detect_kind(name), name)

    def _detect_kind(self, name: str) -> AccountKind:
        try:
            self.github_client.get_organization(name)
            logger.debug(f"'{name}' is an organization")
            return AccountKind.ORG
        except NotFoundError:
            pass

        try:
            self.github_client.get_user(name)
        except NotFoundError:
            raise AccountNotFoundError(name) from None
        logger.debug(f"'{name}' is a user")
        return AccountKind.USER
