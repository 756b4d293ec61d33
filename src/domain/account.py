"""Domain entities for GitHub accounts (organizations and users)."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class AccountKind(str, Enum):
    """Kind of GitHub account being scanned."""
    
    ORG = "org"
    USER = "user"
    UNKNOWN = "unknown"


ORG_PREFIX = "org:"
USER_PREFIX = "user:"


@dataclass(frozen=True)
class AccountReference:
    """An account name paired with the kind of account it names."""
    
    kind: AccountKind
    name: str
    
    @property
    def is_resolved(self) -> bool:
        return self.kind is not AccountKind.UNKNOWN


def parse_account_input(value: str) -> Tuple[AccountKind, str]:
    """
    Split an account input into its kind and bare name.
    
    Only a literal leading ``org:`` or ``user:`` is recognised. Any further
    colons stay part of the name, so ``"org:a:b"`` yields ``(ORG, "a:b")``.
    
    Args:
        value: Raw account input, e.g. ``"org:octo"`` or ``"octocat"``
        
    Returns:
        Tuple of (account kind, account name)
    """
    if value.startswith(ORG_PREFIX):
        return AccountKind.ORG, value[len(ORG_PREFIX):]
    if value.startswith(USER_PREFIX):
        return AccountKind.USER, value[len(USER_PREFIX):]
    return AccountKind.UNKNOWN, value
