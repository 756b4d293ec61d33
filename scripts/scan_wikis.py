#!/usr/bin/env python3
"""Script to find publicly writable wikis across a GitHub account's repositories."""

import argparse
import logging
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.infrastructure.github_client import GitHubRESTClient
from src.infrastructure.wiki_http import WikiHTTPClient
from src.application.account_resolver import AccountResolver
from src.application.repository_lister import RepositoryLister
from src.application.wiki_probe import WikiProbe
from src.application.scanner_service import WikiScannerService

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr
)

logger = logging.getLogger(__name__)


def build_scanner() -> WikiScannerService:
    """Wire the API client, wiki client and services together."""
    github_client = GitHubRESTClient()
    if not github_client.token:
        logger.warning("GITHUB_TOKEN not found. Using unauthenticated requests (limited rate).")

    return WikiScannerService(
        resolver=AccountResolver(github_client),
        lister=RepositoryLister(github_client),
        probe=WikiProbe(WikiHTTPClient()),
    )


def main(argv=None):
    """Scan the account given as argument, or one account per stdin line."""
    parser = argparse.ArgumentParser(description='Find publicly writable GitHub repository wikis.')
    parser.add_argument(
        'account', nargs='?',
        help='Account to scan, optionally prefixed with "org:" or "user:". '
             'Reads newline separated accounts from stdin if omitted.'
    )
    args = parser.parse_args(argv)

    try:
        scanner = build_scanner()

        if args.account is not None:
            scanner.scan_account(args.account)
            return 0

        try:
            scanner.scan_inputs(sys.stdin)
        except OSError as e:
            logger.error(f"Error reading from stdin: {e}")
            return 1
        return 0

    except KeyboardInterrupt:
        logger.warning("Scan interrupted")
        return 130
    except Exception as e:
        logger.error(f"Scan failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
