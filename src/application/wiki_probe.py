"""Heuristic check for publicly writable repository wikis."""

import logging
import sys
from typing import Optional, TextIO
from urllib.parse import urlparse

import requests

from src.domain.repository import Repository
from src.infrastructure.wiki_http import WikiHTTPClient

logger = logging.getLogger(__name__)

FIRST_PAGE_MARKER = "Create the first page"
TEST_PAGE_PATH = "/notrealpage"


def is_valid_repository_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class WikiProbe:
    """
    Classifies a repository wiki as publicly writable or not.

    A wiki counts as writable when either
      1. its home page offers "Create the first page" (no pages yet), or
      2. a page that does not exist answers 200 instead of redirecting to login.

    Findings are written as one line each to the output stream; anything that
    goes wrong is logged and treated as "not writable".
    """

    def __init__(self, http_client: WikiHTTPClient, output: Optional[TextIO] = None):
        self.http_client = http_client
        self.output = output

    def check_wiki(self, repo: Repository) -> None:
        if not repo.has_wiki:
            return

        if not is_valid_repository_url(repo.url):
            logger.error(f"Invalid repository URL {repo.url!r} for {repo.name}")
            return

        wiki_url = repo.wiki_url
        try:
            response = self.http_client.get(wiki_url)
        except requests.RequestException as e:
            logger.error(f"Error accessing wiki for {repo.name}: {e}")
            return

        if not response.ok:
            return

        if response.contains(FIRST_PAGE_MARKER):
            self._report("firstpage", repo.name, wiki_url)
            return

        test_url = wiki_url + TEST_PAGE_PATH
        try:
            test_response = self.http_client.get(test_url, read_body=False)
        except requests.RequestException as e:
            logger.error(f"Error testing wiki writeability for {repo.name}: {e}")
            return

        if test_response.ok:
            self._report("writeable", repo.name, test_url)

    def _report(self, classification: str, name: str, url: str) -> None:
        output = self.output or sys.stdout
        print(f"Vulnerable [{classification}]: {name} - {url}", file=output, flush=True)
