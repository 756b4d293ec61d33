"""Tests for the writable wiki heuristic."""

import io

import pytest
import requests

from src.application.wiki_probe import WikiProbe, is_valid_repository_url
from src.domain.repository import Repository
from src.infrastructure.wiki_http import WikiResponse

REPO = Repository("test-repo", "https://github.com/test/repo", True, True)
WIKI = "https://github.com/test/repo/wiki"
TEST_PAGE = WIKI + "/notrealpage"


class FakeWikiClient:
    def __init__(self, responses):
        self.responses = responses
        self.requested = []

    def get(self, url, read_body=True):
        self.requested.append(url)
        outcome = self.responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _probe(responses):
    client = FakeWikiClient(responses)
    output = io.StringIO()
    return WikiProbe(client, output=output), client, output


def test_repo_without_wiki_is_skipped():
    probe, client, output = _probe({})
    probe.check_wiki(Repository("test-repo", "://invalid-url", False, True))
    assert client.requested == []
    assert output.getvalue() == ""


def test_invalid_url_produces_no_output():
    probe, client, output = _probe({})
    probe.check_wiki(Repository("test-repo", "://invalid-url", True, True))
    assert client.requested == []
    assert output.getvalue() == ""


def test_first_page_marker_reports_once_without_second_request():
    body = b"<html><a>Create the first page</a></html>"
    probe, client, output = _probe({WIKI: WikiResponse(200, body)})
    probe.check_wiki(REPO)

    assert output.getvalue() == f"Vulnerable [firstpage]: test-repo - {WIKI}\n"
    assert client.requested == [WIKI]


def test_nonexistent_page_returning_200_is_writeable():
    probe, client, output = _probe({
        WIKI: WikiResponse(200, b"<html>Home</html>"),
        TEST_PAGE: WikiResponse(200, b""),
    })
    probe.check_wiki(REPO)

    assert output.getvalue() == f"Vulnerable [writeable]: test-repo - {TEST_PAGE}\n"
    assert client.requested == [WIKI, TEST_PAGE]


def test_redirect_on_nonexistent_page_is_not_reported():
    probe, _, output = _probe({
        WIKI: WikiResponse(200, b"<html>Home</html>"),
        TEST_PAGE: WikiResponse(302, b""),
    })
    probe.check_wiki(REPO)
    assert output.getvalue() == ""


@pytest.mark.parametrize("status", [301, 302, 404])
def test_wiki_home_not_200_stops(status):
    probe, client, output = _probe({WIKI: WikiResponse(status, b"Create the first page")})
    probe.check_wiki(REPO)
    assert output.getvalue() == ""
    assert client.requested == [WIKI]


def test_transport_error_on_wiki_home_is_not_a_finding():
    probe, _, output = _probe({WIKI: requests.ConnectionError("down")})
    probe.check_wiki(REPO)
    assert output.getvalue() == ""


def test_transport_error_on_test_page_is_not_a_finding():
    probe, _, output = _probe({
        WIKI: WikiResponse(200, b"Home"),
        TEST_PAGE: requests.Timeout("slow"),
    })
    probe.check_wiki(REPO)
    assert output.getvalue() == ""


def test_findings_default_to_stdout(capsys):
    probe = WikiProbe(FakeWikiClient({WIKI: WikiResponse(200, b"Create the first page")}))
    probe.check_wiki(REPO)
    captured = capsys.readouterr()
    assert captured.out == f"Vulnerable [firstpage]: test-repo - {WIKI}\n"
    assert captured.err == ""


@pytest.mark.parametrize("url, valid", [
    ("https://github.com/a/b", True),
    ("http://ghe.local/a/b", True),
    ("://invalid-url", False),
    ("github.com/a/b", False),
    ("https://[::1/a", False),
    ("", False),
])
def test_is_valid_repository_url(url, valid):
    assert is_valid_repository_url(url) is valid
