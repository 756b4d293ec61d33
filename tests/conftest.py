"""Shared fakes for the scanner tests."""

import json

import pytest
import requests
from requests.structures import CaseInsensitiveDict


class FakeClock:
    """Clock whose sleep advances time instead of blocking."""

    def __init__(self, start=1_000.0):
        self.current = start
        self.sleeps = []

    def now(self):
        return self.current

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.current += seconds


def make_response(status_code=200, body=None, headers=None, url="https://api.github.com/x"):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.headers = CaseInsensitiveDict(headers or {})
    if body is None:
        response._content = b""
    elif isinstance(body, (bytes, str)):
        response._content = body.encode("utf-8") if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode("utf-8")
    return response


@pytest.fixture
def clock():
    return FakeClock()
