"""HTTP client used to fetch repository wiki pages."""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WikiResponse:
    """Status and (possibly truncated) body of a wiki page response."""

    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def contains(self, marker: str) -> bool:
        return marker.encode("utf-8") in self.body


class WikiHTTPClient:
    """
    Plain HTTP GET client for github.com wiki pages.

    Redirects are not followed by default: a redirect to the login page is a
    terminal answer in its own right. Bodies are streamed and cut off at
    MAX_RESPONSE_BYTES.
    """

    TIMEOUT_SECONDS = 30
    MAX_RESPONSE_BYTES = 10 * 1024 * 1024  # 10 MiB
    CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        follow_redirects: bool = False,
        timeout: float = TIMEOUT_SECONDS,
        max_response_bytes: int = MAX_RESPONSE_BYTES,
    ):
        self.session = session or requests.Session()
        self.follow_redirects = follow_redirects
        self.timeout = timeout
        self.max_response_bytes = max_response_bytes

    def get(self, url: str, read_body: bool = True) -> WikiResponse:
        """
        GET a URL under this client's redirect and size policy.

        Args:
            url: Absolute URL
            read_body: Whether to read the body (only status is needed otherwise)

        Returns:
            WikiResponse

        Raises:
            requests.RequestException: On transport failure
        """
        logger.debug(f"GET {url}")
        response = self.session.get(
            url,
            allow_redirects=self.follow_redirects,
            timeout=self.timeout,
            stream=True,
        )
        try:
            body = self._read_limited(response) if read_body else b""
            return WikiResponse(status_code=response.status_code, body=body)
        finally:
            response.close()

    def _read_limited(self, response: requests.Response) -> bytes:
        chunks = []
        size = 0
        for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
            remaining = self.max_response_bytes - size
            if remaining <= 0:
                break
            chunk = chunk[:remaining]
            chunks.append(chunk)
            size += len(chunk)
        if size >= self.max_response_bytes:
            logger.debug(f"Response body truncated at {self.max_response_bytes} bytes")
        return b"".join(chunks)
