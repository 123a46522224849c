"""
HTTP request execution for the integration supervisor client.

Wraps a ``requests.Session`` so a single round trip either yields an
``HttpResult`` with the full body or raises ``TransportFailure``.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from .errors import MalformedResponse, TransportFailure

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


@dataclass(frozen=True)
class HttpResult:
    """Outcome of a completed HTTP round trip."""

    status_code: int
    reason: Optional[str]
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


class HttpExecutor:
    """
    Issues single HTTP requests and reads their bodies fully into memory.

    The executor holds no per-request state, so one instance can be shared
    by concurrent callers as long as the underlying session is.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        max_response_bytes: Optional[int] = None,
    ):
        """
        Args:
            session: Session to send requests with (a new one if omitted)
            timeout: Request timeout in seconds, None for the transport default
            max_response_bytes: Largest accepted body, None for no limit
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_response_bytes = max_response_bytes

    def close(self):
        """Close the session if this executor created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def execute(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data=None,
    ) -> HttpResult:
        """
        Perform one request and return its status and body.

        The response is closed before returning, on error paths too.

        Raises:
            TransportFailure: If the request could not be completed
            MalformedResponse: If the body exceeds ``max_response_bytes``
        """
        logger.debug(f"{method} {url}")
        bounded = self.max_response_bytes is not None

        try:
            with self.session.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=self.timeout,
                stream=bounded,
            ) as response:
                body = self._read_body(response) if bounded else response.content
                result = HttpResult(
                    status_code=response.status_code,
                    reason=response.reason,
                    body=body or b"",
                    headers=dict(response.headers or {}),
                )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportFailure(str(e)) from e

        logger.info(f"{method} {url} -> {result.status_code}")
        return result

    def _read_body(self, response: requests.Response) -> bytes:
        chunks = []
        size = 0
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            size += len(chunk)
            if size > self.max_response_bytes:
                raise MalformedResponse(
                    f"Response body exceeds {self.max_response_bytes} bytes"
                )
            chunks.append(chunk)
        return b"".join(chunks)
