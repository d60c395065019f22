"""HTTP transport for the Radio Browser client.

The client talks to servers through the Transport interface so tests and
applications can swap the network layer. UrllibTransport is the default
and runs blocking urllib requests in the event loop's executor.
"""

from __future__ import annotations

import asyncio
import http.client
import json
import logging
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from radiobrowser.core.config import DEFAULT_REQUEST_TIMEOUT
from radiobrowser.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """A decoded HTTP response.

    Attributes:
        status: HTTP status code.
        body: Decoded JSON body (None if the body was empty).
    """

    status: int
    body: Any = None

    @property
    def is_success(self) -> bool:
        """Return True for 2xx statuses."""
        return 200 <= self.status < 300


class Transport(ABC):
    """Abstract HTTP transport.

    Implementations raise TransportError on network failures and
    DecodeError on bodies that are not JSON. HTTP error statuses are
    returned, not raised.
    """

    @abstractmethod
    async def get(self, url: str, user_agent: str) -> HttpResponse:
        """Send a GET request without a body."""

    @abstractmethod
    async def post(self, url: str, user_agent: str, json_body: Any) -> HttpResponse:
        """Send a POST request with a JSON body."""


class UrllibTransport(Transport):
    """Transport built on urllib.request.

    Example:
        transport = UrllibTransport(timeout=5.0)
        response = await transport.get(url, "my-client/1.0")
    """

    def __init__(self, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> None:
        """Initialize the transport.

        Args:
            timeout: Socket timeout in seconds.
        """
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        """Return the socket timeout in seconds."""
        return self._timeout

    async def get(self, url: str, user_agent: str) -> HttpResponse:
        """Send a GET request."""
        request = urllib.request.Request(
            url,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            method="GET",
        )
        return await self._send(request)

    async def post(self, url: str, user_agent: str, json_body: Any) -> HttpResponse:
        """Send a POST request with a JSON body."""
        request = urllib.request.Request(
            url,
            data=json.dumps(json_body).encode("utf-8"),
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            method="POST",
        )
        return await self._send(request)

    async def _send(self, request: urllib.request.Request) -> HttpResponse:
        """Run the blocking request in the executor."""
        loop = asyncio.get_running_loop()
        status, raw = await loop.run_in_executor(None, self._fetch, request)
        try:
            body = _decode(raw, request.full_url)
        except DecodeError:
            if 200 <= status < 300:
                raise
            # Error pages are often HTML; keep them as text
            body = raw.decode("utf-8", errors="replace")
        return HttpResponse(status=status, body=body)

    def _fetch(self, request: urllib.request.Request) -> tuple[int, bytes]:
        """Perform the request (blocking).

        Returns:
            Tuple of (status, raw body).

        Raises:
            TransportError: On connection failures, malformed responses and timeouts.
        """
        url = request.full_url
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                return response.status, response.read()
        except urllib.error.HTTPError as e:
            # Error statuses still carry a body; let the caller decide
            try:
                return e.code, e.read()
            except (http.client.HTTPException, OSError) as read_error:
                logger.debug("Reading error body from %s failed: %s", url, read_error)
                raise TransportError(f"Request to {url} failed: {read_error}", url) from read_error
        except (urllib.error.URLError, TimeoutError, OSError, http.client.HTTPException) as e:
            logger.debug("Request to %s failed: %s", url, e)
            raise TransportError(f"Request to {url} failed: {e}", url) from e


def _decode(raw: bytes, url: str) -> Any:
    """Decode a JSON body.

    Raises:
        DecodeError: If the body is not valid UTF-8 JSON.
    """
    if not raw.strip():
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Invalid JSON from {url}: {e}", url) from e
