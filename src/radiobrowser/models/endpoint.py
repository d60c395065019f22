"""API server endpoint model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from radiobrowser.core.discovery import SrvRecord

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True, slots=True)
class ServerEndpoint:
    """One Radio Browser API server.

    Attributes:
        scheme: "http" or "https".
        host: Server hostname.
        port: TCP port.
    """

    scheme: str
    host: str
    port: int

    @property
    def base_url(self) -> str:
        """Return the base URL, omitting the scheme's default port."""
        if _DEFAULT_PORTS.get(self.scheme) == self.port:
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"

    def url_for(self, path: str) -> str:
        """Return the absolute URL of ``path`` on this server."""
        return f"{self.base_url}/{path.lstrip('/')}"

    @classmethod
    def from_srv(cls, record: SrvRecord) -> ServerEndpoint:
        """Create an endpoint from a DNS SRV record.

        Port 443 means https, anything else plain http.
        """
        scheme = "https" if record.port == 443 else "http"
        return cls(scheme=scheme, host=record.host, port=record.port)

    @classmethod
    def from_url(cls, url: str) -> ServerEndpoint:
        """Parse an ``http(s)://host[:port]`` URL.

        Raises:
            ValueError: If the scheme is not http(s) or the host is missing.
        """
        parts = urlsplit(url)
        if parts.scheme not in _DEFAULT_PORTS:
            raise ValueError(f"Unsupported scheme in server URL: {url!r}")
        if not parts.hostname:
            raise ValueError(f"Missing host in server URL: {url!r}")
        port = parts.port or _DEFAULT_PORTS[parts.scheme]
        return cls(scheme=parts.scheme, host=parts.hostname, port=port)

    def __str__(self) -> str:
        return self.base_url
