"""Radio Browser REST API client and HTTP transport."""

from radiobrowser.api.client import RadioBrowserClient
from radiobrowser.api.transport import HttpResponse, Transport, UrllibTransport

__all__ = [
    "HttpResponse",
    "RadioBrowserClient",
    "Transport",
    "UrllibTransport",
]
