"""Client for the Radio Browser API (https://api.radio-browser.info/).

Discovers the API servers via DNS SRV records, spreads requests across
them at random and caches facet lookups for the life of the client.

Example:
    From asyncio code:

        client = await RadioBrowserClient.create()
        stations = await client.search(name="jazz", countrycode="US")

    From synchronous code:

        with RadioBrowserWorker() as worker:
            station = worker.play("960e57c5-0601-11e8-ae97-52543be04c81")
"""

__version__ = "0.1.0"

from radiobrowser.api.client import RadioBrowserClient  # noqa: E402
from radiobrowser.core.config import ClientConfig  # noqa: E402
from radiobrowser.core.worker import RadioBrowserWorker  # noqa: E402
from radiobrowser.errors import (  # noqa: E402
    DecodeError,
    HttpStatusError,
    InvalidFacetError,
    RadioBrowserError,
    TransportError,
    ValidationError,
    WorkerNotRunningError,
)
from radiobrowser.models import SearchParams, ServerEndpoint  # noqa: E402

__all__ = [
    "ClientConfig",
    "DecodeError",
    "HttpStatusError",
    "InvalidFacetError",
    "RadioBrowserClient",
    "RadioBrowserError",
    "RadioBrowserWorker",
    "SearchParams",
    "ServerEndpoint",
    "TransportError",
    "ValidationError",
    "WorkerNotRunningError",
    "__version__",
]
