"""Exception hierarchy for the Radio Browser client.

Every caller-facing operation raises a subclass of RadioBrowserError,
so applications can catch a single type.
"""


class RadioBrowserError(Exception):
    """Base class for all Radio Browser client errors."""


class ValidationError(RadioBrowserError, ValueError):
    """Search parameters were rejected before dispatch."""


class InvalidFacetError(RadioBrowserError, ValueError):
    """An unknown facet name was requested."""

    def __init__(self, facet: object) -> None:
        """Initialize with the rejected facet name.

        Args:
            facet: The facet name that is not in the known facet set.
        """
        super().__init__(f"invalid facet: {facet!r}")
        self.facet = facet


class TransportError(RadioBrowserError, ConnectionError):
    """A request to an API server failed at the network level."""

    def __init__(self, message: str, url: str = "") -> None:
        """Initialize the error.

        Args:
            message: Human-readable failure description.
            url: URL of the request that failed.
        """
        super().__init__(message)
        self.url = url


class DecodeError(TransportError):
    """An API server answered with a body that is not the expected JSON."""


class HttpStatusError(TransportError):
    """An API server answered with a non-2xx status."""

    def __init__(self, status: int, url: str = "") -> None:
        """Initialize the error.

        Args:
            status: HTTP status code returned by the server.
            url: URL of the request.
        """
        super().__init__(f"HTTP {status} from {url}", url)
        self.status = status


class WorkerNotRunningError(RadioBrowserError):
    """A blocking call was made on a worker that is not running."""
