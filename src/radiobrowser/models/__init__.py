"""Data models for API servers and search requests."""

from radiobrowser.models.endpoint import ServerEndpoint
from radiobrowser.models.search import DEFAULT_LIMIT, SearchParams

__all__ = [
    "DEFAULT_LIMIT",
    "SearchParams",
    "ServerEndpoint",
]
