"""In-process cache of facet lookups."""

import logging
from typing import Any

from radiobrowser.errors import InvalidFacetError

logger = logging.getLogger(__name__)

FACETS = ("tags", "countries", "languages", "codecs", "states")


def check_facet(name: object) -> str:
    """Return ``name`` if it is a known facet.

    Raises:
        InvalidFacetError: If the name is not one of FACETS.
    """
    if not isinstance(name, str) or name not in FACETS:
        raise InvalidFacetError(name)
    return name


class FacetCache:
    """Facet name to fetched value, filled lazily.

    Entries are never evicted or refreshed; the cache lives as long as
    the client that owns it. Not thread-safe on its own: the owning
    client serializes access.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: dict[str, Any] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def names(self) -> list[str]:
        """Return the names of cached facets."""
        return list(self._entries)

    def get(self, name: str) -> Any | None:
        """Return the cached value, or None on a miss."""
        return self._entries.get(name)

    def put(self, name: str, value: Any) -> Any:
        """Store ``value`` unless the facet is already cached.

        Returns:
            The value now held for ``name``.

        Raises:
            InvalidFacetError: If the name is not a known facet.
        """
        check_facet(name)
        if name in self._entries:
            return self._entries[name]
        logger.debug("Caching facet %s", name)
        self._entries[name] = value
        return value
