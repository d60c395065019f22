"""Core components behind the API client.

Classes and functions:
    ClientConfig: Settings with environment overrides.
    discover_servers: DNS SRV discovery with a fallback server.
    pick_server: Uniform random server selection.
    validate_search_params: Search parameter checks.
    FacetCache: Lazily filled facet cache.

RadioBrowserWorker lives in radiobrowser.core.worker; it depends on the
API client and is not imported here.
"""

from radiobrowser.core.cache import FACETS, FacetCache, check_facet
from radiobrowser.core.config import ClientConfig
from radiobrowser.core.discovery import FALLBACK_SERVER, SrvRecord, discover_servers, lookup_srv
from radiobrowser.core.selector import pick_server
from radiobrowser.core.validation import VALID_ORDER_FIELDS, validate_search_params

__all__ = [
    "FACETS",
    "FALLBACK_SERVER",
    "VALID_ORDER_FIELDS",
    "ClientConfig",
    "FacetCache",
    "SrvRecord",
    "check_facet",
    "discover_servers",
    "lookup_srv",
    "pick_server",
    "validate_search_params",
]
