"""Wire contract of the Radio Browser REST API."""

from urllib.parse import quote

from radiobrowser.models.endpoint import ServerEndpoint

# All resources live under this prefix on every server
API_PREFIX = "/json"

SEARCH_RESOURCE = "stations/search"


def by_uuid_resource(uuid: str) -> str:
    """Return the resource looking up one station."""
    return f"stations/byuuid/{quote(uuid, safe='')}"


def click_resource(uuid: str) -> str:
    """Return the resource registering a click."""
    return f"url/{quote(uuid, safe='')}"


def vote_resource(uuid: str) -> str:
    """Return the resource registering a vote."""
    return f"vote/{quote(uuid, safe='')}"


def build_url(server: ServerEndpoint, resource: str) -> str:
    """Return the absolute URL of ``resource`` on ``server``."""
    return server.url_for(f"{API_PREFIX}/{resource.lstrip('/')}")
