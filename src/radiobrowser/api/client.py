"""Radio Browser API client.

Discovers the API servers once, then sends every request to a randomly
chosen server. All dispatches, including the facet cache fill, run one
at a time under a single lock.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Sequence
from functools import partial
from typing import Any

from radiobrowser.api.protocol import (
    SEARCH_RESOURCE,
    build_url,
    by_uuid_resource,
    click_resource,
    vote_resource,
)
from radiobrowser.api.transport import HttpResponse, Transport, UrllibTransport
from radiobrowser.core.cache import FacetCache, check_facet
from radiobrowser.core.config import ClientConfig
from radiobrowser.core.discovery import SrvLookup, discover_servers, lookup_srv
from radiobrowser.core.selector import pick_server
from radiobrowser.core.validation import validate_search_params
from radiobrowser.errors import DecodeError, HttpStatusError
from radiobrowser.models.endpoint import ServerEndpoint
from radiobrowser.models.search import SearchParams

logger = logging.getLogger(__name__)


class RadioBrowserClient:
    """Async client for the Radio Browser API.

    Example:
        client = await RadioBrowserClient.create()
        stations = await client.search(name="jazz", countrycode="US")
        station = await client.play(stations[0]["stationuuid"])
    """

    def __init__(
        self,
        servers: Sequence[ServerEndpoint],
        transport: Transport | None = None,
        config: ClientConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the client with an already discovered pool.

        Args:
            servers: API servers to spread requests over.
            transport: HTTP transport (UrllibTransport if omitted).
            config: Client settings (defaults if omitted).
            rng: Random source for server selection.

        Raises:
            ValueError: If ``servers`` is empty.
        """
        if not servers:
            raise ValueError("At least one API server is required")
        self._config = config or ClientConfig()
        self._servers = tuple(servers)
        self._transport = transport or UrllibTransport(self._config.request_timeout)
        self._rng = rng
        self._facets = FacetCache()
        self._lock = asyncio.Lock()
        self._background: set[asyncio.Task[None]] = set()

    @classmethod
    async def create(
        cls,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        lookup: SrvLookup | None = None,
        rng: random.Random | None = None,
    ) -> RadioBrowserClient:
        """Discover the API servers and return a client bound to them.

        Args:
            config: Client settings (defaults if omitted).
            transport: HTTP transport (UrllibTransport if omitted).
            lookup: SRV lookup coroutine function (aiodns if omitted).
            rng: Random source for server selection.
        """
        config = config or ClientConfig()
        if lookup is None:
            lookup = partial(lookup_srv, timeout=config.dns_timeout)
        servers = await discover_servers(
            lookup,
            service_name=config.service_name,
            fallback=config.fallback_endpoint,
        )
        return cls(servers, transport=transport, config=config, rng=rng)

    @property
    def servers(self) -> tuple[ServerEndpoint, ...]:
        """Return the server pool."""
        return self._servers

    @property
    def config(self) -> ClientConfig:
        """Return the client settings."""
        return self._config

    @property
    def facet_cache(self) -> FacetCache:
        """Return the facet cache."""
        return self._facets

    @property
    def pending_background_tasks(self) -> int:
        """Return the number of detached click tasks still running."""
        return len(self._background)

    async def get_server(self) -> ServerEndpoint:
        """Return a randomly selected server."""
        async with self._lock:
            return pick_server(self._servers, self._rng)

    async def get_by_uuid(self, uuid: str) -> dict[str, Any] | None:
        """Look up one station.

        Args:
            uuid: Station UUID.

        Returns:
            The station record, or None if no station has this UUID.

        Raises:
            RadioBrowserError: If the request fails.
        """
        body = await self._call("POST", by_uuid_resource(uuid), {"uuids": [uuid], "limit": 1})
        if not isinstance(body, list):
            raise DecodeError(f"Expected a station list for {uuid}, got {type(body).__name__}")
        return body[0] if body else None

    async def play(self, uuid: str) -> dict[str, Any] | None:
        """Return a station and register a click for it.

        The click runs as a detached task. It is not awaited and its
        failure is never reported to the caller.

        Args:
            uuid: Station UUID.

        Returns:
            Same as get_by_uuid().
        """
        self._spawn_click(uuid)
        return await self.get_by_uuid(uuid)

    async def click(self, uuid: str) -> Any:
        """Register a click for a station.

        Click counts drive the popularity statistics. play() calls this
        automatically.
        """
        return await self._call("GET", click_resource(uuid))

    async def vote(self, uuid: str) -> Any:
        """Vote for a station.

        The API accepts one vote per client and station within 24 hours.
        """
        return await self._call("GET", vote_resource(uuid))

    async def search(self, params: SearchParams | None = None, **filters: Any) -> list[Any]:
        """Search stations.

        Keyword filters are merged over ``params`` (or the defaults).

        Args:
            params: Base search parameters.
            **filters: Any SearchParams field.

        Returns:
            Matching station records.

        Raises:
            ValidationError: If the parameters are invalid. Nothing is sent.
            RadioBrowserError: If the request fails.
        """
        merged = (params or SearchParams()).merged(**filters)
        body = merged.to_dict()
        validate_search_params(body)
        return await self._call("POST", SEARCH_RESOURCE, body)

    async def search_by_countrycode(self, countrycode: str) -> list[Any]:
        """Search stations by ISO 3166-1 alpha-2 code, case-insensitively."""
        return await self.search(countrycode=countrycode.upper())

    async def search_by_name(self, name: str) -> list[Any]:
        """Search stations whose name contains ``name``."""
        return await self.search(name=name, name_exact=False)

    async def get_facet(self, name: str) -> Any:
        """Return a facet, fetching it on first use.

        Args:
            name: One of "tags", "countries", "languages", "codecs", "states".

        Raises:
            InvalidFacetError: If the facet is unknown. Nothing is sent.
            RadioBrowserError: If the fetch fails. Nothing is cached.
        """
        check_facet(name)
        async with self._lock:
            if name in self._facets:
                logger.debug("Facet cache hit: %s", name)
                return self._facets.get(name)
            logger.debug("Facet cache miss: %s", name)
            body = await self._send("GET", name)
            return self._facets.put(name, body)

    async def wait_for_background_tasks(self) -> None:
        """Wait for detached click tasks started so far."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    async def _call(self, method: str, resource: str, json_body: Any = None) -> Any:
        """Dispatch one request under the lock and return its body."""
        async with self._lock:
            return await self._send(method, resource, json_body)

    async def _send(self, method: str, resource: str, json_body: Any = None) -> Any:
        """Send one request to a random server. Caller must hold the lock."""
        server = pick_server(self._servers, self._rng)
        url = build_url(server, resource)
        user_agent = self._config.user_agent

        logger.debug("%s %s", method, url)
        response: HttpResponse
        if method == "POST":
            response = await self._transport.post(url, user_agent, json_body)
        else:
            response = await self._transport.get(url, user_agent)

        if not response.is_success:
            raise HttpStatusError(response.status, url)
        return response.body

    def _spawn_click(self, uuid: str) -> None:
        """Start a click task that nobody awaits."""
        task = asyncio.create_task(self._background_click(uuid))
        # Keep a strong reference until done so the task is not collected
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _background_click(self, uuid: str) -> None:
        """Register a click, dropping any failure."""
        try:
            await self.click(uuid)
            logger.debug("Registered click for %s", uuid)
        except Exception as e:  # noqa: BLE001
            logger.debug("Click for %s failed: %s", uuid, e)
