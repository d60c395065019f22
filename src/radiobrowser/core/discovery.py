"""DNS SRV discovery of Radio Browser API servers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import aiodns
from aiodns.error import DNSError

from radiobrowser.core.config import DEFAULT_DNS_TIMEOUT, DEFAULT_FALLBACK_URL, DEFAULT_SERVICE_NAME
from radiobrowser.models.endpoint import ServerEndpoint

logger = logging.getLogger(__name__)

FALLBACK_SERVER = ServerEndpoint.from_url(DEFAULT_FALLBACK_URL)


@dataclass(frozen=True, slots=True)
class SrvRecord:
    """A DNS SRV answer."""

    priority: int
    weight: int
    port: int
    host: str


SrvLookup = Callable[[str], Awaitable[list[SrvRecord]]]


async def lookup_srv(name: str, timeout: float = DEFAULT_DNS_TIMEOUT) -> list[SrvRecord]:
    """Resolve SRV records for ``name`` with aiodns.

    NXDOMAIN, resolver errors and timeouts all yield an empty list.

    Args:
        name: Fully-qualified service name (e.g. "_api._tcp.radio-browser.info").
        timeout: Maximum time to wait in seconds.

    Returns:
        SRV records in the order the resolver returned them.
    """
    # DNSResolver binds to the running loop, so it is created per call
    resolver = aiodns.DNSResolver()
    try:
        answers = await asyncio.wait_for(resolver.query(name, "SRV"), timeout=timeout)
    except TimeoutError:
        logger.warning("SRV lookup for %s timed out after %.1fs", name, timeout)
        return []
    except DNSError as e:
        logger.warning("SRV lookup for %s failed: %s", name, e)
        return []
    finally:
        # Drop any query wait_for abandoned
        resolver.cancel()

    return [
        SrvRecord(
            priority=answer.priority,
            weight=answer.weight,
            port=answer.port,
            host=answer.host.rstrip("."),
        )
        for answer in answers or []
    ]


async def discover_servers(
    lookup: SrvLookup = lookup_srv,
    service_name: str = DEFAULT_SERVICE_NAME,
    fallback: ServerEndpoint = FALLBACK_SERVER,
) -> list[ServerEndpoint]:
    """Discover the current API servers.

    Priority and weight are ignored; every server is treated alike.
    Never raises: an empty or failed lookup yields ``[fallback]``.

    Args:
        lookup: SRV lookup coroutine function.
        service_name: SRV name to query.
        fallback: Server to use when nothing is found.

    Returns:
        Non-empty list of endpoints.
    """
    try:
        records = await lookup(service_name)
    except Exception as e:  # noqa: BLE001
        logger.warning("SRV lookup for %s raised: %s", service_name, e)
        records = []

    if not records:
        logger.warning("No API servers found via %s, using %s", service_name, fallback)
        return [fallback]

    servers = [ServerEndpoint.from_srv(record) for record in records]
    logger.info("Discovered %d API server(s) via %s", len(servers), service_name)
    for server in servers:
        logger.debug("API server: %s", server)
    return servers
