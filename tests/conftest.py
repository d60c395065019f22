"""Test fixtures for radiobrowser tests."""

import random
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import urlsplit

import pytest

from radiobrowser.api.client import RadioBrowserClient
from radiobrowser.api.transport import HttpResponse, Transport
from radiobrowser.core.discovery import SrvRecord
from radiobrowser.models.endpoint import ServerEndpoint


class FakeTransport(Transport):
    """Transport that records requests and answers from a route table.

    Routes are keyed by the resource path after ``/json/``. A route value
    is either the decoded body (sent with status 200) or an HttpResponse.
    Unrouted requests get an empty list.
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.errors: dict[str, Exception] = {}
        self.requests: list[tuple[str, str, Any]] = []
        self.user_agents: list[str] = []

    async def get(self, url: str, user_agent: str) -> HttpResponse:
        return self._answer("GET", url, user_agent, None)

    async def post(self, url: str, user_agent: str, json_body: Any) -> HttpResponse:
        return self._answer("POST", url, user_agent, json_body)

    def calls_to(self, resource: str) -> list[tuple[str, str, Any]]:
        """Return recorded requests for ``resource``."""
        return [r for r in self.requests if resource_of(r[1]) == resource]

    def _answer(self, method: str, url: str, user_agent: str, body: Any) -> HttpResponse:
        self.requests.append((method, url, body))
        self.user_agents.append(user_agent)
        resource = resource_of(url)
        if resource in self.errors:
            raise self.errors[resource]
        value = self.routes.get(resource, [])
        if isinstance(value, HttpResponse):
            return value
        return HttpResponse(status=200, body=value)


def resource_of(url: str) -> str:
    """Return the resource part of an API URL (path after /json/)."""
    return urlsplit(url).path.removeprefix("/json/")


def make_lookup(
    records: list[SrvRecord] | None = None,
    error: Exception | None = None,
) -> tuple[Callable[[str], Awaitable[list[SrvRecord]]], list[str]]:
    """Return a fake SRV lookup and the list of names it was asked for."""
    queried: list[str] = []

    async def lookup(name: str) -> list[SrvRecord]:
        queried.append(name)
        if error is not None:
            raise error
        return list(records or [])

    return lookup, queried


@pytest.fixture
def servers() -> list[ServerEndpoint]:
    """Return a two-server pool."""
    return [
        ServerEndpoint("https", "de1.api.radio-browser.info", 443),
        ServerEndpoint("http", "nl1.api.radio-browser.info", 80),
    ]


@pytest.fixture
def transport() -> FakeTransport:
    """Return an empty fake transport."""
    return FakeTransport()


@pytest.fixture
def client(servers: list[ServerEndpoint], transport: FakeTransport) -> RadioBrowserClient:
    """Return a client over the two-server pool and the fake transport."""
    return RadioBrowserClient(servers, transport=transport, rng=random.Random(1234))
