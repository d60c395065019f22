"""Background-thread worker exposing the async client as blocking calls.

The client is asyncio based. This worker runs its event loop in a daemon
thread, so synchronous code in any thread can use it. Every call goes
through the one loop, which serializes access to the server pool and
the facet cache.
"""

import asyncio
import logging
import random
import threading
from collections.abc import Coroutine
from concurrent.futures import CancelledError, Future
from typing import Any, TypeVar

from radiobrowser.api.client import RadioBrowserClient
from radiobrowser.api.transport import Transport
from radiobrowser.core.config import ClientConfig
from radiobrowser.core.discovery import SrvLookup
from radiobrowser.errors import WorkerNotRunningError
from radiobrowser.models.endpoint import ServerEndpoint
from radiobrowser.models.search import SearchParams

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RadioBrowserWorker:
    """Blocking Radio Browser client backed by a background event loop.

    Example:
        worker = RadioBrowserWorker()
        worker.start()
        try:
            stations = worker.search_by_countrycode("de")
            worker.play(stations[0]["stationuuid"])
        finally:
            worker.stop()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        lookup: SrvLookup | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the worker. Nothing runs until start().

        Args:
            config: Client settings (defaults if omitted).
            transport: HTTP transport (UrllibTransport if omitted).
            lookup: SRV lookup coroutine function (aiodns if omitted).
            rng: Random source for server selection.
        """
        self._config = config or ClientConfig()
        self._transport = transport
        self._lookup = lookup
        self._rng = rng
        self._client: RadioBrowserClient | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._ready = threading.Event()
        self._startup_error: BaseException | None = None

    @property
    def is_running(self) -> bool:
        """Return True once discovery finished and the loop is serving calls."""
        return self._client is not None and self._loop is not None and self._loop.is_running()

    @property
    def client(self) -> RadioBrowserClient | None:
        """Return the underlying async client, None before start()."""
        return self._client

    def start(self) -> None:
        """Start the loop thread and wait for server discovery.

        Raises:
            RuntimeError: If the worker is already started or failed to start.
        """
        if self._thread is not None:
            raise RuntimeError("Worker already started")

        self._ready.clear()
        self._startup_error = None
        self._thread = threading.Thread(target=self._run, name="radiobrowser-worker", daemon=True)
        self._thread.start()
        self._ready.wait()

        if self._startup_error is not None:
            self._thread.join()
            self._thread = None
            raise RuntimeError("Radio Browser worker failed to start") from self._startup_error

    def stop(self, timeout: float | None = 5.0) -> None:
        """Stop the loop and join the thread.

        Pending detached clicks may be dropped.

        Args:
            timeout: Maximum time to wait for the thread in seconds.
        """
        loop = self._loop
        if loop is not None and loop.is_running():
            loop.call_soon_threadsafe(loop.stop)
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("Radio Browser worker did not stop within %ss", timeout)
            self._thread = None

    def __enter__(self) -> "RadioBrowserWorker":
        """Start the worker."""
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Stop the worker."""
        self.stop()

    # Blocking API

    def get_server(self) -> ServerEndpoint:
        """Return a randomly selected server."""
        return self._submit(self._require_client().get_server())

    def get_by_uuid(self, uuid: str) -> dict[str, Any] | None:
        """Return a station, or None if no station has this UUID."""
        return self._submit(self._require_client().get_by_uuid(uuid))

    def play(self, uuid: str) -> dict[str, Any] | None:
        """Return a station and register a click in the background."""
        return self._submit(self._require_client().play(uuid))

    def click(self, uuid: str) -> Any:
        """Register a click for a station."""
        return self._submit(self._require_client().click(uuid))

    def vote(self, uuid: str) -> Any:
        """Vote for a station."""
        return self._submit(self._require_client().vote(uuid))

    def search(self, params: SearchParams | None = None, **filters: Any) -> list[Any]:
        """Search stations. See RadioBrowserClient.search()."""
        return self._submit(self._require_client().search(params, **filters))

    def search_by_countrycode(self, countrycode: str) -> list[Any]:
        """Search stations by country code."""
        return self._submit(self._require_client().search_by_countrycode(countrycode))

    def search_by_name(self, name: str) -> list[Any]:
        """Search stations by partial name."""
        return self._submit(self._require_client().search_by_name(name))

    def get_facet(self, name: str) -> Any:
        """Return a facet, fetched on first use and cached afterwards."""
        return self._submit(self._require_client().get_facet(name))

    def wait_for_background_tasks(self) -> None:
        """Block until detached click tasks started so far have finished."""
        self._submit(self._require_client().wait_for_background_tasks())

    def _require_client(self) -> RadioBrowserClient:
        """Return the client or raise if the worker is not serving."""
        client, loop = self._client, self._loop
        if client is None or loop is None or not loop.is_running():
            raise WorkerNotRunningError("Radio Browser worker is not running")
        return client

    def _submit(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run ``coro`` on the worker loop and wait for its result."""
        loop = self._loop
        if loop is None or not loop.is_running():
            coro.close()
            raise WorkerNotRunningError("Radio Browser worker is not running")
        try:
            future: Future[T] = asyncio.run_coroutine_threadsafe(coro, loop)
        except RuntimeError as e:
            coro.close()
            raise WorkerNotRunningError("Radio Browser worker is not running") from e
        try:
            return future.result()
        except CancelledError as e:
            # stop() cancels calls still in flight
            raise WorkerNotRunningError("Radio Browser worker stopped") from e

    def _run(self) -> None:
        """Thread entry point: discover servers, then serve calls."""
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop

        try:
            self._client = loop.run_until_complete(
                RadioBrowserClient.create(
                    self._config,
                    transport=self._transport,
                    lookup=self._lookup,
                    rng=self._rng,
                )
            )
        except Exception as e:
            logger.exception("Radio Browser worker failed to start")
            self._startup_error = e
            self._loop = None
            loop.close()
            self._ready.set()
            return

        # Signal readiness from inside the running loop so is_running is True
        loop.call_soon(self._ready.set)
        try:
            loop.run_forever()
        finally:
            self._client = None
            self._loop = None
            _cancel_remaining(loop)
            loop.close()
            logger.debug("Radio Browser worker stopped")


def _cancel_remaining(loop: asyncio.AbstractEventLoop) -> None:
    """Cancel tasks left on a stopped loop and let them unwind."""
    tasks = asyncio.all_tasks(loop)
    if not tasks:
        return
    for task in tasks:
        task.cancel()
    loop.run_until_complete(asyncio.gather(*tasks, return_exceptions=True))
