"""Client configuration with environment overrides."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from radiobrowser import __version__
from radiobrowser.models.endpoint import ServerEndpoint

logger = logging.getLogger(__name__)

# Environment keys
_ENV_USER_AGENT = "RADIOBROWSER_USER_AGENT"
_ENV_SERVICE_NAME = "RADIOBROWSER_SERVICE_NAME"
_ENV_FALLBACK_URL = "RADIOBROWSER_FALLBACK_URL"
_ENV_REQUEST_TIMEOUT = "RADIOBROWSER_REQUEST_TIMEOUT"
_ENV_DNS_TIMEOUT = "RADIOBROWSER_DNS_TIMEOUT"

DEFAULT_USER_AGENT = f"radiobrowser-python/{__version__}"
DEFAULT_SERVICE_NAME = "_api._tcp.radio-browser.info"
DEFAULT_FALLBACK_URL = "https://de1.api.radio-browser.info"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_DNS_TIMEOUT = 5.0


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by discovery and dispatch.

    Example:
        config = ClientConfig.from_env()
        client = await RadioBrowserClient.create(config)

    Attributes:
        user_agent: Identifying client string sent with every request.
        service_name: DNS SRV name advertising the API servers.
        fallback_url: Server used when the SRV lookup finds nothing.
        request_timeout: Socket timeout for HTTP requests in seconds.
        dns_timeout: Timeout for the SRV lookup in seconds.
    """

    user_agent: str = DEFAULT_USER_AGENT
    service_name: str = DEFAULT_SERVICE_NAME
    fallback_url: str = DEFAULT_FALLBACK_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    dns_timeout: float = DEFAULT_DNS_TIMEOUT
    _fallback: ServerEndpoint = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Parse the fallback URL once.

        Raises:
            ValueError: If fallback_url is not an http(s) URL with a host.
        """
        object.__setattr__(self, "_fallback", ServerEndpoint.from_url(self.fallback_url))

    @property
    def fallback_endpoint(self) -> ServerEndpoint:
        """Return the parsed fallback server."""
        return self._fallback

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Build a config from ``RADIOBROWSER_*`` environment variables.

        Malformed values are logged and replaced by the default.

        Args:
            environ: Mapping to read instead of ``os.environ``.
        """
        env = os.environ if environ is None else environ

        fallback_url = env.get(_ENV_FALLBACK_URL, DEFAULT_FALLBACK_URL)
        try:
            ServerEndpoint.from_url(fallback_url)
        except ValueError as e:
            logger.warning("Ignoring %s: %s", _ENV_FALLBACK_URL, e)
            fallback_url = DEFAULT_FALLBACK_URL

        return cls(
            user_agent=env.get(_ENV_USER_AGENT) or DEFAULT_USER_AGENT,
            service_name=env.get(_ENV_SERVICE_NAME) or DEFAULT_SERVICE_NAME,
            fallback_url=fallback_url,
            request_timeout=_positive_float(env, _ENV_REQUEST_TIMEOUT, DEFAULT_REQUEST_TIMEOUT),
            dns_timeout=_positive_float(env, _ENV_DNS_TIMEOUT, DEFAULT_DNS_TIMEOUT),
        )


def _positive_float(env: Mapping[str, str], key: str, default: float) -> float:
    """Read a positive float from ``env``, falling back to ``default``."""
    raw = env.get(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", key, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", key, raw)
        return default
    return value
