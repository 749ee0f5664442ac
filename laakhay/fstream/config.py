"""Shared Binance USD-M futures constants and session configuration.

This module centralizes URLs, timing constants, and the immutable
configuration values consumed by the session controller and the
connection worker.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from urllib.parse import urlsplit

from .core.exceptions import UrlParseError

# REST base URLs (listen key endpoint lives here)
BASE_URL_FUTURES = "https://fapi.binance.com"
BASE_URL_FUTURES_TESTNET = "https://testnet.binancefuture.com"

# WebSocket base URLs
#  - Single stream: wss://<host>/ws/<stream-name>
#  - User data:     wss://<host>/ws/<listen-key>
WS_URL_FUTURES = "wss://fstream.binance.com"
WS_URL_FUTURES_TESTNET = "wss://stream.binancefuture.com"

FUTURES_LISTEN_KEY = "/fapi/v1/listenKey"

# Listen keys expire after 60 minutes; renew well before that.
LISTEN_KEY_REFRESH_SECONDS = 3000.0

# Fixed, non-exponential delay between a socket failure and the next connect.
RECONNECT_BACKOFF_SECONDS = 0.1

# Request id of the batch SUBSCRIBE message.
SUBSCRIBE_REQUEST_ID = 1

_WS_SCHEMES = ("ws", "wss")


def validate_ws_url(url: str) -> str:
    """Return ``url`` without a trailing slash, or raise UrlParseError.

    Examples:
        >>> validate_ws_url("wss://fstream.binance.com/")
        'wss://fstream.binance.com'
    """
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise UrlParseError(f"Url parse error: {exc}") from exc
    if parts.scheme not in _WS_SCHEMES:
        raise UrlParseError(f"Url parse error: unsupported scheme in {url!r}")
    if not parts.netloc:
        raise UrlParseError(f"Url parse error: missing host in {url!r}")
    return url.rstrip("/")


@dataclass(frozen=True)
class ApiAuth:
    """API credentials used to mint listen keys."""

    api_key: str
    api_secret: str = field(repr=False)

    @classmethod
    def from_env(
        cls,
        key_var: str = "BINANCE_API_KEY",
        secret_var: str = "BINANCE_API_SECRET",
    ) -> ApiAuth | None:
        """Build credentials from environment variables.

        Returns None when the key variable is unset or empty.
        """
        api_key = os.environ.get(key_var, "")
        if not api_key:
            return None
        return cls(api_key=api_key, api_secret=os.environ.get(secret_var, ""))


@dataclass(frozen=True)
class WouldBlockConfig:
    """Policy for reads that find no data ready.

    Attributes:
        timeout: Seconds a single read may wait; also the sleep before retrying.
        error_on_block: Treat an empty read as a socket failure instead of
            sleeping and retrying.
    """

    timeout: float = 0.01
    error_on_block: bool = False


@dataclass(frozen=True)
class SessionConfig:
    """Immutable session configuration.

    Every ``with_*`` / ``use_*`` / ``do_not_*`` call returns a new value and
    leaves the receiver untouched.
    """

    url: str = WS_URL_FUTURES
    url_testnet: str = WS_URL_FUTURES_TESTNET
    testnet: bool = False
    would_block: WouldBlockConfig = field(default_factory=WouldBlockConfig)
    reconnect: bool = True
    api_auth: ApiAuth | None = None

    def with_would_block_config(self, would_block: WouldBlockConfig) -> SessionConfig:
        return replace(self, would_block=would_block)

    def with_url(self, url: str) -> SessionConfig:
        """Override the live websocket base URL.

        Raises:
            UrlParseError: If ``url`` is not a ws/wss URL with a host
        """
        return replace(self, url=validate_ws_url(url))

    def with_url_testnet(self, url: str) -> SessionConfig:
        """Override the testnet websocket base URL.

        Raises:
            UrlParseError: If ``url`` is not a ws/wss URL with a host
        """
        return replace(self, url_testnet=validate_ws_url(url))

    def with_api_auth(self, api_auth: ApiAuth) -> SessionConfig:
        return replace(self, api_auth=api_auth)

    def use_testnet(self) -> SessionConfig:
        return replace(self, testnet=True)

    def do_not_reconnect(self) -> SessionConfig:
        return replace(self, reconnect=False)

    @property
    def authenticated(self) -> bool:
        return self.api_auth is not None

    def get_url(self) -> str:
        """Websocket base URL for the selected environment."""
        return self.url_testnet if self.testnet else self.url

    def get_rest_url(self) -> str:
        """REST base URL used for the listen key endpoint."""
        return BASE_URL_FUTURES_TESTNET if self.testnet else BASE_URL_FUTURES
