"""WebSocket transport: connect, send, and receive typed frames.

The connection worker only sees ``Frame`` objects and ``StreamError``
subclasses; everything specific to the ``websockets`` library stays here.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

import websockets
from websockets.exceptions import InvalidURI, WebSocketException

from ..core.exceptions import SocketError, UrlParseError

logger = logging.getLogger(__name__)


class FrameKind(str, Enum):
    TEXT = "text"
    BINARY = "binary"
    PING = "ping"
    PONG = "pong"
    CLOSE = "close"


@dataclass(frozen=True)
class Frame:
    kind: FrameKind
    data: str | bytes = b""


class WouldBlockError(SocketError):
    """No frame became ready within the read timeout."""


class Transport(Protocol):
    """Minimal transport surface used by the connection worker."""

    async def connect(self, url: str) -> None: ...

    async def send_text(self, text: str) -> None: ...

    async def pong(self, data: bytes) -> None: ...

    async def recv(self, timeout: float) -> Frame:
        """Return the next frame.

        Raises:
            WouldBlockError: If nothing arrived within ``timeout`` seconds
            SocketError: On any other transport failure
        """
        ...

    async def close(self) -> None: ...


@dataclass
class TransportConfig:
    ping_interval: float | None = 30
    ping_timeout: float | None = 10
    close_timeout: float = 10
    open_timeout: float = 10
    max_size: int | None = None  # bytes; None = websockets default
    max_queue: int | None = None  # number of messages queued; None = websockets default


class WebSocketTransport:
    """``Transport`` backed by the ``websockets`` asyncio client.

    The library answers server pings itself, so this transport never yields
    ``PING`` frames; text and binary messages are surfaced as-is.
    """

    def __init__(self, config: TransportConfig | None = None) -> None:
        self._conf = config or TransportConfig()
        self._ws: Any | None = None

    def _connect_kwargs(self) -> dict[str, Any]:
        conf = self._conf
        kwargs: dict[str, Any] = {
            "ping_interval": conf.ping_interval,
            "ping_timeout": conf.ping_timeout,
            "close_timeout": conf.close_timeout,
            "open_timeout": conf.open_timeout,
        }
        # Only include size/queue if not None to keep library defaults
        if conf.max_size is not None:
            kwargs["max_size"] = conf.max_size
        if conf.max_queue is not None:
            kwargs["max_queue"] = conf.max_queue
        return kwargs

    @property
    def is_connected(self) -> bool:
        return self._ws is not None

    async def connect(self, url: str) -> None:
        try:
            self._ws = await websockets.connect(url, **self._connect_kwargs())
        except InvalidURI as exc:
            raise UrlParseError(f"Url parse error: {exc}") from exc
        except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
            raise SocketError(f"Failed to connect to {url}: {exc}") from exc
        logger.info(f"Connected to {url}")

    def _require_ws(self) -> Any:
        if self._ws is None:
            raise SocketError("WebSocket not connected")
        return self._ws

    async def send_text(self, text: str) -> None:
        ws = self._require_ws()
        try:
            await ws.send(text)
        except (OSError, WebSocketException) as exc:
            raise SocketError(f"Send failed: {exc}") from exc

    async def pong(self, data: bytes) -> None:
        ws = self._require_ws()
        try:
            await ws.pong(data)
        except (OSError, WebSocketException) as exc:
            raise SocketError(f"Pong failed: {exc}") from exc

    async def recv(self, timeout: float) -> Frame:
        ws = self._require_ws()
        try:
            message = await asyncio.wait_for(ws.recv(), timeout)
        except asyncio.TimeoutError as exc:
            raise WouldBlockError(f"No frame within {timeout}s") from exc
        except (OSError, WebSocketException) as exc:
            raise SocketError(f"Receive failed: {exc}") from exc
        if isinstance(message, str):
            return Frame(FrameKind.TEXT, message)
        return Frame(FrameKind.BINARY, message)

    async def close(self) -> None:
        ws, self._ws = self._ws, None
        if ws is None:
            return
        try:
            await ws.close()
        except (OSError, WebSocketException) as exc:
            logger.debug(f"Error while closing websocket: {exc}")
