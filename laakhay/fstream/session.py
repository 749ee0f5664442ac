"""Session controller for Binance USD-M futures websocket streams.

Collects channel declarations and options, then at ``start()`` resolves
authentication, builds the connection URL and subscription payload, and
spawns one connection worker. Events are read back with ``consume()``.

Example:
    >>> stream = FuturesStream().with_book_ticker("BTCUSDT").with_agg_trade("BTCUSDT")
    >>> await stream.start()
    >>> async for event in stream.consume():
    ...     print(event)
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable

from . import streams
from .auth.listen_key import ListenKeyClient
from .config import LISTEN_KEY_REFRESH_SECONDS, SUBSCRIBE_REQUEST_ID, SessionConfig
from .core.enums import (
    BookDepthUpdateSpeed,
    KlineContractType,
    KlineInterval,
    MarkPriceUpdateSpeed,
    PartialBookDepthLevel,
)
from .core.exceptions import StreamConfigurationError, StreamError
from .dispatcher import MessageDispatcher
from .runtime.handoff import EventStream, HandoffQueue
from .runtime.transport import Transport, WebSocketTransport
from .runtime.worker import ConnectionWorker
from .streams import Channel

logger = logging.getLogger(__name__)


def build_subscribe_payload(channels: list[Channel]) -> str:
    """Serialize a batch SUBSCRIBE request for ``channels`` in declaration order.

    Examples:
        >>> build_subscribe_payload([streams.book_ticker("btcusdt")])
        '{"method":"SUBSCRIBE","params":["btcusdt@bookTicker"],"id":1}'
    """
    return json.dumps(
        {
            "method": "SUBSCRIBE",
            "params": [channel.name for channel in channels],
            "id": SUBSCRIBE_REQUEST_ID,
        },
        separators=(",", ":"),
    )


class FuturesStream:
    """One logical websocket session.

    Declaration and configuration happen before ``start()``; afterwards the
    session is sealed and those calls raise ``RuntimeError``.
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        *,
        dispatcher: MessageDispatcher | None = None,
        transport_factory: Callable[[], Transport] = WebSocketTransport,
        listen_key_client: ListenKeyClient | None = None,
        listen_key_refresh_interval: float = LISTEN_KEY_REFRESH_SECONDS,
    ) -> None:
        self._config = config or SessionConfig()
        self._channels: list[Channel] = []
        self._dispatcher = dispatcher or MessageDispatcher()
        self._transport_factory = transport_factory
        self._listen_key_client = listen_key_client
        self._refresh_interval = listen_key_refresh_interval

        self._queue = HandoffQueue()
        self._events = EventStream(self._queue)
        self._stop_event = asyncio.Event()
        self._listen_key: str | None = None
        self._url: str | None = None
        self._worker: ConnectionWorker | None = None
        self._worker_task: asyncio.Task[None] | None = None
        self._renew_task: asyncio.Task[None] | None = None
        self._started = False

    @classmethod
    def with_config(cls, config: SessionConfig) -> FuturesStream:
        return cls(config)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def channels(self) -> tuple[Channel, ...]:
        return tuple(self._channels)

    @property
    def authenticated(self) -> bool:
        return self._config.authenticated

    @property
    def listen_key(self) -> str | None:
        """Current listen key; replaced in place by each successful renewal."""
        return self._listen_key

    @property
    def url(self) -> str | None:
        """Connection URL, available once started."""
        return self._url

    @property
    def worker(self) -> ConnectionWorker | None:
        return self._worker

    @property
    def is_running(self) -> bool:
        return self._worker_task is not None and not self._worker_task.done()

    def _ensure_not_started(self) -> None:
        if self._started:
            raise RuntimeError("Stream already started; declare and configure before start()")

    def configure(self, config: SessionConfig) -> FuturesStream:
        self._ensure_not_started()
        self._config = config
        return self

    def declare(self, channel: Channel) -> FuturesStream:
        self._ensure_not_started()
        self._channels.append(channel)
        return self

    def with_book_ticker(self, symbol: str) -> FuturesStream:
        return self.declare(streams.book_ticker(symbol))

    def with_book_tickers(self) -> FuturesStream:
        return self.declare(streams.book_tickers())

    def with_agg_trade(self, symbol: str) -> FuturesStream:
        return self.declare(streams.agg_trade(symbol))

    def with_mark_price(
        self,
        symbol: str,
        update_speed: MarkPriceUpdateSpeed = streams.DEFAULT_MARK_PRICE_SPEED,
    ) -> FuturesStream:
        return self.declare(streams.mark_price(symbol, update_speed))

    def with_mark_prices(
        self, update_speed: MarkPriceUpdateSpeed = streams.DEFAULT_MARK_PRICE_SPEED
    ) -> FuturesStream:
        return self.declare(streams.mark_prices(update_speed))

    def with_kline(self, symbol: str, interval: KlineInterval) -> FuturesStream:
        return self.declare(streams.kline(symbol, interval))

    def with_continuous_kline(
        self, pair: str, contract_type: KlineContractType, interval: KlineInterval
    ) -> FuturesStream:
        return self.declare(streams.continuous_kline(pair, contract_type, interval))

    def with_mini_ticker(self, symbol: str) -> FuturesStream:
        return self.declare(streams.mini_ticker(symbol))

    def with_mini_tickers(self) -> FuturesStream:
        return self.declare(streams.mini_tickers())

    def with_ticker(self, symbol: str) -> FuturesStream:
        return self.declare(streams.ticker(symbol))

    def with_tickers(self) -> FuturesStream:
        return self.declare(streams.tickers())

    def with_force_order(self, symbol: str) -> FuturesStream:
        return self.declare(streams.force_order(symbol))

    def with_force_orders(self) -> FuturesStream:
        return self.declare(streams.force_orders())

    def with_partial_book_depth(
        self,
        symbol: str,
        level: PartialBookDepthLevel,
        update_speed: BookDepthUpdateSpeed = streams.DEFAULT_BOOK_DEPTH_SPEED,
    ) -> FuturesStream:
        return self.declare(streams.partial_book_depth(symbol, level, update_speed))

    def with_book_depth(
        self,
        symbol: str,
        update_speed: BookDepthUpdateSpeed = streams.DEFAULT_BOOK_DEPTH_SPEED,
    ) -> FuturesStream:
        return self.declare(streams.book_depth(symbol, update_speed))

    def with_composite_index(self, symbol: str) -> FuturesStream:
        return self.declare(streams.composite_index(symbol))

    def with_contract_info(self) -> FuturesStream:
        return self.declare(streams.contract_info())

    def with_asset_index(self, symbol: str) -> FuturesStream:
        return self.declare(streams.asset_index(symbol))

    def with_asset_indexes(self) -> FuturesStream:
        return self.declare(streams.asset_indexes())

    # ------------------------------------------------------------------
    # URL and subscription
    # ------------------------------------------------------------------

    def build_url(self) -> str:
        """Connection URL for the current declarations and listen key.

        Raises:
            StreamConfigurationError: Unauthenticated with nothing declared
        """
        base = self._config.get_url()
        if self.authenticated:
            if not self._listen_key:
                raise StreamConfigurationError("Listen key not obtained yet")
            return f"{base}/ws/{self._listen_key}"
        if not self._channels:
            raise StreamConfigurationError(
                "Can't start unauthenticated ws connection without at least 1 stream"
            )
        return f"{base}/ws/{self._channels[-1].name}"

    def build_subscribe_payload(self) -> str | None:
        """Batch SUBSCRIBE message to send after connect, or None.

        An unauthenticated session with a single channel is fully described
        by its URL and sends nothing.
        """
        if not self._channels:
            return None
        if not self.authenticated and len(self._channels) == 1:
            return None
        return build_subscribe_payload(self._channels)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> FuturesStream:
        """Resolve auth, spawn the connection worker and return.

        Raises:
            RuntimeError: Already started
            StreamConfigurationError: Unauthenticated with no channels
            HttpResponseError: Initial listen key request failed
            DecodeError: Initial listen key response was malformed
        """
        self._ensure_not_started()
        if not self.authenticated and not self._channels:
            raise StreamConfigurationError(
                "Can't start unauthenticated ws connection without at least 1 stream"
            )
        self._started = True

        if self.authenticated:
            client = self._get_listen_key_client()
            try:
                self._listen_key = await client.fetch()
            except BaseException:
                # Leave the session startable again and release the HTTP session
                self._started = False
                await client.close()
                raise
            logger.info("Listen key obtained")
            self._renew_task = asyncio.create_task(self._renew_listen_key())

        self._url = self.build_url()
        self._worker = ConnectionWorker(
            self._url,
            self._queue,
            would_block=self._config.would_block,
            reconnect=self._config.reconnect,
            subscribe_payload=self.build_subscribe_payload(),
            stop_event=self._stop_event,
            dispatcher=self._dispatcher,
            transport_factory=self._transport_factory,
        )
        self._worker_task = asyncio.create_task(self._worker.run())
        self._worker_task.add_done_callback(self._on_worker_done)
        logger.info(f"Started futures stream with {len(self._channels)} channel(s)")
        return self

    def consume(self) -> EventStream:
        """Return the consuming end of the hand-off queue."""
        return self._events

    async def wait(self) -> None:
        """Wait for the worker to finish, re-raising its failure."""
        if self._worker_task is not None:
            await self._worker_task

    async def stop(self) -> None:
        """Request a cooperative stop and wait for the worker to exit.

        Worker failures are delivered through ``consume()``, not raised here.
        """
        self._stop_event.set()
        self._cancel_renewal()
        if self._worker_task is not None:
            await asyncio.wait({self._worker_task})
        else:
            # Never started: release any waiting consumer
            self._queue.close()
        if self._listen_key_client is not None:
            await self._listen_key_client.close()
        logger.info("Futures stream stopped")

    async def __aenter__(self) -> FuturesStream:
        return await self.start()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    def _get_listen_key_client(self) -> ListenKeyClient:
        if self._listen_key_client is None:
            assert self._config.api_auth is not None
            self._listen_key_client = ListenKeyClient(
                self._config.api_auth, base_url=self._config.get_rest_url()
            )
        return self._listen_key_client

    async def _renew_listen_key(self) -> None:
        client = self._get_listen_key_client()
        while True:
            await asyncio.sleep(self._refresh_interval)
            try:
                listen_key = await client.fetch()
            except StreamError as e:
                logger.error(f"Could not refresh listen key: {e}")
                continue
            self._listen_key = listen_key
            logger.info("Listen key refreshed")

    def _cancel_renewal(self) -> None:
        if self._renew_task is not None and not self._renew_task.done():
            self._renew_task.cancel()

    def _on_worker_done(self, task: asyncio.Task[None]) -> None:
        self._cancel_renewal()
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Futures stream terminated abnormally: {exc}")


__all__ = ["FuturesStream", "build_subscribe_payload"]
