"""Precise unit tests for FuturesStream.

Tests focus on start-up rules, URL and subscription building, listen key
renewal, and shutdown. Network access is replaced by in-memory fakes.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from laakhay.fstream import FuturesStream, streams
from laakhay.fstream.auth import ListenKeyClient
from laakhay.fstream.config import ApiAuth, SessionConfig, WouldBlockConfig
from laakhay.fstream.core import (
    HttpResponseError,
    KlineInterval,
    SocketError,
    StreamConfigurationError,
)
from laakhay.fstream.runtime import Frame, FrameKind, WouldBlockError
from laakhay.fstream.session import build_subscribe_payload


class IdleTransport:
    """Transport that connects, records writes, and never yields data."""

    instances: list["IdleTransport"] = []

    def __init__(self, script=None):
        self.script = list(script or [])
        self.urls: list[str] = []
        self.sent: list[str] = []
        IdleTransport.instances.append(self)

    async def connect(self, url):
        self.urls.append(url)

    async def send_text(self, text):
        self.sent.append(text)

    async def pong(self, data):
        pass

    async def recv(self, timeout):
        if self.script:
            item = self.script.pop(0)
            if isinstance(item, BaseException):
                raise item
            return item
        await asyncio.sleep(timeout)
        raise WouldBlockError("idle")

    async def close(self):
        pass


@pytest.fixture(autouse=True)
def reset_transports():
    IdleTransport.instances = []
    yield
    IdleTransport.instances = []


def _listen_key_client(*keys):
    client = MagicMock()
    client.fetch = AsyncMock(side_effect=list(keys))
    client.close = AsyncMock()
    return client


def _config(**kwargs):
    return SessionConfig(would_block=WouldBlockConfig(timeout=0.01), **kwargs)


class TestDeclaration:
    """Test channel declaration and configuration."""

    def test_builders_declare_in_order(self):
        """Test with_* shortcuts append catalog channels."""
        stream = (
            FuturesStream()
            .with_book_ticker("BTCUSDT")
            .with_kline("ETHUSDT", KlineInterval.M5)
            .with_mark_prices()
            .with_contract_info()
        )
        assert [c.name for c in stream.channels] == [
            "btcusdt@bookTicker",
            "ethusdt@kline_5m",
            "!markPrice@arr",
            "!contractInfo",
        ]

    def test_with_config(self):
        """Test the alternate constructor keeps the config."""
        config = SessionConfig().do_not_reconnect()
        assert FuturesStream.with_config(config).config is config

    def test_configure_replaces_config(self):
        """Test configure() installs a config value."""
        config = SessionConfig().use_testnet()
        stream = FuturesStream().configure(config)
        assert stream.config is config

    @pytest.mark.asyncio
    async def test_declare_after_start_raises(self):
        """Test the session is sealed once started."""
        stream = FuturesStream(_config(), transport_factory=IdleTransport)
        await stream.with_agg_trade("BTCUSDT").start()
        try:
            with pytest.raises(RuntimeError):
                stream.with_ticker("BTCUSDT")
            with pytest.raises(RuntimeError):
                stream.configure(SessionConfig())
            with pytest.raises(RuntimeError):
                await stream.start()
        finally:
            await stream.stop()


class TestUrlAndSubscription:
    """Test URL and subscription payload rules."""

    def test_single_channel(self):
        """Test one channel needs no subscription payload."""
        stream = FuturesStream().with_book_ticker("BTCUSDT")
        assert stream.build_url() == "wss://fstream.binance.com/ws/btcusdt@bookTicker"
        assert stream.build_subscribe_payload() is None

    def test_multiple_channels_use_last_declared(self):
        """Test URL uses the last channel and the payload covers all."""
        stream = FuturesStream().with_book_ticker("BTCUSDT").with_agg_trade("ETHUSDT")

        assert stream.build_url() == "wss://fstream.binance.com/ws/ethusdt@aggTrade"
        assert json.loads(stream.build_subscribe_payload()) == {
            "method": "SUBSCRIBE",
            "params": ["btcusdt@bookTicker", "ethusdt@aggTrade"],
            "id": 1,
        }

    def test_testnet_url(self):
        """Test testnet base URL."""
        stream = FuturesStream(SessionConfig().use_testnet()).with_tickers()
        assert stream.build_url() == "wss://stream.binancefuture.com/ws/!ticker@arr"

    def test_build_subscribe_payload_is_compact(self):
        """Test wire format of the SUBSCRIBE request."""
        payload = build_subscribe_payload([streams.book_ticker("btcusdt")])
        assert payload == '{"method":"SUBSCRIBE","params":["btcusdt@bookTicker"],"id":1}'


class TestStart:
    """Test start() for both session modes."""

    @pytest.mark.asyncio
    async def test_unauthenticated_without_channels_fails_before_io(self):
        """Test zero channels is a configuration error with no I/O."""
        listen_key_client = _listen_key_client()
        stream = FuturesStream(
            _config(), transport_factory=IdleTransport, listen_key_client=listen_key_client
        )

        with pytest.raises(StreamConfigurationError):
            await stream.start()

        assert IdleTransport.instances == []
        listen_key_client.fetch.assert_not_awaited()
        assert not stream.is_running

    @pytest.mark.asyncio
    async def test_unauthenticated_start(self):
        """Test the worker connects with the built URL and payload."""
        stream = (
            FuturesStream(_config(), transport_factory=IdleTransport)
            .with_book_ticker("BTCUSDT")
            .with_mini_ticker("BTCUSDT")
        )
        await stream.start()
        await asyncio.sleep(0.02)

        transport = IdleTransport.instances[0]
        assert transport.urls == ["wss://fstream.binance.com/ws/btcusdt@miniTicker"]
        assert len(transport.sent) == 1
        assert json.loads(transport.sent[0])["params"] == [
            "btcusdt@bookTicker",
            "btcusdt@miniTicker",
        ]
        assert stream.is_running

        await stream.stop()
        assert not stream.is_running

    @pytest.mark.asyncio
    async def test_authenticated_start_uses_listen_key(self):
        """Test user data URL and no payload without public channels."""
        listen_key_client = _listen_key_client("key-1")
        stream = FuturesStream(
            _config(api_auth=ApiAuth("k", "s")),
            transport_factory=IdleTransport,
            listen_key_client=listen_key_client,
        )
        await stream.start()
        await asyncio.sleep(0.02)

        assert stream.url == "wss://fstream.binance.com/ws/key-1"
        assert IdleTransport.instances[0].urls == [stream.url]
        assert IdleTransport.instances[0].sent == []
        await stream.stop()
        listen_key_client.close.assert_awaited()

    @pytest.mark.asyncio
    async def test_authenticated_with_public_channels(self):
        """Test public channels ride on the user data connection."""
        stream = FuturesStream(
            _config(api_auth=ApiAuth("k", "s")),
            transport_factory=IdleTransport,
            listen_key_client=_listen_key_client("key-1"),
        ).with_book_ticker("BTCUSDT")
        await stream.start()
        await asyncio.sleep(0.02)

        assert stream.url.endswith("/ws/key-1")
        assert json.loads(IdleTransport.instances[0].sent[0])["params"] == ["btcusdt@bookTicker"]
        await stream.stop()

    @pytest.mark.asyncio
    async def test_listen_key_failure_is_fatal_to_start(self):
        """Test the initial fetch error propagates and nothing connects."""
        stream = FuturesStream(
            _config(api_auth=ApiAuth("k", "s")),
            transport_factory=IdleTransport,
            listen_key_client=_listen_key_client(HttpResponseError("401", status_code=401)),
        )

        with pytest.raises(HttpResponseError):
            await stream.start()
        assert IdleTransport.instances == []

    @pytest.mark.asyncio
    async def test_failed_start_can_be_retried(self):
        """Test a failed listen key fetch releases HTTP and leaves the session open."""
        listen_key_client = _listen_key_client(
            HttpResponseError("503", status_code=503), "key-1"
        )
        stream = FuturesStream(
            _config(api_auth=ApiAuth("k", "s")),
            transport_factory=IdleTransport,
            listen_key_client=listen_key_client,
        )

        with pytest.raises(HttpResponseError):
            await stream.start()
        listen_key_client.close.assert_awaited_once()
        assert not stream.is_running

        # Still configurable and startable
        stream.with_book_ticker("BTCUSDT")
        await stream.start()
        try:
            assert stream.url.endswith("/ws/key-1")
            assert stream.is_running
        finally:
            await stream.stop()


class TestListenKeyRenewal:
    """Test the renewal task."""

    @pytest.mark.asyncio
    async def test_renewal_replaces_key_and_survives_failures(self):
        """Test failures are logged and the next success replaces the key."""
        keys = ["key-1", HttpResponseError("503", status_code=503), "key-2"] + ["key-3"] * 100
        listen_key_client = _listen_key_client(*keys)
        stream = FuturesStream(
            _config(api_auth=ApiAuth("k", "s")),
            transport_factory=IdleTransport,
            listen_key_client=listen_key_client,
            listen_key_refresh_interval=0.01,
        )
        await stream.start()

        for _ in range(100):
            if stream.listen_key != "key-1":
                break
            await asyncio.sleep(0.01)

        assert stream.listen_key in ("key-2", "key-3")
        assert listen_key_client.fetch.await_count >= 3
        # The connection URL is built once at start
        assert stream.url.endswith("/ws/key-1")
        await stream.stop()

    @pytest.mark.asyncio
    async def test_renewal_survives_request_timeout(self):
        """Test an HTTP timeout during renewal does not end the renewal task."""
        http = MagicMock()
        http.post = AsyncMock(
            side_effect=[{"listenKey": "key-1"}, asyncio.TimeoutError(), {"listenKey": "key-2"}]
            + [{"listenKey": "key-3"}] * 100
        )
        http.close = AsyncMock()
        stream = FuturesStream(
            _config(api_auth=ApiAuth("k", "s")),
            transport_factory=IdleTransport,
            listen_key_client=ListenKeyClient(ApiAuth("k", "s"), http=http),
            listen_key_refresh_interval=0.01,
        )
        await stream.start()

        for _ in range(100):
            if stream.listen_key != "key-1":
                break
            await asyncio.sleep(0.01)

        assert stream.listen_key in ("key-2", "key-3")
        assert http.post.await_count >= 3
        assert not stream._renew_task.done()
        await stream.stop()
        http.close.assert_awaited()

    @pytest.mark.asyncio
    async def test_stop_cancels_renewal(self):
        """Test no renewal happens after stop()."""
        listen_key_client = _listen_key_client("key-1", *(["key-2"] * 100))
        stream = FuturesStream(
            _config(api_auth=ApiAuth("k", "s")),
            transport_factory=IdleTransport,
            listen_key_client=listen_key_client,
            listen_key_refresh_interval=0.01,
        )
        await stream.start()
        await stream.stop()
        calls = listen_key_client.fetch.await_count

        await asyncio.sleep(0.05)
        assert listen_key_client.fetch.await_count == calls


class TestConsume:
    """Test consumer-facing behavior."""

    @pytest.mark.asyncio
    async def test_consume_returns_same_handle(self):
        """Test repeated calls share one stream."""
        stream = FuturesStream()
        assert stream.consume() is stream.consume()

    @pytest.mark.asyncio
    async def test_stop_ends_consumer(self):
        """Test consumers see a clean end after stop()."""
        stream = FuturesStream(_config(), transport_factory=IdleTransport).with_book_tickers()
        await stream.start()
        await stream.stop()

        assert await asyncio.wait_for(stream.consume().get(), 1.0) is None

    @pytest.mark.asyncio
    async def test_worker_failure_reaches_consumer(self):
        """Test an unrecoverable failure is re-raised from the consumer."""

        def factory():
            return IdleTransport([SocketError("reset")])

        stream = FuturesStream(
            _config().do_not_reconnect(), transport_factory=factory
        ).with_book_ticker("BTCUSDT")
        await stream.start()

        with pytest.raises(SocketError):
            await asyncio.wait_for(stream.consume().get(), 1.0)
        with pytest.raises(SocketError):
            await stream.wait()
        await stream.stop()

    @pytest.mark.asyncio
    async def test_events_flow_through(self):
        """Test a decoded event is delivered to the consumer."""
        ack = Frame(FrameKind.TEXT, '{"result":null,"id":1}')

        def factory():
            return IdleTransport([ack])

        async with FuturesStream(_config(), transport_factory=factory).with_book_tickers() as stream:
            event = await asyncio.wait_for(stream.consume().get(), 1.0)

        assert type(event).__name__ == "SubscriptionAck"
