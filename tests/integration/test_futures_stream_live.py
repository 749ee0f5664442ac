"""Integration tests for live Binance futures websocket streams."""

import asyncio
import os

import pytest

from laakhay.fstream import FuturesStream
from laakhay.fstream.core import KlineInterval
from laakhay.fstream.models import BookTicker, Kline, MarkPriceUpdates, SubscriptionAck

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LAAKHAY_NETWORK_TESTS") != "1",
    reason="Requires network access to test futures WebSocket streams",
)


async def _first(stream: FuturesStream, event_type, timeout: float = 30.0):
    async def _read():
        async for event in stream.consume():
            if isinstance(event, event_type):
                return event
        return None

    return await asyncio.wait_for(_read(), timeout)


class TestFuturesStreamIntegration:
    """Test real connections against the production endpoint."""

    @pytest.mark.asyncio
    async def test_single_book_ticker(self, live_symbol, live_timeout):
        """Test one channel on the URL, no subscription request."""
        async with FuturesStream().with_book_ticker(live_symbol) as stream:
            event = await _first(stream, BookTicker, live_timeout)

        assert event.symbol == live_symbol.upper()
        assert event.bid_price > 0
        assert event.ask_price >= event.bid_price

    @pytest.mark.asyncio
    async def test_multiple_channels_are_acknowledged(self, live_symbol, live_timeout):
        """Test the batch SUBSCRIBE is acknowledged and both channels deliver."""
        stream = (
            FuturesStream()
            .with_kline(live_symbol, KlineInterval.M1)
            .with_book_ticker("ETHUSDT")
        )
        async with stream:
            ack = await _first(stream, SubscriptionAck, live_timeout)
            kline = await _first(stream, Kline, timeout=90.0)

        assert ack is not None
        assert kline.symbol == live_symbol.upper()

    @pytest.mark.asyncio
    async def test_all_market_mark_prices(self):
        """Test the anonymous array batch decodes."""
        async with FuturesStream().with_mark_prices() as stream:
            event = await _first(stream, MarkPriceUpdates)

        assert len(event.data) > 10
