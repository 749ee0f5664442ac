"""Precise unit tests for the stream catalog.

Tests focus on canonical channel names and default suppression.
"""

import pytest

from laakhay.fstream import streams
from laakhay.fstream.core import (
    BookDepthUpdateSpeed,
    KlineContractType,
    KlineInterval,
    MarkPriceUpdateSpeed,
    PartialBookDepthLevel,
)
from laakhay.fstream.streams import ChannelKind


class TestSingleSymbolChannels:
    """Test per-symbol channel names."""

    @pytest.mark.parametrize(
        "channel,expected",
        [
            (streams.book_ticker("BTCUSDT"), "btcusdt@bookTicker"),
            (streams.agg_trade("ETHUSDT"), "ethusdt@aggTrade"),
            (streams.mini_ticker("BTCUSDT"), "btcusdt@miniTicker"),
            (streams.ticker("BTCUSDT"), "btcusdt@ticker"),
            (streams.force_order("BTCUSDT"), "btcusdt@forceOrder"),
            (streams.composite_index("DEFIUSDT"), "defiusdt@compositeIndex"),
            (streams.asset_index("BTCUSDT"), "btcusdt@assetIndex"),
        ],
    )
    def test_names(self, channel, expected):
        """Test symbol is lower-cased into the name."""
        assert channel.name == expected
        assert str(channel) == expected

    def test_kline(self):
        """Test kline interval suffix."""
        assert streams.kline("BTCUSDT", KlineInterval.M1).name == "btcusdt@kline_1m"
        assert streams.kline("btcusdt", KlineInterval.H4).name == "btcusdt@kline_4h"

    def test_continuous_kline(self):
        """Test continuous kline uses pair and lowercase contract type."""
        channel = streams.continuous_kline("BTCUSDT", KlineContractType.PERPETUAL, KlineInterval.M1)
        assert channel.name == "btcusdt_perpetual@continuousKline_1m"
        assert channel.kind == ChannelKind.CONTINUOUS_KLINE

    def test_same_inputs_same_channel(self):
        """Test constructors are pure."""
        assert streams.book_ticker("BTCUSDT") == streams.book_ticker("btcusdt")


class TestAllMarketChannels:
    """Test all-market channel names."""

    @pytest.mark.parametrize(
        "channel,expected",
        [
            (streams.book_tickers(), "!bookTicker"),
            (streams.mark_prices(), "!markPrice@arr"),
            (streams.mini_tickers(), "!miniTicker@arr"),
            (streams.tickers(), "!ticker@arr"),
            (streams.force_orders(), "!forceOrder@arr"),
            (streams.contract_info(), "!contractInfo"),
            (streams.asset_indexes(), "!assetIndex@arr"),
        ],
    )
    def test_names(self, channel, expected):
        """Test fixed names of all-market channels."""
        assert channel.name == expected


class TestDefaultSuppression:
    """Test server-side defaults are left out of names."""

    def test_mark_price_default_speed(self):
        """Test 3s mark price speed is omitted."""
        assert streams.mark_price("BTCUSDT").name == "btcusdt@markPrice"
        assert (
            streams.mark_price("BTCUSDT", MarkPriceUpdateSpeed.SECONDS_3).name
            == "btcusdt@markPrice"
        )

    def test_mark_price_fast_speed(self):
        """Test 1s mark price speed is appended."""
        assert (
            streams.mark_price("BTCUSDT", MarkPriceUpdateSpeed.SECONDS_1).name
            == "btcusdt@markPrice@1s"
        )
        assert streams.mark_prices(MarkPriceUpdateSpeed.SECONDS_1).name == "!markPrice@arr@1s"

    def test_partial_book_depth(self):
        """Test partial depth level and speed."""
        assert (
            streams.partial_book_depth("BTCUSDT", PartialBookDepthLevel.TEN).name
            == "btcusdt@depth10"
        )
        assert (
            streams.partial_book_depth(
                "BTCUSDT", PartialBookDepthLevel.FIVE, BookDepthUpdateSpeed.MILLIS_100
            ).name
            == "btcusdt@depth5@100ms"
        )

    def test_book_depth(self):
        """Test diff depth speed suffix."""
        assert streams.book_depth("BTCUSDT").name == "btcusdt@depth"
        assert (
            streams.book_depth("BTCUSDT", BookDepthUpdateSpeed.MILLIS_500).name
            == "btcusdt@depth@500ms"
        )
