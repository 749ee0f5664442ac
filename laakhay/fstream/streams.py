"""Stream catalog: canonical Binance futures channel names.

Each constructor is a pure function of its arguments. Symbols are
lower-cased and server-side defaults (3s mark price, 250ms depth) are left
out of the name, so equal inputs always produce the same channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .core.enums import (
    BookDepthUpdateSpeed,
    KlineContractType,
    KlineInterval,
    MarkPriceUpdateSpeed,
    PartialBookDepthLevel,
)

DEFAULT_MARK_PRICE_SPEED = MarkPriceUpdateSpeed.SECONDS_3
DEFAULT_BOOK_DEPTH_SPEED = BookDepthUpdateSpeed.MILLIS_250


class ChannelKind(str, Enum):
    """Kinds of public market data channels."""

    BOOK_TICKER = "book_ticker"
    BOOK_TICKERS = "book_tickers"
    AGG_TRADE = "agg_trade"
    MARK_PRICE = "mark_price"
    MARK_PRICES = "mark_prices"
    KLINE = "kline"
    CONTINUOUS_KLINE = "continuous_kline"
    MINI_TICKER = "mini_ticker"
    MINI_TICKERS = "mini_tickers"
    TICKER = "ticker"
    TICKERS = "tickers"
    FORCE_ORDER = "force_order"
    FORCE_ORDERS = "force_orders"
    PARTIAL_BOOK_DEPTH = "partial_book_depth"
    BOOK_DEPTH = "book_depth"
    COMPOSITE_INDEX = "composite_index"
    CONTRACT_INFO = "contract_info"
    ASSET_INDEX = "asset_index"
    ASSET_INDEXES = "asset_indexes"


@dataclass(frozen=True)
class Channel:
    """A declared subscription: its kind and canonical stream name."""

    kind: ChannelKind
    name: str

    def __str__(self) -> str:
        return self.name


def _sym(symbol: str) -> str:
    return symbol.strip().lower()


def _speed_suffix(speed: Enum, default: Enum) -> str:
    return "" if speed == default else f"@{speed.value}"


def book_ticker(symbol: str) -> Channel:
    return Channel(ChannelKind.BOOK_TICKER, f"{_sym(symbol)}@bookTicker")


def book_tickers() -> Channel:
    return Channel(ChannelKind.BOOK_TICKERS, "!bookTicker")


def agg_trade(symbol: str) -> Channel:
    return Channel(ChannelKind.AGG_TRADE, f"{_sym(symbol)}@aggTrade")


def mark_price(
    symbol: str, update_speed: MarkPriceUpdateSpeed = DEFAULT_MARK_PRICE_SPEED
) -> Channel:
    """Mark price and funding rate for one symbol.

    Examples:
        >>> mark_price("BTCUSDT").name
        'btcusdt@markPrice'
        >>> mark_price("BTCUSDT", MarkPriceUpdateSpeed.SECONDS_1).name
        'btcusdt@markPrice@1s'
    """
    suffix = _speed_suffix(update_speed, DEFAULT_MARK_PRICE_SPEED)
    return Channel(ChannelKind.MARK_PRICE, f"{_sym(symbol)}@markPrice{suffix}")


def mark_prices(update_speed: MarkPriceUpdateSpeed = DEFAULT_MARK_PRICE_SPEED) -> Channel:
    """Mark price for all symbols (array payload)."""
    suffix = _speed_suffix(update_speed, DEFAULT_MARK_PRICE_SPEED)
    return Channel(ChannelKind.MARK_PRICES, f"!markPrice@arr{suffix}")


def kline(symbol: str, interval: KlineInterval) -> Channel:
    return Channel(ChannelKind.KLINE, f"{_sym(symbol)}@kline_{interval.value}")


def continuous_kline(
    pair: str, contract_type: KlineContractType, interval: KlineInterval
) -> Channel:
    """Continuous contract kline.

    Examples:
        >>> continuous_kline("BTCUSDT", KlineContractType.PERPETUAL, KlineInterval.M1).name
        'btcusdt_perpetual@continuousKline_1m'
    """
    return Channel(
        ChannelKind.CONTINUOUS_KLINE,
        f"{_sym(pair)}_{contract_type.stream_value}@continuousKline_{interval.value}",
    )


def mini_ticker(symbol: str) -> Channel:
    return Channel(ChannelKind.MINI_TICKER, f"{_sym(symbol)}@miniTicker")


def mini_tickers() -> Channel:
    return Channel(ChannelKind.MINI_TICKERS, "!miniTicker@arr")


def ticker(symbol: str) -> Channel:
    return Channel(ChannelKind.TICKER, f"{_sym(symbol)}@ticker")


def tickers() -> Channel:
    return Channel(ChannelKind.TICKERS, "!ticker@arr")


def force_order(symbol: str) -> Channel:
    return Channel(ChannelKind.FORCE_ORDER, f"{_sym(symbol)}@forceOrder")


def force_orders() -> Channel:
    return Channel(ChannelKind.FORCE_ORDERS, "!forceOrder@arr")


def partial_book_depth(
    symbol: str,
    level: PartialBookDepthLevel,
    update_speed: BookDepthUpdateSpeed = DEFAULT_BOOK_DEPTH_SPEED,
) -> Channel:
    """Top ``level`` bids/asks.

    Examples:
        >>> partial_book_depth("BTCUSDT", PartialBookDepthLevel.TEN).name
        'btcusdt@depth10'
        >>> partial_book_depth("BTCUSDT", PartialBookDepthLevel.FIVE, BookDepthUpdateSpeed.MILLIS_100).name
        'btcusdt@depth5@100ms'
    """
    suffix = _speed_suffix(update_speed, DEFAULT_BOOK_DEPTH_SPEED)
    return Channel(
        ChannelKind.PARTIAL_BOOK_DEPTH, f"{_sym(symbol)}@depth{level.value}{suffix}"
    )


def book_depth(
    symbol: str, update_speed: BookDepthUpdateSpeed = DEFAULT_BOOK_DEPTH_SPEED
) -> Channel:
    """Diff book depth updates."""
    suffix = _speed_suffix(update_speed, DEFAULT_BOOK_DEPTH_SPEED)
    return Channel(ChannelKind.BOOK_DEPTH, f"{_sym(symbol)}@depth{suffix}")


def composite_index(symbol: str) -> Channel:
    return Channel(ChannelKind.COMPOSITE_INDEX, f"{_sym(symbol)}@compositeIndex")


def contract_info() -> Channel:
    return Channel(ChannelKind.CONTRACT_INFO, "!contractInfo")


def asset_index(symbol: str) -> Channel:
    return Channel(ChannelKind.ASSET_INDEX, f"{_sym(symbol)}@assetIndex")


def asset_indexes() -> Channel:
    return Channel(ChannelKind.ASSET_INDEXES, "!assetIndex@arr")


__all__ = [
    "Channel",
    "ChannelKind",
    "DEFAULT_BOOK_DEPTH_SPEED",
    "DEFAULT_MARK_PRICE_SPEED",
    "agg_trade",
    "asset_index",
    "asset_indexes",
    "book_depth",
    "book_ticker",
    "book_tickers",
    "composite_index",
    "continuous_kline",
    "contract_info",
    "force_order",
    "force_orders",
    "kline",
    "mark_price",
    "mark_prices",
    "mini_ticker",
    "mini_tickers",
    "partial_book_depth",
    "ticker",
    "tickers",
]
