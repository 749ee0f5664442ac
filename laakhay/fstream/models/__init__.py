"""Data models for decoded stream events.

Architecture:
    This module exports every Pydantic v2 model the dispatcher can produce.
    All models are immutable (frozen=True); field names are descriptive and
    the single-letter Binance keys live in the field aliases.

Model Categories:
    - Market data: BookTicker, AggTrade, MarkPriceUpdate, Kline, ...
    - Batches: BookTickers, MarkPriceUpdates, MiniTickers, Tickers,
      AssetIndexUpdates (one array payload, items in wire order)
    - Account data: OrderTradeUpdate, AccountUpdate, MarginCall, ...
    - Sentinel: SubscriptionAck

``Event`` is the closed union of everything above.
"""

from typing import Union

from .account import (
    AccountConfig,
    AccountConfigUpdate,
    AccountInfo,
    AccountUpdate,
    Balance,
    ConditionalOrderTriggerReject,
    Grid,
    GridUpdate,
    MarginCall,
    MarginCallPosition,
    OrderData,
    OrderReject,
    OrderTradeUpdate,
    Position,
    Strategy,
    StrategyUpdate,
    UpdateData,
)
from .base import (
    AccountEvent,
    EventTypeWrapper,
    MarketEvent,
    StreamEvent,
    SubscriptionAck,
    TaggedPayload,
    is_data_event,
)
from .market import (
    AggTrade,
    AssetIndexUpdate,
    AssetIndexUpdates,
    BookDepth,
    BookTicker,
    BookTickers,
    Composition,
    CompositeIndex,
    ContinuousKline,
    ContractInfo,
    ContractInfoBracket,
    ForceOrder,
    ForceOrderData,
    Kline,
    KlineData,
    MarkPriceUpdate,
    MarkPriceUpdates,
    MiniTicker,
    MiniTickers,
    PriceLevel,
    Ticker,
    Tickers,
)

Event = Union[
    # Market data
    BookTicker,
    BookTickers,
    AggTrade,
    MarkPriceUpdate,
    MarkPriceUpdates,
    Kline,
    ContinuousKline,
    MiniTicker,
    MiniTickers,
    Ticker,
    Tickers,
    ForceOrder,
    BookDepth,
    CompositeIndex,
    ContractInfo,
    AssetIndexUpdate,
    AssetIndexUpdates,
    # User data
    OrderTradeUpdate,
    AccountUpdate,
    MarginCall,
    AccountConfigUpdate,
    StrategyUpdate,
    GridUpdate,
    ConditionalOrderTriggerReject,
    # Sentinel
    SubscriptionAck,
]

__all__ = [
    "Event",
    # Bases
    "StreamEvent",
    "MarketEvent",
    "AccountEvent",
    "TaggedPayload",
    "EventTypeWrapper",
    "SubscriptionAck",
    "is_data_event",
    # Market data
    "AggTrade",
    "AssetIndexUpdate",
    "AssetIndexUpdates",
    "BookDepth",
    "BookTicker",
    "BookTickers",
    "Composition",
    "CompositeIndex",
    "ContinuousKline",
    "ContractInfo",
    "ContractInfoBracket",
    "ForceOrder",
    "ForceOrderData",
    "Kline",
    "KlineData",
    "MarkPriceUpdate",
    "MarkPriceUpdates",
    "MiniTicker",
    "MiniTickers",
    "PriceLevel",
    "Ticker",
    "Tickers",
    # User data
    "AccountConfig",
    "AccountConfigUpdate",
    "AccountInfo",
    "AccountUpdate",
    "Balance",
    "ConditionalOrderTriggerReject",
    "Grid",
    "GridUpdate",
    "MarginCall",
    "MarginCallPosition",
    "OrderData",
    "OrderReject",
    "OrderTradeUpdate",
    "Position",
    "Strategy",
    "StrategyUpdate",
    "UpdateData",
]
