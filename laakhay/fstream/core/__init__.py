"""Core components."""

from .enums import (
    AccountUpdateReason,
    BookDepthUpdateSpeed,
    ContractStatus,
    ContractType,
    EventType,
    ExecutionType,
    KlineContractType,
    KlineInterval,
    MarginType,
    MarkPriceUpdateSpeed,
    OrderStatus,
    OrderType,
    PartialBookDepthLevel,
    PositionSide,
    PriceMatch,
    Side,
    StpMode,
    StrategyStatus,
    TimeInForce,
    WorkingType,
)
from .exceptions import (
    DecodeError,
    ErrorKind,
    FStreamError,
    HandoffError,
    HttpResponseError,
    SocketError,
    StreamConfigurationError,
    StreamError,
    UrlParseError,
    is_recoverable,
)

__all__ = [
    # Enums
    "EventType",
    "KlineInterval",
    "MarkPriceUpdateSpeed",
    "KlineContractType",
    "PartialBookDepthLevel",
    "BookDepthUpdateSpeed",
    "Side",
    "PositionSide",
    "OrderType",
    "TimeInForce",
    "ExecutionType",
    "OrderStatus",
    "WorkingType",
    "MarginType",
    "StpMode",
    "PriceMatch",
    "AccountUpdateReason",
    "ContractType",
    "ContractStatus",
    "StrategyStatus",
    # Exceptions
    "ErrorKind",
    "is_recoverable",
    "FStreamError",
    "StreamConfigurationError",
    "StreamError",
    "UrlParseError",
    "SocketError",
    "HandoffError",
    "DecodeError",
    "HttpResponseError",
]
