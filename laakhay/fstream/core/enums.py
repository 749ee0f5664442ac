"""Wire enumerations for the Binance USD-M futures stream.

Architecture:
    Every enum here is a string enum whose values are exactly what Binance
    puts on (or expects from) the wire. Pydantic models decode payload
    fields straight into these types, and the stream catalog formats them
    into channel names.

Key Types:
    - EventType: the ``"e"`` discriminant of every tagged payload
    - Stream configuration: KlineInterval, MarkPriceUpdateSpeed,
      KlineContractType, PartialBookDepthLevel, BookDepthUpdateSpeed
    - Account payloads: Side, OrderType, OrderStatus, PositionSide, ...
"""

from enum import Enum
from typing import Optional


class EventType(str, Enum):
    """Discriminant carried in the ``"e"`` field of every tagged payload."""

    # Market data
    BOOK_TICKER = "bookTicker"
    AGG_TRADE = "aggTrade"
    MARK_PRICE_UPDATE = "markPriceUpdate"
    KLINE = "kline"
    CONTINUOUS_KLINE = "continuous_kline"
    MINI_TICKER = "24hrMiniTicker"
    TICKER = "24hrTicker"
    FORCE_ORDER = "forceOrder"
    DEPTH_UPDATE = "depthUpdate"
    COMPOSITE_INDEX = "compositeIndex"
    CONTRACT_INFO = "contractInfo"
    ASSET_INDEX_UPDATE = "assetIndexUpdate"

    # User data
    ORDER_TRADE_UPDATE = "ORDER_TRADE_UPDATE"
    ACCOUNT_UPDATE = "ACCOUNT_UPDATE"
    MARGIN_CALL = "MARGIN_CALL"
    ACCOUNT_CONFIG_UPDATE = "ACCOUNT_CONFIG_UPDATE"
    STRATEGY_UPDATE = "STRATEGY_UPDATE"
    GRID_UPDATE = "GRID_UPDATE"
    CONDITIONAL_ORDER_TRIGGER_REJECT = "CONDITIONAL_ORDER_TRIGGER_REJECT"

    @property
    def is_user_data(self) -> bool:
        """True for tags delivered on the listen-key (account) stream."""
        return self.value.isupper()

    @classmethod
    def from_str(cls, tag: str) -> Optional["EventType"]:
        """Get event type from its wire tag. Returns None if no match."""
        try:
            return cls(tag)
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Stream configuration
# ---------------------------------------------------------------------------


class KlineInterval(str, Enum):
    """Kline/candlestick intervals supported by the futures streams."""

    # Minutes
    M1 = "1m"
    M3 = "3m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"

    # Hours
    H1 = "1h"
    H2 = "2h"
    H4 = "4h"
    H6 = "6h"
    H8 = "8h"
    H12 = "12h"

    # Days/Weeks/Months
    D1 = "1d"
    D3 = "3d"
    W1 = "1w"
    MO1 = "1M"


class MarkPriceUpdateSpeed(str, Enum):
    """Mark price push frequency. ``3s`` is the server default."""

    SECONDS_1 = "1s"
    SECONDS_3 = "3s"


class KlineContractType(str, Enum):
    """Contract type of a continuous kline.

    The wire value is upper-case; the channel name uses the lower-case form.
    """

    PERPETUAL = "PERPETUAL"
    CURRENT_QUARTER = "CURRENT_QUARTER"
    NEXT_QUARTER = "NEXT_QUARTER"

    @property
    def stream_value(self) -> str:
        return self.value.lower()


class PartialBookDepthLevel(str, Enum):
    """Number of price levels in a partial book depth snapshot."""

    FIVE = "5"
    TEN = "10"
    TWENTY = "20"


class BookDepthUpdateSpeed(str, Enum):
    """Order book push frequency. ``250ms`` is the server default."""

    MILLIS_100 = "100ms"
    MILLIS_250 = "250ms"
    MILLIS_500 = "500ms"


# ---------------------------------------------------------------------------
# Account / order payloads
# ---------------------------------------------------------------------------


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class PositionSide(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"
    BOTH = "BOTH"


class OrderType(str, Enum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP = "STOP"
    STOP_MARKET = "STOP_MARKET"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_MARKET = "TAKE_PROFIT_MARKET"
    TRAILING_STOP_MARKET = "TRAILING_STOP_MARKET"
    LIQUIDATION = "LIQUIDATION"


class TimeInForce(str, Enum):
    GTC = "GTC"
    IOC = "IOC"
    FOK = "FOK"
    GTX = "GTX"
    GTD = "GTD"


class ExecutionType(str, Enum):
    NEW = "NEW"
    CANCELED = "CANCELED"
    CALCULATED = "CALCULATED"
    EXPIRED = "EXPIRED"
    TRADE = "TRADE"
    AMENDMENT = "AMENDMENT"


class OrderStatus(str, Enum):
    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    EXPIRED_IN_MATCH = "EXPIRED_IN_MATCH"


class WorkingType(str, Enum):
    MARK_PRICE = "MARK_PRICE"
    CONTRACT_PRICE = "CONTRACT_PRICE"


class MarginType(str, Enum):
    ISOLATED = "isolated"
    CROSSED = "crossed"
    # ACCOUNT_UPDATE positions report "cross" rather than "crossed"
    CROSS = "cross"


class StpMode(str, Enum):
    """Self-trade prevention mode."""

    NONE = "NONE"
    EXPIRE_TAKER = "EXPIRE_TAKER"
    EXPIRE_BOTH = "EXPIRE_BOTH"
    EXPIRE_MAKER = "EXPIRE_MAKER"


class PriceMatch(str, Enum):
    NONE = "NONE"
    OPPONENT = "OPPONENT"
    OPPONENT_5 = "OPPONENT_5"
    OPPONENT_10 = "OPPONENT_10"
    OPPONENT_20 = "OPPONENT_20"
    QUEUE = "QUEUE"
    QUEUE_5 = "QUEUE_5"
    QUEUE_10 = "QUEUE_10"
    QUEUE_20 = "QUEUE_20"


class AccountUpdateReason(str, Enum):
    """Reason code of an ACCOUNT_UPDATE event."""

    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    ORDER = "ORDER"
    FUNDING_FEE = "FUNDING_FEE"
    WITHDRAW_REJECT = "WITHDRAW_REJECT"
    ADJUSTMENT = "ADJUSTMENT"
    INSURANCE_CLEAR = "INSURANCE_CLEAR"
    ADMIN_DEPOSIT = "ADMIN_DEPOSIT"
    ADMIN_WITHDRAW = "ADMIN_WITHDRAW"
    MARGIN_TRANSFER = "MARGIN_TRANSFER"
    MARGIN_TYPE_CHANGE = "MARGIN_TYPE_CHANGE"
    ASSET_TRANSFER = "ASSET_TRANSFER"
    OPTIONS_PREMIUM_FEE = "OPTIONS_PREMIUM_FEE"
    OPTIONS_SETTLE_PROFIT = "OPTIONS_SETTLE_PROFIT"
    AUTO_EXCHANGE = "AUTO_EXCHANGE"
    COIN_SWAP_DEPOSIT = "COIN_SWAP_DEPOSIT"
    COIN_SWAP_WITHDRAW = "COIN_SWAP_WITHDRAW"


class ContractType(str, Enum):
    PERPETUAL = "PERPETUAL"
    CURRENT_MONTH = "CURRENT_MONTH"
    NEXT_MONTH = "NEXT_MONTH"
    CURRENT_QUARTER = "CURRENT_QUARTER"
    NEXT_QUARTER = "NEXT_QUARTER"
    PERPETUAL_DELIVERING = "PERPETUAL_DELIVERING"


class ContractStatus(str, Enum):
    PENDING_TRADING = "PENDING_TRADING"
    TRADING = "TRADING"
    PRE_DELIVERING = "PRE_DELIVERING"
    DELIVERING = "DELIVERING"
    DELIVERED = "DELIVERED"
    PRE_SETTLE = "PRE_SETTLE"
    SETTLING = "SETTLING"
    CLOSE = "CLOSE"


class StrategyStatus(str, Enum):
    NEW = "NEW"
    WORKING = "WORKING"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
