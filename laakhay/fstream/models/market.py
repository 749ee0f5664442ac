"""Market data event models (public streams)."""

from pydantic import Field

from ..core.enums import (
    ContractStatus,
    ContractType,
    EventType,
    KlineContractType,
    KlineInterval,
    OrderStatus,
    OrderType,
    Side,
    TimeInForce,
)
from .base import MarketEvent, TaggedPayload

# (price, quantity)
PriceLevel = tuple[float, float]


class BookTicker(MarketEvent):
    """Best bid/ask update (``<symbol>@bookTicker``)."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    symbol: str = Field(alias="s")
    update_id: int = Field(alias="u")
    bid_price: float = Field(alias="b")
    bid_quantity: float = Field(alias="B")
    ask_price: float = Field(alias="a")
    ask_quantity: float = Field(alias="A")
    transaction_time: int = Field(alias="T")


class BookTickers(MarketEvent):
    data: tuple[BookTicker, ...]


class AggTrade(MarketEvent):
    """Aggregated trade (``<symbol>@aggTrade``)."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    symbol: str = Field(alias="s")
    agg_trade_id: int = Field(alias="a")
    price: float = Field(alias="p")
    quantity: float = Field(alias="q")
    first_trade_id: int = Field(alias="f")
    last_trade_id: int = Field(alias="l")
    trade_time: int = Field(alias="T")
    buyer_is_market_maker: bool = Field(alias="m")


class MarkPriceUpdate(MarketEvent):
    """Mark price, index price and funding rate."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    symbol: str = Field(alias="s")
    mark_price: float = Field(alias="p")
    index_price: float = Field(alias="i")
    estimated_settle_price: float = Field(alias="P")
    funding_rate: float = Field(alias="r")
    next_funding_time: int = Field(alias="T")


class MarkPriceUpdates(MarketEvent):
    data: tuple[MarkPriceUpdate, ...]


class KlineData(TaggedPayload):
    kline_start_time: int = Field(alias="t")
    kline_close_time: int = Field(alias="T")
    # Absent on continuous klines
    kline_symbol: str = Field(default="", alias="s")
    interval: KlineInterval = Field(alias="i")
    first_trade_id: int = Field(alias="f")
    last_trade_id: int = Field(alias="L")
    open_price: float = Field(alias="o")
    close_price: float = Field(alias="c")
    high_price: float = Field(alias="h")
    low_price: float = Field(alias="l")
    base_asset_volume: float = Field(alias="v")
    number_of_trades: int = Field(alias="n")
    is_kline_closed: bool = Field(alias="x")
    quote_asset_volume: float = Field(alias="q")
    taker_buy_base_asset_volume: float = Field(alias="V")
    taker_buy_quote_asset_volume: float = Field(alias="Q")


class Kline(MarketEvent):
    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    symbol: str = Field(alias="s")
    kline_data: KlineData = Field(alias="k")


class ContinuousKline(MarketEvent):
    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    pair: str = Field(alias="ps")
    contract_type: KlineContractType = Field(alias="ct")
    kline_data: KlineData = Field(alias="k")


class MiniTicker(MarketEvent):
    """24hr rolling window mini ticker."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    symbol: str = Field(alias="s")
    close_price: float = Field(alias="c")
    open_price: float = Field(alias="o")
    high_price: float = Field(alias="h")
    low_price: float = Field(alias="l")
    total_traded_base_asset_volume: float = Field(alias="v")
    total_traded_quote_asset_volume: float = Field(alias="q")


class MiniTickers(MarketEvent):
    data: tuple[MiniTicker, ...]


class Ticker(MarketEvent):
    """24hr rolling window ticker statistics."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    symbol: str = Field(alias="s")
    price_change: float = Field(alias="p")
    price_change_percent: float = Field(alias="P")
    weighted_avg_price: float = Field(alias="w")
    last_price: float = Field(alias="c")
    last_quantity: float = Field(alias="Q")
    open_price: float = Field(alias="o")
    high_price: float = Field(alias="h")
    low_price: float = Field(alias="l")
    total_traded_base_asset_volume: float = Field(alias="v")
    total_traded_quote_asset_volume: float = Field(alias="q")
    statistics_open_time: int = Field(alias="O")
    statistics_close_time: int = Field(alias="C")
    first_trade_id: int = Field(alias="F")
    last_trade_id: int = Field(alias="L")
    total_number_of_trades: int = Field(alias="n")


class Tickers(MarketEvent):
    data: tuple[Ticker, ...]


class ForceOrderData(TaggedPayload):
    symbol: str = Field(alias="s")
    side: Side = Field(alias="S")
    order_type: OrderType = Field(alias="o")
    time_in_force: TimeInForce = Field(alias="f")
    original_quantity: float = Field(alias="q")
    price: float = Field(alias="p")
    average_price: float = Field(alias="ap")
    order_status: OrderStatus = Field(alias="X")
    order_last_filled_quantity: float = Field(alias="l")
    order_filled_accumulated_quantity: float = Field(alias="z")
    order_trade_time: int = Field(alias="T")


class ForceOrder(MarketEvent):
    """Liquidation order snapshot."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    order: ForceOrderData = Field(alias="o")


class BookDepth(MarketEvent):
    """Partial or diff order book update."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    transaction_time: int = Field(alias="T")
    symbol: str = Field(alias="s")
    first_update_id: int = Field(alias="U")
    final_update_id: int = Field(alias="u")
    previous_final_update_id: int = Field(alias="pu")
    bids: tuple[PriceLevel, ...] = Field(alias="b")
    asks: tuple[PriceLevel, ...] = Field(alias="a")


class Composition(TaggedPayload):
    base_asset: str = Field(alias="b")
    quote_asset: str = Field(alias="q")
    weight_quantity: float = Field(alias="w")
    weight_percentage: float = Field(alias="W")
    index_price: float = Field(alias="i")


class CompositeIndex(MarketEvent):
    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    symbol: str = Field(alias="s")
    price: float = Field(alias="p")
    composition_type: str = Field(alias="C")
    composition: tuple[Composition, ...] = Field(alias="c")


class ContractInfoBracket(TaggedPayload):
    notional_bracket: int = Field(alias="bs")
    floor_notional: float = Field(alias="bnf")
    cap_notional: float = Field(alias="bnc")
    maintenance_ratio: float = Field(alias="mmr")
    auxiliary_number: float = Field(alias="cf")
    min_leverage: int = Field(alias="mi")
    max_leverage: int = Field(alias="ma")


class ContractInfo(MarketEvent):
    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    symbol: str = Field(alias="s")
    pair: str = Field(alias="ps")
    contract_type: ContractType = Field(alias="ct")
    delivery_date_time: int = Field(alias="dt")
    onboard_date_time: int = Field(alias="ot")
    contract_status: ContractStatus = Field(alias="cs")
    # Only pushed when the brackets change
    brackets: tuple[ContractInfoBracket, ...] = Field(default=(), alias="bks")


class AssetIndexUpdate(MarketEvent):
    """Multi-assets mode asset index."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    asset_index_symbol: str = Field(alias="s")
    index_price: float = Field(alias="i")
    bid_buffer: float = Field(alias="b")
    ask_buffer: float = Field(alias="a")
    bid_rate: float = Field(alias="B")
    ask_rate: float = Field(alias="A")
    auto_exchange_bid_buffer: float = Field(alias="q")
    auto_exchange_ask_buffer: float = Field(alias="g")
    auto_exchange_bid_rate: float = Field(alias="Q")
    auto_exchange_ask_rate: float = Field(alias="G")


class AssetIndexUpdates(MarketEvent):
    data: tuple[AssetIndexUpdate, ...]
