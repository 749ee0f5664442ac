"""User data event models (listen-key streams)."""

from pydantic import Field

from ..core.enums import (
    AccountUpdateReason,
    EventType,
    ExecutionType,
    MarginType,
    OrderStatus,
    OrderType,
    PositionSide,
    PriceMatch,
    Side,
    StpMode,
    StrategyStatus,
    TimeInForce,
    WorkingType,
)
from .base import AccountEvent, TaggedPayload


class OrderData(TaggedPayload):
    symbol: str = Field(alias="s")
    client_order_id: str = Field(alias="c")
    side: Side = Field(alias="S")
    order_type: OrderType = Field(alias="o")
    time_in_force: TimeInForce = Field(alias="f")
    original_quantity: float = Field(alias="q")
    original_price: float = Field(alias="p")
    average_price: float = Field(alias="ap")
    stop_price: float = Field(alias="sp")
    execution_type: ExecutionType = Field(alias="x")
    order_status: OrderStatus = Field(alias="X")
    order_id: int = Field(alias="i")
    order_last_filled_quantity: float = Field(alias="l")
    order_filled_accumulated_quantity: float = Field(alias="z")
    last_filled_price: float = Field(alias="L")
    # Commission fields only appear on fills
    commission_asset: str = Field(default="", alias="N")
    commission: float = Field(default=0.0, alias="n")
    order_trade_time: int = Field(alias="T")
    trade_id: int = Field(alias="t")
    bids_notional: float = Field(alias="b")
    ask_notional: float = Field(alias="a")
    is_trade_maker_side: bool = Field(alias="m")
    is_reduce_only: bool = Field(alias="R")
    stop_price_working_type: WorkingType = Field(alias="wt")
    original_order_type: OrderType = Field(alias="ot")
    position_side: PositionSide = Field(alias="ps")
    is_close_all: bool = Field(default=False, alias="cp")
    activation_price: float = Field(default=0.0, alias="AP")
    callback_rate: float = Field(default=0.0, alias="cr")
    is_price_protection_enabled: bool = Field(alias="pP")
    realized_profit: float = Field(alias="rp")
    stp_mode: StpMode = Field(default=StpMode.NONE, alias="V")
    price_match_mode: PriceMatch = Field(default=PriceMatch.NONE, alias="pm")
    gtd_order_auto_cancel_time: int = Field(default=0, alias="gtd")


class OrderTradeUpdate(AccountEvent):
    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    transaction_time: int = Field(alias="T")
    order_data: OrderData = Field(alias="o")


class Balance(TaggedPayload):
    asset: str = Field(alias="a")
    wallet_balance: float = Field(alias="wb")
    cross_wallet_balance: float = Field(alias="cw")
    balance_change: float = Field(alias="bc")


class Position(TaggedPayload):
    symbol: str = Field(alias="s")
    position_amount: float = Field(alias="pa")
    entry_price: float = Field(alias="ep")
    breakeven_price: float = Field(alias="bep")
    accumulated_realized: float = Field(alias="cr")
    unrealized_pnl: float = Field(alias="up")
    margin_type: MarginType = Field(alias="mt")
    isolated_wallet: float = Field(alias="iw")
    position_side: PositionSide = Field(alias="ps")


class UpdateData(TaggedPayload):
    event_reason_type: AccountUpdateReason = Field(alias="m")
    balances: tuple[Balance, ...] = Field(alias="B")
    positions: tuple[Position, ...] = Field(alias="P")


class AccountUpdate(AccountEvent):
    """Balance and position update."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    transaction_time: int = Field(alias="T")
    update_data: UpdateData = Field(alias="a")


class MarginCallPosition(TaggedPayload):
    symbol: str = Field(alias="s")
    position_side: PositionSide = Field(alias="ps")
    position_amount: float = Field(alias="pa")
    margin_type: MarginType = Field(alias="mt")
    isolated_wallet: float = Field(alias="iw")
    mark_price: float = Field(alias="mp")
    unrealized_pnl: float = Field(alias="up")
    maintenance_margin_required: float = Field(alias="mm")


class MarginCall(AccountEvent):
    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    cross_wallet_balance: float = Field(alias="cw")
    positions: tuple[MarginCallPosition, ...] = Field(alias="p")


class AccountConfig(TaggedPayload):
    symbol: str = Field(alias="s")
    leverage: int = Field(alias="l")


class AccountInfo(TaggedPayload):
    multi_assets_mode: bool | None = Field(default=None, alias="j")


class AccountConfigUpdate(AccountEvent):
    """Leverage change (``ac``) or multi-assets mode change (``ai``)."""

    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    transaction_time: int = Field(alias="T")
    account_config: AccountConfig | None = Field(default=None, alias="ac")
    account_info: AccountInfo | None = Field(default=None, alias="ai")


class Strategy(TaggedPayload):
    strategy_id: int = Field(alias="si")
    strategy_type: str = Field(alias="st")
    strategy_status: StrategyStatus = Field(alias="ss")
    symbol: str = Field(alias="s")
    update_time: int = Field(alias="ut")
    op_code: int = Field(alias="c")


class StrategyUpdate(AccountEvent):
    event_type: EventType = Field(alias="e")
    transaction_time: int = Field(alias="T")
    event_time: int = Field(alias="E")
    strategy: Strategy = Field(alias="su")


class Grid(TaggedPayload):
    strategy_id: int = Field(alias="si")
    strategy_type: str = Field(alias="st")
    strategy_status: StrategyStatus = Field(alias="ss")
    symbol: str = Field(alias="s")
    realized_pnl: float = Field(alias="r")
    unmatched_average_price: float = Field(alias="up")
    unmatched_qty: float = Field(alias="uq")
    unmatched_fee: float = Field(alias="uf")
    matched_pnl: float = Field(alias="mp")
    update_time: int = Field(alias="ut")


class GridUpdate(AccountEvent):
    event_type: EventType = Field(alias="e")
    transaction_time: int = Field(alias="T")
    event_time: int = Field(alias="E")
    grid: Grid = Field(alias="gu")


class OrderReject(TaggedPayload):
    symbol: str = Field(alias="s")
    order_id: int = Field(alias="i")
    reject_reason: str = Field(alias="r")


class ConditionalOrderTriggerReject(AccountEvent):
    event_type: EventType = Field(alias="e")
    event_time: int = Field(alias="E")
    message_send_time: int = Field(alias="T")
    order_reject: OrderReject = Field(alias="or")
