"""Message dispatcher: raw text payload -> typed event.

Three decode strategies are tried in a fixed order and the first match
wins:

1. Tagged object: read only the ``"e"`` discriminant, then validate the
   whole payload against the model registered for that tag.
2. Subscription acknowledgement: ``{"result": ..., "id": ...}``.
3. Anonymous array: the first element's tag selects a batch model and every
   element is validated against the matching single-item model.

Anything else is a ``DecodeError`` carrying the raw payload, so schema drift
on the remote side surfaces instead of being dropped.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from .core.enums import EventType
from .core.exceptions import DecodeError
from .models import (
    AccountConfigUpdate,
    AccountUpdate,
    AggTrade,
    AssetIndexUpdate,
    AssetIndexUpdates,
    BookDepth,
    BookTicker,
    BookTickers,
    CompositeIndex,
    ConditionalOrderTriggerReject,
    ContinuousKline,
    ContractInfo,
    Event,
    EventTypeWrapper,
    ForceOrder,
    GridUpdate,
    Kline,
    MarginCall,
    MarkPriceUpdate,
    MarkPriceUpdates,
    MiniTicker,
    MiniTickers,
    OrderTradeUpdate,
    StreamEvent,
    StrategyUpdate,
    SubscriptionAck,
    Ticker,
    Tickers,
)

logger = logging.getLogger(__name__)

# Registry mapping each tag to the model of its single-object payload
_TAGGED_MODELS: dict[EventType, type[StreamEvent]] = {
    # Market data
    EventType.BOOK_TICKER: BookTicker,
    EventType.AGG_TRADE: AggTrade,
    EventType.MARK_PRICE_UPDATE: MarkPriceUpdate,
    EventType.KLINE: Kline,
    EventType.CONTINUOUS_KLINE: ContinuousKline,
    EventType.MINI_TICKER: MiniTicker,
    EventType.TICKER: Ticker,
    EventType.FORCE_ORDER: ForceOrder,
    EventType.DEPTH_UPDATE: BookDepth,
    EventType.COMPOSITE_INDEX: CompositeIndex,
    EventType.CONTRACT_INFO: ContractInfo,
    EventType.ASSET_INDEX_UPDATE: AssetIndexUpdate,
    # User data
    EventType.ORDER_TRADE_UPDATE: OrderTradeUpdate,
    EventType.ACCOUNT_UPDATE: AccountUpdate,
    EventType.MARGIN_CALL: MarginCall,
    EventType.ACCOUNT_CONFIG_UPDATE: AccountConfigUpdate,
    EventType.STRATEGY_UPDATE: StrategyUpdate,
    EventType.GRID_UPDATE: GridUpdate,
    EventType.CONDITIONAL_ORDER_TRIGGER_REJECT: ConditionalOrderTriggerReject,
}

# Tags that may arrive as an anonymous array: tag -> (item model, batch model)
_BATCH_MODELS: dict[EventType, tuple[type[StreamEvent], type[StreamEvent]]] = {
    EventType.MARK_PRICE_UPDATE: (MarkPriceUpdate, MarkPriceUpdates),
    EventType.MINI_TICKER: (MiniTicker, MiniTickers),
    EventType.TICKER: (Ticker, Tickers),
    EventType.BOOK_TICKER: (BookTicker, BookTickers),
    EventType.ASSET_INDEX_UPDATE: (AssetIndexUpdate, AssetIndexUpdates),
}


class SubscribeResponse(BaseModel):
    """Reply to a SUBSCRIBE request; ``result`` is null on success."""

    result: Any = None
    id: int | None = None


def _read_tag(obj: Any) -> str | None:
    """Return the ``"e"`` discriminant of ``obj`` if it has the wrapper shape."""
    if not isinstance(obj, dict):
        return None
    try:
        return EventTypeWrapper.model_validate(obj).event_type
    except ValidationError:
        return None


def _validate(model: type[StreamEvent], obj: Any, payload: str) -> StreamEvent:
    try:
        return model.model_validate(obj)
    except ValidationError as exc:
        raise DecodeError(
            f"Payload does not match {model.__name__} schema: {payload!r}", payload=payload
        ) from exc


class MessageDispatcher:
    """Decode raw websocket text into ``Event`` instances."""

    def dispatch(self, payload: str) -> Event:
        """Decode one payload.

        Args:
            payload: Raw text frame

        Returns:
            The decoded event

        Raises:
            DecodeError: If no strategy matches, a known tag fails its schema,
                or the tag itself is unknown
        """
        try:
            value = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"No decoder for {payload!r}", payload=payload) from exc

        event = self._decode_tagged(value, payload)
        if event is not None:
            return event
        event = self._decode_subscribe_response(value)
        if event is not None:
            return event
        event = self._decode_anonymous_array(value, payload)
        if event is not None:
            return event
        raise DecodeError(f"No decoder for {payload!r}", payload=payload)

    def _decode_tagged(self, value: Any, payload: str) -> StreamEvent | None:
        tag = _read_tag(value)
        if tag is None:
            return None
        event_type = EventType.from_str(tag)
        if event_type is None:
            raise DecodeError(f"Unknown event type {tag!r} in {payload!r}", payload=payload)
        return _validate(_TAGGED_MODELS[event_type], value, payload)

    def _decode_subscribe_response(self, value: Any) -> SubscriptionAck | None:
        if not isinstance(value, dict) or not ("result" in value or "id" in value):
            return None
        try:
            response = SubscribeResponse.model_validate(value)
        except ValidationError:
            return None
        if response.id is not None:
            logger.info(f"Subscription request acknowledged ({response.id})")
        return SubscriptionAck()

    def _decode_anonymous_array(self, value: Any, payload: str) -> StreamEvent | None:
        if not isinstance(value, list) or not value:
            return None
        tag = _read_tag(value[0])
        event_type = EventType.from_str(tag) if tag is not None else None
        entry = _BATCH_MODELS.get(event_type) if event_type is not None else None
        if entry is None:
            return None
        item_model, batch_model = entry
        items = tuple(_validate(item_model, item, payload) for item in value)
        return batch_model(data=items)


_default_dispatcher = MessageDispatcher()


def decode(payload: str) -> Event:
    """Decode ``payload`` with a shared dispatcher."""
    return _default_dispatcher.dispatch(payload)


def batch_eligible_tags() -> list[EventType]:
    """List the tags that can arrive as an anonymous array."""
    return list(_BATCH_MODELS.keys())


__all__ = [
    "MessageDispatcher",
    "SubscribeResponse",
    "batch_eligible_tags",
    "decode",
]
