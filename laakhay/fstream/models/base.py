"""Base classes shared by every decoded stream event."""

from pydantic import BaseModel, ConfigDict, Field


class StreamEvent(BaseModel):
    """Root of the event hierarchy.

    Payload fields are declared with their single-letter Binance key as the
    alias; decimal strings are coerced to ``float`` by pydantic's lax mode.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class MarketEvent(StreamEvent):
    """Public market data event."""


class AccountEvent(StreamEvent):
    """User data event delivered on a listen-key session."""


class TaggedPayload(BaseModel):
    """Nested payload object of a tagged event (no discriminant of its own)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class EventTypeWrapper(BaseModel):
    """Reads only the ``"e"`` discriminant of a payload.

    Unknown keys are ignored, so any object with a string ``"e"`` matches.
    """

    event_type: str = Field(alias="e")


class SubscriptionAck(StreamEvent):
    """Sentinel emitted for a subscription acknowledgement.

    Carries no payload and is neither market nor account data.
    """


def is_data_event(event: StreamEvent) -> bool:
    """True for market or account events, False for the acknowledgement."""
    return isinstance(event, (MarketEvent, AccountEvent))


__all__ = [
    "AccountEvent",
    "EventTypeWrapper",
    "MarketEvent",
    "StreamEvent",
    "SubscriptionAck",
    "TaggedPayload",
    "is_data_event",
]
