"""Laakhay FStream - Binance USD-M futures websocket client."""

from . import streams
from .auth import ListenKeyClient
from .config import (
    BASE_URL_FUTURES,
    BASE_URL_FUTURES_TESTNET,
    WS_URL_FUTURES,
    WS_URL_FUTURES_TESTNET,
    ApiAuth,
    SessionConfig,
    WouldBlockConfig,
)
from .core import (
    DecodeError,
    ErrorKind,
    EventType,
    FStreamError,
    HandoffError,
    HttpResponseError,
    SocketError,
    StreamConfigurationError,
    StreamError,
    UrlParseError,
    is_recoverable,
)
from .dispatcher import MessageDispatcher, decode
from .models import Event, SubscriptionAck, is_data_event
from .runtime import ConnectionWorker, EventStream, WorkerState
from .session import FuturesStream
from .streams import Channel, ChannelKind

__version__ = "0.1.0"

__all__ = [
    # Session
    "FuturesStream",
    "EventStream",
    "ConnectionWorker",
    "WorkerState",
    "ListenKeyClient",
    # Configuration
    "ApiAuth",
    "SessionConfig",
    "WouldBlockConfig",
    "WS_URL_FUTURES",
    "WS_URL_FUTURES_TESTNET",
    "BASE_URL_FUTURES",
    "BASE_URL_FUTURES_TESTNET",
    # Streams
    "streams",
    "Channel",
    "ChannelKind",
    # Decoding
    "MessageDispatcher",
    "decode",
    "Event",
    "EventType",
    "SubscriptionAck",
    "is_data_event",
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
