"""Runtime pieces of a stream session: transport, worker and hand-off queue."""

from .handoff import EventStream, HandoffQueue
from .transport import (
    Frame,
    FrameKind,
    Transport,
    TransportConfig,
    WebSocketTransport,
    WouldBlockError,
)
from .worker import ConnectionWorker, WorkerState

__all__ = [
    "ConnectionWorker",
    "EventStream",
    "Frame",
    "FrameKind",
    "HandoffQueue",
    "Transport",
    "TransportConfig",
    "WebSocketTransport",
    "WorkerState",
    "WouldBlockError",
]
