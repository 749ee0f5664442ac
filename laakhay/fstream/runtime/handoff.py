"""Hand-off queue between the connection worker and the consumer.

Unbounded, FIFO, single producer and single consumer. The producer never
waits on the consumer; the consumer waits only until the next event or
until the producer closes the queue.
"""

from __future__ import annotations

import asyncio
import logging

from ..core.exceptions import HandoffError
from ..models import Event

logger = logging.getLogger(__name__)

_CLOSED = object()


class HandoffQueue:
    """Producer/consumer pair sharing one ``asyncio.Queue``."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._producer_closed = False
        self._consumer_closed = False
        self._error: BaseException | None = None

    @property
    def closed(self) -> bool:
        return self._producer_closed

    @property
    def error(self) -> BaseException | None:
        """Exception the producer terminated with, if any."""
        return self._error

    def put(self, event: Event) -> None:
        """Enqueue ``event`` without waiting.

        Raises:
            HandoffError: If either end has been closed
        """
        if self._consumer_closed:
            raise HandoffError("Event receiver has been closed")
        if self._producer_closed:
            raise HandoffError("Event queue is closed")
        self._queue.put_nowait(event)

    def close(self, error: BaseException | None = None) -> None:
        """Close the producer end; ``error`` is re-raised to the consumer."""
        if self._producer_closed:
            return
        self._producer_closed = True
        self._error = error
        self._queue.put_nowait(_CLOSED)

    def close_consumer(self) -> None:
        """Mark the consumer as gone; later ``put`` calls fail."""
        self._consumer_closed = True

    def qsize(self) -> int:
        return self._queue.qsize()

    async def _get(self) -> object:
        item = await self._queue.get()
        if item is _CLOSED:
            # Keep the sentinel available for any later reader
            self._queue.put_nowait(_CLOSED)
        return item


class EventStream:
    """Consuming end of a ``HandoffQueue``.

    Iterate with ``async for`` or call ``get()``. A clean shutdown ends the
    iteration; a failed worker re-raises its error once buffered events are
    drained.

    Example:
        >>> async for event in stream.consume():
        ...     print(event)
    """

    def __init__(self, queue: HandoffQueue) -> None:
        self._queue = queue

    async def get(self) -> Event | None:
        """Return the next event, or ``None`` after a clean shutdown.

        Raises:
            StreamError: The error the worker terminated with
        """
        item = await self._queue._get()
        if item is _CLOSED:
            if self._queue.error is not None:
                raise self._queue.error
            return None
        return item  # type: ignore[return-value]

    def close(self) -> None:
        self._queue.close_consumer()

    def __aiter__(self) -> EventStream:
        return self

    async def __anext__(self) -> Event:
        event = await self.get()
        if event is None:
            raise StopAsyncIteration
        return event


__all__ = ["EventStream", "HandoffQueue"]
