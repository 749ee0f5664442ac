"""Connection worker: one websocket session plus its reconnect loop.

State machine::

    CONNECTING -> READING -> (socket failure, reconnect on) -> RECONNECTING
         ^                                                          |
         +---------------------- after fixed backoff ---------------+

Any other failure, a socket failure with reconnect off, or a stop request
moves the worker to TERMINATED. The hand-off queue is closed on every exit
path so the consumer never waits forever.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from ..config import RECONNECT_BACKOFF_SECONDS, WouldBlockConfig
from ..core.exceptions import StreamError
from ..dispatcher import MessageDispatcher
from .handoff import HandoffQueue
from .transport import FrameKind, Transport, WebSocketTransport, WouldBlockError

logger = logging.getLogger(__name__)


class WorkerState(str, Enum):
    CONNECTING = "connecting"
    READING = "reading"
    RECONNECTING = "reconnecting"
    TERMINATED = "terminated"


class ConnectionWorker:
    """Owns the transport for one session; produces events into a queue.

    Args:
        url: Fully built websocket URL. Identical on every reconnect.
        queue: Hand-off queue the decoded events are pushed to
        would_block: Read timeout and empty-read policy
        reconnect: Reconnect after recoverable (socket) failures
        subscribe_payload: SUBSCRIBE message sent after each connect, if any
        stop_event: Cooperative stop flag shared with the session controller
        dispatcher: Payload decoder
        transport_factory: Builds a fresh transport for each connection attempt
        reconnect_backoff: Seconds to wait before reconnecting
    """

    def __init__(
        self,
        url: str,
        queue: HandoffQueue,
        *,
        would_block: WouldBlockConfig | None = None,
        reconnect: bool = True,
        subscribe_payload: str | None = None,
        stop_event: asyncio.Event | None = None,
        dispatcher: MessageDispatcher | None = None,
        transport_factory: Callable[[], Transport] = WebSocketTransport,
        reconnect_backoff: float = RECONNECT_BACKOFF_SECONDS,
    ) -> None:
        self.url = url
        self.subscribe_payload = subscribe_payload
        self._queue = queue
        self._would_block = would_block or WouldBlockConfig()
        self._reconnect = reconnect
        self._stop_event = stop_event or asyncio.Event()
        self._dispatcher = dispatcher or MessageDispatcher()
        self._transport_factory = transport_factory
        self._reconnect_backoff = reconnect_backoff
        self._state = WorkerState.CONNECTING
        self.reconnect_count = 0

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Request termination; observed at the next suspension point."""
        self._stop_event.set()

    async def run(self) -> None:
        """Run until stopped or until a non-recoverable failure.

        Raises:
            StreamError: The failure that terminated the worker. The same
                exception is handed to the consumer through the queue.
        """
        error: BaseException | None = None
        try:
            while not self.stopped:
                try:
                    await self._run_connection()
                    return
                except StreamError as e:
                    if not (self._reconnect and e.recoverable):
                        logger.error(f"Stream terminated: {e}")
                        raise
                    if self.stopped:
                        return
                    self._state = WorkerState.RECONNECTING
                    self.reconnect_count += 1
                    logger.warning(
                        f"Socket error, reconnecting in {self._reconnect_backoff}s "
                        f"(attempt {self.reconnect_count}): {e}"
                    )
                    await self._sleep(self._reconnect_backoff)
        except BaseException as e:
            error = e
            raise
        finally:
            self._state = WorkerState.TERMINATED
            # Cancellation is a shutdown, not a failure the consumer must see
            if isinstance(error, asyncio.CancelledError):
                error = None
            self._queue.close(error)

    async def _run_connection(self) -> None:
        self._state = WorkerState.CONNECTING
        transport = self._transport_factory()
        try:
            if not await self._unless_stopped(transport.connect(self.url)):
                return
            if self.subscribe_payload is not None:
                await transport.send_text(self.subscribe_payload)
                logger.debug(f"Sent subscription request: {self.subscribe_payload}")
            self._state = WorkerState.READING
            await self._read_loop(transport)
        finally:
            await transport.close()

    async def _read_loop(self, transport: Transport) -> None:
        timeout = self._would_block.timeout
        while not self.stopped:
            try:
                frame = await transport.recv(timeout)
            except WouldBlockError:
                if self._would_block.error_on_block:
                    raise
                await self._sleep(timeout)
                continue
            if self.stopped:
                return

            if frame.kind is FrameKind.TEXT:
                event = self._dispatcher.dispatch(str(frame.data))
                self._queue.put(event)
            elif frame.kind is FrameKind.PING:
                data = frame.data.encode() if isinstance(frame.data, str) else frame.data
                await transport.pong(data)
            else:
                logger.debug(f"Ignoring {frame.kind.value} frame")

    async def _unless_stopped(self, coro: Awaitable[None]) -> bool:
        """Await ``coro`` unless a stop arrives first.

        Returns False when the stop won; ``coro`` is then cancelled. Errors
        raised by ``coro`` propagate.
        """
        operation = asyncio.ensure_future(coro)
        stop_waiter = asyncio.ensure_future(self._stop_event.wait())
        try:
            await asyncio.wait({operation, stop_waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stop_waiter.cancel()
            if not operation.done():
                operation.cancel()
                await asyncio.wait({operation})
        if operation.cancelled():
            logger.debug("Stop requested while connecting")
            return False
        operation.result()
        return True

    async def _sleep(self, seconds: float) -> None:
        """Sleep that wakes early when a stop is requested."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), seconds)
        except asyncio.TimeoutError:
            pass


__all__ = ["ConnectionWorker", "WorkerState"]
