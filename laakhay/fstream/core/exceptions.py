"""Custom exception hierarchy.

Every failure the stream can raise carries an ``ErrorKind``. Whether the
connection worker reconnects or tears the session down is decided by a
fixed classification table over those kinds, never at the call site.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories of a stream session."""

    URL = "url"
    SOCKET = "socket"
    HANDOFF = "handoff"
    DECODE = "decode"
    HTTP = "http"
    OTHER = "other"


# Socket failures are transient network conditions; everything else points at
# a logic or schema-compatibility bug.
_RECOVERABLE: dict[ErrorKind, bool] = {
    ErrorKind.URL: False,
    ErrorKind.SOCKET: True,
    ErrorKind.HANDOFF: False,
    ErrorKind.DECODE: False,
    ErrorKind.HTTP: False,
    ErrorKind.OTHER: False,
}


def is_recoverable(kind: ErrorKind) -> bool:
    """Return True when the worker may reconnect after a failure of ``kind``."""
    return _RECOVERABLE[kind]


class FStreamError(Exception):
    """Base exception for all library errors."""

    pass


class StreamConfigurationError(FStreamError):
    """Session was started with a configuration that can never work.

    Raised synchronously by ``FuturesStream.start()`` before any I/O.
    """

    pass


class StreamError(FStreamError):
    """Failure of a running (or starting) stream session."""

    kind: ErrorKind = ErrorKind.OTHER

    @property
    def recoverable(self) -> bool:
        return is_recoverable(self.kind)


class UrlParseError(StreamError):
    """A configured endpoint URL is malformed."""

    kind = ErrorKind.URL


class SocketError(StreamError):
    """Transport-level failure (connect, read, write or would-block)."""

    kind = ErrorKind.SOCKET


class HandoffError(StreamError):
    """The consumer side of the hand-off queue is gone."""

    kind = ErrorKind.HANDOFF


class DecodeError(StreamError):
    """An inbound payload did not match any known message shape."""

    kind = ErrorKind.DECODE

    def __init__(self, message: str, payload: str | None = None) -> None:
        super().__init__(message)
        self.payload = payload


class HttpResponseError(StreamError):
    """The listen key endpoint answered with a non-OK status."""

    kind = ErrorKind.HTTP

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
