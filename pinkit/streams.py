"""Byte stream interfaces and awaitable, cancellable reads and writes on them."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Generator, Generic, Optional, TypeVar

__all__ = ["Print", "Stream", "read", "write"]

T = TypeVar("T")


class Print(ABC):
    """A sink of bytes that may accept only part of what it is given."""

    @abstractmethod
    def available_for_write(self) -> int:
        """Return how many bytes can be written without blocking."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write as much of ``data`` as possible; return the count written."""


class Stream(Print):
    """A bidirectional byte stream."""

    @abstractmethod
    def available(self) -> int:
        """Return how many bytes can be read without blocking."""

    @abstractmethod
    def read(self) -> Optional[int]:
        """Return the next byte, or None if none is available."""

    @abstractmethod
    def peek(self) -> Optional[int]:
        """Return the next byte without consuming it, or None."""


class _Operation(ABC, Generic[T]):
    """A polled transfer that completes when all bytes moved or it is cancelled.

    The first attempt runs synchronously when awaited; while incomplete, the
    operation yields to the event loop and retries. ``cancel()`` does not
    interrupt the awaiting task: the next retry finishes with the partial
    result.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"size must not be negative: {size}")
        self._remaining = size

    def cancel(self) -> None:
        """Finish the transfer at its next attempt with what it moved so far."""
        self._remaining = 0

    @property
    def done(self) -> bool:
        """True once nothing remains to transfer."""
        return self._remaining == 0

    @abstractmethod
    def _advance(self) -> bool:
        """Move what can be moved now; return True when complete."""

    @abstractmethod
    def _result(self) -> T:
        """Return the outcome of the transfer."""

    async def _run(self) -> T:
        while not self._advance():
            await asyncio.sleep(0)
        return self._result()

    def __await__(self) -> Generator[object, None, T]:
        return self._run().__await__()


class _ReadOperation(_Operation[bytes]):
    def __init__(self, stream: Stream, size: int) -> None:
        super().__init__(size)
        self._stream = stream
        self._data = bytearray()

    @property
    def data(self) -> bytes:
        """Bytes read so far."""
        return bytes(self._data)

    def _advance(self) -> bool:
        while self._remaining > 0:
            byte = self._stream.read()
            if byte is None:
                break
            self._data.append(byte & 0xFF)
            self._remaining -= 1
        return self._remaining == 0

    def _result(self) -> bytes:
        return bytes(self._data)


class _WriteOperation(_Operation[int]):
    def __init__(self, printer: Print, data: bytes) -> None:
        payload = bytes(data)
        super().__init__(len(payload))
        self._printer = printer
        self._payload = payload
        self._written = 0

    @property
    def written(self) -> int:
        """Number of bytes written so far."""
        return self._written

    def _advance(self) -> bool:
        while self._remaining > 0:
            room = self._printer.available_for_write()
            if room <= 0:
                return False
            count = min(room, self._remaining)
            chunk = self._payload[self._written : self._written + count]
            accepted = min(self._printer.write(chunk), count)
            if accepted <= 0:
                return False
            self._written += accepted
            self._remaining -= accepted
        return True

    def _result(self) -> int:
        return self._written


def read(stream: Stream, size: int) -> _ReadOperation:
    """Return an awaitable that reads ``size`` bytes from ``stream``.

    Awaiting it gives the bytes read: all ``size`` of them, or fewer if the
    operation was cancelled first.
    """
    return _ReadOperation(stream, size)


def write(printer: Print, data: bytes) -> _WriteOperation:
    """Return an awaitable that writes ``data`` to ``printer``.

    Awaiting it gives the number of bytes written: all of them, or fewer if
    the operation was cancelled first.
    """
    return _WriteOperation(printer, data)