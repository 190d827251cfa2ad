"""Serial-like stream over the process's standard input and output (Unix)."""

from __future__ import annotations

import fcntl
import os
import select
import struct
import termios
from typing import Optional

from .streams import Stream

__all__ = ["IOStream"]

_STDIN_FILENO = 0
_STDOUT_FILENO = 1
_LFLAG = 3  # index of c_lflag in a termios attribute list


class IOStream(Stream):
    """Non-blocking byte stream on two file descriptors.

    While open, both descriptors are non-blocking and, if the input is a
    terminal, canonical mode and echo are off. ``close()`` restores them.
    """

    def __init__(
        self, stdin_fd: int = _STDIN_FILENO, stdout_fd: int = _STDOUT_FILENO
    ) -> None:
        self._in = stdin_fd
        self._out = stdout_fd
        self._pending: Optional[int] = None
        self._closed = False

        self._in_blocking = os.get_blocking(stdin_fd)
        self._out_blocking = os.get_blocking(stdout_fd)
        os.set_blocking(stdin_fd, False)
        os.set_blocking(stdout_fd, False)

        self._saved_attrs: Optional[list] = None
        if os.isatty(stdin_fd):
            self._saved_attrs = termios.tcgetattr(stdin_fd)
            raw = termios.tcgetattr(stdin_fd)
            raw[_LFLAG] &= ~(termios.ICANON | termios.ECHO)
            termios.tcsetattr(stdin_fd, termios.TCSAFLUSH, raw)

    def __enter__(self) -> "IOStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Restore the descriptors' blocking mode and the terminal settings."""
        if self._closed:
            return
        self._closed = True
        os.set_blocking(self._in, self._in_blocking)
        os.set_blocking(self._out, self._out_blocking)
        if self._saved_attrs is not None:
            termios.tcsetattr(self._in, termios.TCSAFLUSH, self._saved_attrs)

    def _read_byte(self) -> Optional[int]:
        try:
            chunk = os.read(self._in, 1)
        except BlockingIOError:
            return None
        return chunk[0] if chunk else None

    def read(self) -> Optional[int]:
        """Return the next input byte, or None if none is ready."""
        if self._pending is not None:
            byte, self._pending = self._pending, None
            return byte
        return self._read_byte()

    def peek(self) -> Optional[int]:
        """Return the next input byte without consuming it, or None."""
        if self._pending is None:
            self._pending = self._read_byte()
        return self._pending

    def available(self) -> int:
        """Return how many input bytes are ready to read."""
        raw = fcntl.ioctl(self._in, termios.FIONREAD, struct.pack("i", 0))
        (count,) = struct.unpack("i", raw)
        return count + (self._pending is not None)

    def available_for_write(self) -> int:
        """Return a byte count that can be written now, or 0 if output is full."""
        _, writable, _ = select.select([], [self._out], [], 0)
        return select.PIPE_BUF if writable else 0

    def write(self, data: bytes) -> int:
        """Write what the output accepts now; return the count written."""
        if not data:
            return 0
        try:
            written = os.write(self._out, data)
        except BlockingIOError:
            return 0
        return max(written, 0)