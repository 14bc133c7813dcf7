"""Raw socket stream with independent read and write deadlines.

A Python socket has a single timeout shared by both directions. A framed
connection may read on one thread while writing on another, each with its
own deadline, so the socket is put in non-blocking mode and every read or
write waits on its own selector instead.
"""

from __future__ import annotations

import io
import selectors
import socket
import ssl
import time
from typing import Optional


class DeadlineSocket(io.RawIOBase):
    """Adapt a connected socket to :class:`io.RawIOBase`.

    Each call to :meth:`readinto` or :meth:`write` must complete within
    *read_timeout* or *write_timeout* seconds respectively; None means no
    deadline. An expired deadline raises :class:`TimeoutError`.
    """

    def __init__(self, sock: socket.socket, read_timeout: Optional[float] = None, write_timeout: Optional[float] = None):
        super().__init__()

        sock.setblocking(False)

        self.socket = sock
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout

        self._read_selector = selectors.DefaultSelector()
        self._read_selector.register(sock, selectors.EVENT_READ)
        self._write_selector = selectors.DefaultSelector()
        self._write_selector.register(sock, selectors.EVENT_WRITE)

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def fileno(self) -> int:
        return self.socket.fileno()

    def readinto(self, buffer) -> int:
        deadline = _deadline(self.read_timeout)

        while True:
            try:
                return self.socket.recv_into(buffer)
            except (BlockingIOError, ssl.SSLWantReadError):
                _wait(self._read_selector, deadline, 'read')
            except ssl.SSLWantWriteError:
                _wait(self._write_selector, deadline, 'read')

    def write(self, data) -> int:
        deadline = _deadline(self.write_timeout)

        while True:
            try:
                return self.socket.send(data)
            except (BlockingIOError, ssl.SSLWantWriteError):
                _wait(self._write_selector, deadline, 'write')
            except ssl.SSLWantReadError:
                _wait(self._read_selector, deadline, 'write')

    def close(self) -> None:
        if self.closed:
            return

        try:
            self._read_selector.close()
            self._write_selector.close()
            self.socket.close()
        finally:
            super().close()


def _deadline(timeout: Optional[float]) -> Optional[float]:
    if timeout is None:
        return None
    return time.monotonic() + timeout


def _wait(selector: selectors.BaseSelector, deadline: Optional[float], operation: str) -> None:
    if deadline is None:
        remaining = None
    else:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TimeoutError(operation + ' timed out')

    if not selector.select(remaining):
        raise TimeoutError(operation + ' timed out')
