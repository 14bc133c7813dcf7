"""Framed connection: whole Skyhash messages over a single byte stream."""

from __future__ import annotations

import contextlib
import io
import logging
import socket
import threading
from typing import Any, Optional

from ..protocol.codec import Marshaler, Unmarshaler
from ..protocol.errors import Discarded, ProtocolError
from .base import Client, ConnectionClosed, TransportConnectionError, TransportError, TransportTimeout
from .stream import DeadlineSocket


logger = logging.getLogger(__name__)


class _Writer:
    """Outgoing bytes for one message, held until :meth:`flush`."""

    def __init__(self, stream: io.RawIOBase):
        self.stream = stream
        self.buffer = bytearray()

    def write(self, data) -> int:
        self.buffer += data
        return len(data)

    def clear(self) -> None:
        self.buffer.clear()

    def flush(self) -> None:
        data = memoryview(bytes(self.buffer))
        self.buffer.clear()

        while data:
            sent = self.stream.write(data)
            data = data[sent:]


class Conn(Client):
    """A :class:`Client` wrapping a single duplex stream.

    *stream* is either a connected :class:`socket.socket`, to which the
    optional *read_timeout* and *write_timeout* deadlines are applied, or an
    already-open raw binary stream (:class:`io.RawIOBase`). The stream must
    not be read, written, or closed directly once wrapped.

    :meth:`encode` and :meth:`decode` each handle one whole message. One
    thread may encode while another decodes; two concurrent encodes (or two
    concurrent decodes) are serialized. Any transport failure closes the
    connection, after which every operation raises :class:`ConnectionClosed`.
    A :class:`~skytable.protocol.errors.Discarded` protocol error leaves the
    connection usable; any other protocol error means the stream lost its
    framing, and the connection is closed.
    """

    def __init__(self, stream: Any, read_timeout: Optional[float] = None, write_timeout: Optional[float] = None):
        if isinstance(stream, socket.socket):
            raw = DeadlineSocket(stream, read_timeout, write_timeout)
        else:
            raw = stream

        self._stream = stream
        self._raw = raw
        self._reader = io.BufferedReader(raw)
        self._writer = _Writer(raw)

        self._encode_lock = threading.Lock()
        self._decode_lock = threading.Lock()
        self._close_lock = threading.Lock()
        self._closed = False
        self._reading = False

    def __repr__(self) -> str:
        state = 'closed' if self._closed else 'open'
        return '<%s %s %r>' % (type(self).__name__, state, self._stream)

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ConnectionClosed('connection closed')

    def _fail(self, exc: BaseException) -> TransportError:
        """Close the connection and translate *exc* into a transport error."""

        logger.debug('closing %r after transport error: %s', self, exc)
        self.close()

        if isinstance(exc, (TimeoutError, socket.timeout)):
            return TransportTimeout(str(exc) or 'timed out')
        if isinstance(exc, EOFError):
            return TransportConnectionError('connection closed by peer: ' + str(exc))
        return TransportConnectionError(str(exc) or type(exc).__name__)

    def encode(self, value: Marshaler) -> None:
        """Marshal one whole message and flush it to the stream."""

        with self._encode_lock:
            self._check_open()

            try:
                value.marshal(self._writer)
            except BaseException:
                self._writer.clear()
                raise

            try:
                self._writer.flush()
            except OSError as exc:
                raise self._fail(exc) from exc

    def decode(self, value: Unmarshaler) -> Any:
        """Unmarshal one whole message into *value*, returning what its
        ``unmarshal`` returns."""

        with self._decode_lock:
            with self._close_lock:
                self._check_open()
                self._reading = True

            try:
                return value.unmarshal(self._reader)
            except Discarded:
                raise
            except ProtocolError as exc:
                logger.debug('closing %r, stream framing lost: %s', self, exc)
                self.close()
                raise
            except (OSError, EOFError) as exc:
                raise self._fail(exc) from exc
            except BaseException as exc:
                logger.debug('closing %r after failed decode: %r', self, exc)
                self.close()
                raise
            finally:
                # A close() while this read was in progress leaves the
                # stream for the reader to release.
                with self._close_lock:
                    self._reading = False
                    release = self._closed

                if release:
                    self._raw.close()

    def do(self, action: Any) -> Any:
        """Run *action* against this connection.

        This is not synchronized with :meth:`encode` or :meth:`decode`;
        callers serialize their own use of a connection.
        """

        self._check_open()
        return action.run(self)

    def raw_stream(self) -> Any:
        """The wrapped socket or stream, for inspection only."""
        return self._stream

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
            reading = self._reading

        # Shutting down first wakes a reader blocked on another thread.

        if isinstance(self._stream, socket.socket):
            with contextlib.suppress(OSError):
                self._stream.shutdown(socket.SHUT_RDWR)

        if not reading:
            self._raw.close()


def wrap(stream: Any, read_timeout: Optional[float] = None, write_timeout: Optional[float] = None) -> Conn:
    """Wrap an already-open socket or raw stream as a :class:`Conn`."""
    return Conn(stream, read_timeout, write_timeout)
