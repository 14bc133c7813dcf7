"""Shared Skyhash codec primitives.

Every wire value class in :mod:`skytable.protocol.types` is built from the
helpers here: prefix peeking and assertion, delimiter handling, and the
length-prefixed payload framing

    <prefix><ascii-decimal-length>\\n<payload bytes>\\n

Readers are expected to be buffered and peekable, in practice an
:class:`io.BufferedReader`. Writers only need a ``write`` method.

An unmarshal routine always consumes exactly one whole message, whether it
succeeds or fails with a :class:`~.errors.Discarded` error. Running out of
bytes in the middle of a message raises :class:`EOFError`, which is a
transport failure rather than a protocol error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Type

from .. import pool
from .errors import Discarded, ProtocolError, UnexpectedPrefix
from .prefix import DELIMITER, WireType


# Upper bound on any length or element count read from the wire. The count
# line itself is no longer than the bound written in decimal, plus the
# delimiter.

MAXIMUM_COUNT = 512 * 1024 * 1024
_COUNT_LINE = len(str(MAXIMUM_COUNT)) + 1


class Marshaler(ABC):
    """A value that can write itself as exactly one Skyhash message."""

    @abstractmethod
    def marshal(self, writer: Any) -> None:
        """Write one complete message to *writer*."""


class Unmarshaler(ABC):
    """A value that can read itself from exactly one Skyhash message."""

    @abstractmethod
    def unmarshal(self, reader: BinaryIO) -> Any:
        """Consume one complete message from the buffered *reader*."""


# Wire type -> value class. Populated by register() as the value classes
# are defined; decode() refuses anything not in this table.

decoders: Dict[WireType, Type[Unmarshaler]] = dict()


def register(wire_type: WireType):
    """Class decorator binding a value class to its wire type."""

    def decorator(cls):
        cls.wire_type = wire_type
        decoders[wire_type] = cls
        return cls

    return decorator


# --- reading ---

def peek(reader: BinaryIO, size: int = 1) -> bytes:
    """Return the next *size* bytes without consuming them."""

    data = reader.peek(size)[:size]
    if len(data) < size:
        raise EOFError('stream ended while waiting for a message')
    return bytes(data)


def read_line(reader: BinaryIO, limit: int = -1) -> bytes:
    """Consume through the next delimiter, returning what preceded it.

    With a positive *limit*, a line of *limit* bytes or more without a
    delimiter is a :class:`ProtocolError`.
    """

    line = reader.readline(limit)
    if not line.endswith(DELIMITER):
        if 0 < limit <= len(line):
            raise ProtocolError('line exceeds %d bytes: %r...' % (limit, line[:16]))
        raise EOFError('stream ended before message delimiter')
    return line[:-1]


def read_exact(reader: BinaryIO, size: int) -> bytes:
    if size == 0:
        return b''

    data = reader.read(size)
    if data is None or len(data) != size:
        raise EOFError('stream ended after %d of %d bytes' % (len(data or b''), size))
    return data


def read_count(reader: BinaryIO) -> int:
    """Read an ASCII decimal length or element count line.

    A malformed count, or one above :data:`MAXIMUM_COUNT`, leaves no way to
    find the end of the message, so it is a plain :class:`ProtocolError`,
    not a discarded one.
    """

    line = read_line(reader, _COUNT_LINE)
    if not line.isdigit():
        raise ProtocolError('invalid length or count: %r' % (line,))

    count = int(line)
    if count > MAXIMUM_COUNT:
        raise ProtocolError('length or count %d exceeds %d' % (count, MAXIMUM_COUNT))
    return count


def peek_prefix(reader: BinaryIO, expected: WireType) -> None:
    """Confirm that the next message is of the *expected* type.

    The stream position is unchanged when the prefix matches. Otherwise the
    offending message is drained before raising: a peer error is raised as
    the decoded :class:`~.types.WireError` itself, any other known type as
    :class:`Discarded` wrapping :class:`UnexpectedPrefix`. An unknown prefix
    cannot be drained and raises a bare :class:`UnexpectedPrefix`.
    """

    wanted = expected.value
    observed = peek(reader, len(wanted))

    if observed == wanted:
        return

    observed_type = WireType.lookup(observed)

    if observed_type is None:
        raise UnexpectedPrefix(observed, wanted)

    if observed_type is WireType.ERROR:
        error = decoders[WireType.ERROR]()
        error.unmarshal(reader)
        raise error

    try:
        value = decode(reader)
    except Discarded as exc:
        raise Discarded(UnexpectedPrefix(observed, wanted)) from exc

    raise Discarded(UnexpectedPrefix(observed, wanted, value))


def assert_prefix(reader: BinaryIO, expected: WireType) -> None:
    """Like :func:`peek_prefix`, but also consumes the matching prefix."""

    peek_prefix(reader, expected)
    read_exact(reader, len(expected.value))


def read_scalar(reader: BinaryIO, expected: WireType) -> bytes:
    """Consume ``<prefix><payload>\\n`` and return the payload."""

    assert_prefix(reader, expected)
    return read_line(reader)


def read_header(reader: BinaryIO, expected: WireType) -> int:
    """Consume ``<prefix><count>\\n`` and return the count."""

    assert_prefix(reader, expected)
    return read_count(reader)


def read_body(reader: BinaryIO) -> bytes:
    """Consume ``<length>\\n<payload>\\n`` and return the payload."""

    size = read_count(reader)
    data = read_exact(reader, size)

    if read_exact(reader, len(DELIMITER)) != DELIMITER:
        raise ProtocolError('missing delimiter after %d byte payload' % (size))

    return data


def read_sized(reader: BinaryIO, expected: WireType) -> bytes:
    """Consume a length-prefixed message and return its payload."""

    assert_prefix(reader, expected)
    return read_body(reader)


def decode(reader: BinaryIO) -> Any:
    """Decode whatever message is next, dispatching on its prefix.

    Returns the populated value instance. A peer error message is returned
    as a :class:`~.types.WireError` value, not raised.
    """

    observed = peek(reader, 1)
    wire_type = WireType.lookup(observed)

    try:
        cls = decoders[wire_type]
    except KeyError:
        raise UnexpectedPrefix(observed) from None

    value = cls()
    value.unmarshal(reader)
    return value


# --- writing ---

def append_body(buffer: bytearray, data: bytes) -> None:
    """Append ``<length>\\n<payload>\\n`` to *buffer*."""

    buffer += b'%d' % (len(data))
    buffer += DELIMITER
    buffer += data
    buffer += DELIMITER


def write_sized(writer: Any, wire_type: WireType, data: bytes) -> None:
    with pool.scratch() as scratch:
        scratch += wire_type.value
        append_body(scratch, data)
        writer.write(scratch)


def write_scalar(writer: Any, wire_type: WireType, payload: bytes) -> None:
    with pool.scratch() as scratch:
        scratch += wire_type.value
        scratch += payload
        scratch += DELIMITER
        writer.write(scratch)


def write_header(writer: Any, wire_type: WireType, count: int) -> None:
    write_scalar(writer, wire_type, b'%d' % (count))
