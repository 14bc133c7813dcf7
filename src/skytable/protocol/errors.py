"""Protocol-level exceptions.

These are distinct from transport errors (see :mod:`skytable.transport.base`):
a protocol error means the bytes on the stream were not what the caller
expected, not that the stream itself failed.

Any error wrapped in :class:`Discarded` guarantees that the offending message
was fully consumed, so the stream is still framed and the connection may be
reused. A bare :class:`ProtocolError` that is not a :class:`Discarded` means
framing was lost.
"""

from __future__ import annotations

from typing import Any, Optional

from .prefix import prefix_name


class ProtocolError(Exception):
    """Base class for all Skyhash protocol errors."""


class Discarded(ProtocolError):
    """Marker: the message that caused *error* was drained from the stream.

    The underlying cause is available as :attr:`error`.
    """

    def __init__(self, error: Exception):
        super().__init__(str(error))
        self.error = error


class UnexpectedPrefix(ProtocolError):
    """The next message on the stream was not of the expected type.

    When the observed message could be drained, :attr:`value` holds the
    decoded message, which lets a caller inspect, for example, a response
    status sent in place of a string.
    """

    def __init__(self, prefix: bytes, expected: Optional[bytes] = None, value: Optional[Any] = None):
        self.prefix = bytes(prefix)
        self.expected = None if expected is None else bytes(expected)
        self.value = value

        if self.expected is None:
            message = 'unknown prefix %r' % (prefix_name(self.prefix))
        else:
            message = 'expected prefix %r, got %r' % (prefix_name(self.expected), prefix_name(self.prefix))

        super().__init__(message)


class InvalidValue(ProtocolError):
    """A message was fully consumed but its contents could not be interpreted."""
