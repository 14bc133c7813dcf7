"""Skyhash wire type prefixes.

Keep these in one place to avoid byte-literal drift across the codec. Every
Skyhash message starts with one of these prefixes; the type of a message can
be determined by peeking at its first byte without consuming it.
"""

from __future__ import annotations

import enum
from typing import Optional


class WireType(enum.Enum):
    """One member per Skyhash prefix. The value is the prefix itself."""

    STRING = b'+'
    SMALL_INT = b'.'
    SMALL_INT_SIGNED = b'-'
    INT = b':'
    INT_SIGNED = b';'
    FLOAT = b'%'
    JSON = b'$'
    BLOB = b'?'
    RESPONSE = b'!'
    ANY_ARRAY = b'~'
    ARRAY = b'&'
    QUERY = b'*'
    ERROR = b'1'

    @property
    def label(self) -> str:
        return _labels[self]

    @classmethod
    def lookup(cls, prefix: bytes) -> Optional['WireType']:
        """Return the member for *prefix*, or None if it is not a known prefix."""
        try:
            return cls(bytes(prefix))
        except ValueError:
            return None


_labels = {
    WireType.STRING: 'string',
    WireType.SMALL_INT: 'small-integer',
    WireType.SMALL_INT_SIGNED: 'small-integer-signed',
    WireType.INT: 'integer',
    WireType.INT_SIGNED: 'integer-signed',
    WireType.FLOAT: 'float',
    WireType.JSON: 'json',
    WireType.BLOB: 'blob',
    WireType.RESPONSE: 'response',
    WireType.ANY_ARRAY: 'any-array',
    WireType.ARRAY: 'array',
    WireType.QUERY: 'query',
    WireType.ERROR: 'error',
}


DELIMITER = b'\n'


def prefix_name(prefix: bytes) -> str:
    """Human-readable name for *prefix*, used in diagnostics.

    Unknown prefixes are returned as-is, decoded as latin-1 so that any byte
    sequence has a printable name.
    """

    wire_type = WireType.lookup(prefix)
    if wire_type is None:
        return bytes(prefix).decode('latin-1')
    return wire_type.label
