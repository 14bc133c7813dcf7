"""
Skyhash Protocol Layer
======================

This package defines the Skyhash wire protocol: the fixed set of typed
values a Skytable client and server exchange, and how each is serialized
onto and recovered from a byte stream.

The protocol layer MUST NOT depend on any transport implementation; it only
needs a writer with a ``write`` method and a buffered, peekable reader.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Wire Values (types.py)
    One class per wire type
    - String, Blob, Json
    - SmallInt, SmallIntSigned, Int, IntSigned, Float
    - Response, WireError
    - AnyArray, Array, Query
    Each value marshals and unmarshals itself

    │
    ▼
Codec Primitives (codec.py)
    Shared framing helpers
    - peek_prefix() / assert_prefix()
    - length-prefixed bodies, scalars, headers
    - decode(): prefix-driven dispatch to a value class

    │
    ▼
Prefix Registry (prefix.py)
    One-byte prefix <-> WireType
    Human-readable prefix names for diagnostics

Supporting modules: errors.py (protocol exceptions), codes.py (response
status codes).

---------------------------------------------------------------------

Framing Rules
-------------

1. Every message starts with its prefix and ends with a newline.

2. Strings, blobs and JSON documents are length-prefixed:
       <prefix><ascii-decimal-length>\\n<payload>\\n

3. Unmarshaling always consumes exactly one whole message. When the
   message is not what the caller asked for it is still drained, and the
   raised error is marked :class:`~.errors.Discarded` so the connection
   can be reused.

---------------------------------------------------------------------
"""

from . import prefix
from . import errors
from . import codes
from . import codec
from . import types

from .codec import Marshaler, Unmarshaler, decode
from .codes import ResponseCode
from .errors import Discarded, InvalidValue, ProtocolError, UnexpectedPrefix
from .prefix import WireType, prefix_name
from .types import (
    AnyArray,
    Array,
    Blob,
    Float,
    Int,
    IntSigned,
    Json,
    Query,
    Response,
    SmallInt,
    SmallIntSigned,
    String,
    WireError,
    wrap,
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
