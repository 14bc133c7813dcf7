"""Transport layer: framed connections over TCP, TLS, or UNIX sockets."""

from .base import (
    Client,
    ConnectionClosed,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
)

from . import stream
from . import conn
from . import dial

from .conn import Conn, wrap
from .dial import dial as connect
