"""Transport interface.

This is the (small) contract that clients of a Skytable server follow, and
the exceptions raised when the underlying byte stream fails. It lives outside
:mod:`skytable.protocol` so the protocol remains transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# Transport exceptions. Any of these is fatal to the connection that
# raised it; protocol errors are in skytable.protocol.errors.

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A connect, read, or write did not complete before its deadline."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class ConnectionClosed(TransportConnectionError):
    """The connection was already closed when an operation was attempted."""


class Client(ABC):
    """An entity that carries out Actions against a Skytable server.

    A single connection is the simplest Client; a pool of connections would
    be another.
    """

    @abstractmethod
    def do(self, action: Any) -> Any:
        """Perform *action*, returning whatever its ``run`` method returns."""

    @abstractmethod
    def close(self) -> None:
        """Release all resources; every later call raises :class:`ConnectionClosed`."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
