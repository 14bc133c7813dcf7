""" Python client for the Skytable key/value store. This includes the
    Skyhash wire protocol codec, framed connections over TCP, TLS or UNIX
    sockets, and the action interface used to run commands against a
    connection.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Utility components.

from . import json
from . import pool

# Submodules used by multiple other components.

from . import config
from . import protocol
from . import transport

# Primary public-facing interfaces.

from . import action
from .action import Action, CmdAction, Cmd
from .config import DialOptions
from .transport import Conn, ConnectionClosed, TransportError, TransportTimeout, TransportConnectionError

dial = transport.dial.dial
wrap = transport.conn.wrap

__version__ = '0.1.0'

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
