"""Establish a framed connection to a Skytable server."""

from __future__ import annotations

import dataclasses
import logging
import socket
from typing import Optional, Tuple

from .. import config
from ..config import DialOptions
from .base import TransportConnectionError, TransportError, TransportTimeout
from .conn import Conn


logger = logging.getLogger(__name__)

_families = {
    'tcp': socket.AF_UNSPEC,
    'tcp4': socket.AF_INET,
    'tcp6': socket.AF_INET6,
}


def split_address(address: str) -> Tuple[str, int]:
    """Split ``host:port`` or ``[v6-host]:port``; either part may be omitted."""

    if address.startswith('['):
        host, _, rest = address[1:].partition(']')
        port = rest[1:] if rest.startswith(':') else ''
    elif address.count(':') > 1:
        # Bare IPv6 address, no port.
        host, port = address, ''
    else:
        host, sep, port = address.rpartition(':')
        if not sep:
            host, port = address, ''

    if port == '':
        port = config.DEFAULT_PORT
    else:
        port = int(port)

    return host or '127.0.0.1', port


def set_keepalive(sock: socket.socket, period: float) -> None:
    """Enable TCP keepalive, probing an idle connection every *period* seconds."""

    seconds = max(1, int(period))
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)

    if hasattr(socket, 'TCP_KEEPIDLE'):
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, seconds)
    elif hasattr(socket, 'TCP_KEEPALIVE'):
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPALIVE, seconds)

    if hasattr(socket, 'TCP_KEEPINTVL'):
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, seconds)


def _setup_error(exc: BaseException, what: str) -> TransportError:
    if isinstance(exc, (TimeoutError, socket.timeout)):
        return TransportTimeout('%s: timed out' % (what))
    return TransportConnectionError('%s: %s' % (what, exc))


def _connect(network: str, address: str, timeout: Optional[float]) -> socket.socket:

    if network == 'unix':
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(timeout)
        try:
            sock.connect(address)
        except OSError as exc:
            sock.close()
            raise _setup_error(exc, 'connect to ' + address) from exc
        return sock

    try:
        family = _families[network]
    except KeyError:
        raise ValueError('unsupported network: %r' % (network)) from None

    host, port = split_address(address)

    try:
        candidates = socket.getaddrinfo(host, port, family, socket.SOCK_STREAM)
    except OSError as exc:
        raise _setup_error(exc, 'resolve ' + address) from exc

    error = None

    for af, socktype, proto, _canonical, sockaddr in candidates:
        sock = socket.socket(af, socktype, proto)
        sock.settimeout(timeout)
        try:
            sock.connect(sockaddr)
        except OSError as exc:
            sock.close()
            error = exc
        else:
            return sock

    if error is None:
        raise TransportConnectionError('connect to %s: no usable addresses' % (address))
    raise _setup_error(error, 'connect to ' + address) from error


def dial(network: str, address: str, options: Optional[DialOptions] = None, **overrides) -> Conn:
    """Connect to a Skytable server and return a ready :class:`Conn`.

    *network* is one of ``tcp``, ``tcp4``, ``tcp6`` or ``unix``. *address*
    is ``host:port`` (or ``[host]:port`` for IPv6), a socket path for
    ``unix``, or a ``skytable://`` URI; see :func:`skytable.config.parse_uri`.

    *options* defaults to :class:`DialOptions`, ten seconds for every
    timeout and TCP keepalive probing every ten seconds; keyword
    *overrides* replace individual fields. Values given explicitly take
    precedence over credentials or a database named in a URI.

    Any failure, including failure to enable keepalive, closes whatever was
    opened and raises :class:`TransportTimeout` or
    :class:`TransportConnectionError`, chained to the underlying error.
    """

    if options is None:
        options = DialOptions()

    if overrides:
        options = dataclasses.replace(options, **overrides)

    if address.startswith(config.URI_SCHEME + '://'):
        address, fields = config.parse_uri(address)
        fields = {name: value for name, value in fields.items() if getattr(options, name) is None}
        options = dataclasses.replace(options, **fields)

    sock = _connect(network, address, options.connect_timeout)

    try:
        if options.keepalive is not None and sock.family in (socket.AF_INET, socket.AF_INET6):
            set_keepalive(sock, options.keepalive)

        if options.tls is not None:
            server_hostname = None if network == 'unix' else split_address(address)[0]
            sock = options.tls.wrap_socket(sock, server_hostname=server_hostname)
    except OSError as exc:
        sock.close()
        raise _setup_error(exc, 'setup of ' + address) from exc

    logger.debug('connected to %s %s', network, address)
    return Conn(sock, options.read_timeout, options.write_timeout)
