""" Connection configuration. A :class:`DialOptions` instance describes how
    :func:`skytable.transport.dial.dial` establishes and maintains a
    connection; every field is independently optional and defaulted.

    Defaults may also be drawn from the environment, see
    :func:`DialOptions.from_environment`, and a ``skytable://`` URI can carry
    the address, credentials, and database in one string, see
    :func:`parse_uri`.
"""

from __future__ import annotations

import dataclasses
import os
import ssl
import urllib.parse
from typing import Any, Dict, Mapping, Optional, Tuple


DEFAULT_PORT = 2003
DEFAULT_TIMEOUT = 10.0
DEFAULT_KEEPALIVE = 10.0

URI_SCHEME = 'skytable'


# Field name -> environment variable consulted by from_environment().

_environment = {
    'connect_timeout': 'SKYTABLE_CONNECT_TIMEOUT',
    'read_timeout': 'SKYTABLE_READ_TIMEOUT',
    'write_timeout': 'SKYTABLE_WRITE_TIMEOUT',
    'keepalive': 'SKYTABLE_KEEPALIVE',
}


@dataclasses.dataclass
class DialOptions:
    """ Settings for a single connection. Durations are in seconds; None
        means no bound for a timeout, and disables keepalive.

        The *auth_user*, *auth_password* and *database* fields are carried
        for an AUTH or SELECT exchange on a new connection; nothing in this
        package performs that exchange yet.
    """

    connect_timeout: Optional[float] = DEFAULT_TIMEOUT
    read_timeout: Optional[float] = DEFAULT_TIMEOUT
    write_timeout: Optional[float] = DEFAULT_TIMEOUT
    auth_user: Optional[str] = None
    auth_password: Optional[str] = None
    database: Optional[str] = None
    tls: Optional[ssl.SSLContext] = None
    keepalive: Optional[float] = DEFAULT_KEEPALIVE

    def __post_init__(self):

        for name in _environment.keys():
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError('%s must be positive or None, not %r' % (name, value))


    @classmethod
    def with_timeout(cls, timeout, **fields):
        """ Options with the connect, read, and write timeouts all set to
            the same *timeout*.
        """

        return cls(connect_timeout=timeout, read_timeout=timeout, write_timeout=timeout, **fields)


    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None, **fields):
        """ Options with durations taken from ``SKYTABLE_CONNECT_TIMEOUT``,
            ``SKYTABLE_READ_TIMEOUT``, ``SKYTABLE_WRITE_TIMEOUT``, and
            ``SKYTABLE_KEEPALIVE`` where they are set. An empty value or
            ``none`` unsets the corresponding duration. Explicit *fields*
            take precedence over the environment.
        """

        if environ is None:
            environ = os.environ

        values = dict()

        for name, variable in _environment.items():
            try:
                raw = environ[variable]
            except KeyError:
                continue

            values[name] = _seconds(variable, raw)

        values.update(fields)
        return cls(**values)


# end of class DialOptions



def _seconds(variable, raw):

    raw = raw.strip()

    if raw == '' or raw.lower() == 'none':
        return None

    try:
        return float(raw)
    except ValueError:
        raise ValueError('%s must be a number of seconds, not %r' % (variable, raw)) from None



def parse_uri(uri: str) -> Tuple[str, Dict[str, Any]]:
    """ Split a URI of the form::

            skytable://[user[:password]@]host[:port][/database]

        into a ``host:port`` address and a dictionary of the
        :class:`DialOptions` fields it specifies. The port defaults to
        2003, the host to the loopback address.
    """

    parts = urllib.parse.urlsplit(uri)

    if parts.scheme != URI_SCHEME:
        raise ValueError('not a %s:// URI: %r' % (URI_SCHEME, uri))

    host = parts.hostname or '127.0.0.1'
    port = parts.port or DEFAULT_PORT

    if ':' in host:
        address = '[%s]:%d' % (host, port)
    else:
        address = '%s:%d' % (host, port)

    fields = dict()

    if parts.username:
        fields['auth_user'] = urllib.parse.unquote(parts.username)
    if parts.password:
        fields['auth_password'] = urllib.parse.unquote(parts.password)

    database = parts.path.strip('/')
    if database:
        fields['database'] = urllib.parse.unquote(database)

    return address, fields


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
