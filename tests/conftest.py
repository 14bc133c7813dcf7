import io
import socket

import pytest


@pytest.fixture
def buffered():
    """ Factory for buffered, peekable readers over fixed bytes, the same
        kind of reader a connection hands to an unmarshal routine.
    """

    def factory(data):
        return io.BufferedReader(io.BytesIO(data))

    return factory


@pytest.fixture
def socket_pair():

    left, right = socket.socketpair()

    yield left, right

    left.close()
    right.close()


@pytest.fixture
def listener():
    """ A TCP socket listening on an ephemeral loopback port. Connections
        are left in the backlog; a test that needs the server side calls
        accept() itself.
    """

    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(('127.0.0.1', 0))
    server.listen(8)

    yield server

    server.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
