""" Actions are the units of work a client performs against a connection.
    An :class:`Action` reports the keys it touches and knows how to run
    itself; a :class:`CmdAction` is an action that also writes its own
    request and reads its own response.

    :class:`Cmd` is the general-purpose command action::

        name = skytable.protocol.String()
        conn.do(skytable.Cmd(name, 'GET', 'foo'))
        print(name.value)
"""

from abc import ABC, abstractmethod

from .protocol import codec
from .protocol.errors import Discarded
from .protocol.prefix import WireType
from .protocol.types import AnyArray, Query, WireError


class Action(ABC):
    """ A task performed using a connection.
    """

    @abstractmethod
    def keys(self):
        """ Return a tuple of the keys this action will act on; the tuple
            may be empty.
        """


    @abstractmethod
    def run(self, conn):
        """ Perform the action using *conn*, a
            :class:`skytable.transport.conn.Conn`.
        """


# end of class Action



class CmdAction(Action, codec.Marshaler, codec.Unmarshaler):
    """ An :class:`Action` that is also its own request and response.
    """


# end of class CmdAction



class Cmd(CmdAction):
    """ A single Skytable command. The *command* and its *args* are sent as
        a simple query, an :class:`AnyArray` inside a one-element
        :class:`Query`.

        The response is read into *receiver* if one is given; *receiver* is
        any unmarshalable value, such as a :class:`String`. Without a
        receiver every element of the response is decoded generically. In
        both cases the decoded elements are kept in :attr:`response`.

        The first argument is assumed to be the key acted on; pass *keys*
        explicitly for commands where that is not so.
    """

    def __init__(self, receiver, command, *args, keys=None):

        self.receiver = receiver
        self.args = (command,) + args
        self.response = None

        if keys is None:
            keys = args[:1]

        self._keys = tuple(keys)


    def __repr__(self):
        return 'Cmd(%r)' % (self.args,)


    def keys(self):
        return self._keys


    def marshal(self, writer):
        Query([AnyArray(self.args)]).marshal(writer)


    def unmarshal(self, reader):
        """ Read a response. A peer error anywhere in the response is raised
            as a :class:`WireError`, but only once the whole response has
            been consumed.
        """

        count = codec.read_header(reader, WireType.QUERY)
        elements = list()
        first_error = None

        for index in range(count):
            try:
                if index == 0 and self.receiver is not None:
                    self.receiver.unmarshal(reader)
                    element = self.receiver
                else:
                    element = codec.decode(reader)
            except Discarded as exc:
                element = None
                if first_error is None:
                    first_error = exc
            else:
                if isinstance(element, WireError) and first_error is None:
                    first_error = element

            elements.append(element)

        self.response = elements

        if first_error is not None:
            raise first_error

        return self


    def run(self, conn):
        conn.encode(self)
        conn.decode(self)
        return self.response


# end of class Cmd


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
