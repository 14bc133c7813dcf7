""" Skytable response status codes, as carried by the Skyhash response type
    (prefix ``!``).
"""

import enum


class ResponseCode(enum.IntEnum):
    """ The fixed set of response codes a Skytable server may send. Each
        code has a human-readable :attr:`label`; :func:`to_response` turns a
        code back into a value that can be written on the wire.
    """

    OKAY = 0
    NOT_FOUND = 1
    OVERWRITE_ERROR = 2
    ACTION_ERROR = 3
    PACKET_ERROR = 4
    SERVER_ERROR = 5
    ERROR_STRING = 6
    WRONG_TYPE = 7
    UNKNOWN_DATA_TYPE = 8
    ENCODING_ERROR = 9


    @property
    def label(self):
        return _labels[self]


    def to_response(self):
        """ Return the wire-ready :class:`~.types.Response` for this code.
        """

        from .types import Response
        return Response(self)


# end of class ResponseCode


_labels = {
    ResponseCode.OKAY: 'Okay',
    ResponseCode.NOT_FOUND: 'Not Found',
    ResponseCode.OVERWRITE_ERROR: 'Overwrite Error',
    ResponseCode.ACTION_ERROR: 'Action Error',
    ResponseCode.PACKET_ERROR: 'Packet Error',
    ResponseCode.SERVER_ERROR: 'Server Error',
    ResponseCode.ERROR_STRING: 'Error String',
    ResponseCode.WRONG_TYPE: 'Wrong Type Error',
    ResponseCode.UNKNOWN_DATA_TYPE: 'Unknown Data Type Error',
    ResponseCode.ENCODING_ERROR: 'Encoding Error',
}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
