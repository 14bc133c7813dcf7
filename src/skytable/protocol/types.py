""" Class representations of the Skyhash wire types. Each class knows how to
    marshal an instance onto a writer and how to unmarshal an instance from
    a buffered reader; :func:`skytable.protocol.codec.decode` dispatches to
    these classes by prefix.

    The wire value of every instance is kept in its *value* attribute. An
    instance is populated in place by :func:`unmarshal`, which is the shape
    expected by :func:`skytable.transport.conn.Conn.decode`::

        name = types.String()
        conn.decode(name)
        print(name.value)
"""

import re

from .. import json
from .. import pool
from . import codec
from .codes import ResponseCode
from .errors import Discarded, InvalidValue, ProtocolError
from .prefix import DELIMITER, WireType


class Value(codec.Marshaler, codec.Unmarshaler):
    """ Common behavior for all wire values: a single *value* attribute,
        equality by type and value, and a readable repr.
    """

    wire_type = None
    default = None

    def __init__(self, value=None):

        if value is None:
            value = self.default

        self.value = value


    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value


    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, self.value)


# end of class Value



def _as_bytes(value):

    if isinstance(value, str):
        return value.encode()

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)

    raise TypeError('expected str or bytes, not %s' % (type(value).__name__))


def _parse_int(payload):
    """ Strict decimal parse of an integer payload; int() on its own would
        also accept whitespace, underscores, and a leading plus sign.
    """

    digits = payload[1:] if payload.startswith(b'-') else payload

    if digits.isdigit() and len(digits) <= 20:
        return int(payload)

    raise Discarded(InvalidValue('invalid integer payload: %r' % (payload,)))


# Exactly the forms repr() produces for a float.

_float_payload = re.compile(rb'-?(?:\d+(?:\.\d+)?(?:[eE][-+]?\d+)?|inf|nan)')



@codec.register(WireType.STRING)
class String(Value):
    """ A length-prefixed UTF-8 string. The length on the wire is the number
        of encoded bytes, written as ASCII decimal digits; the payload may
        contain the delimiter.
    """

    default = ''

    def marshal(self, writer):
        codec.write_sized(writer, self.wire_type, _as_bytes(self.value))


    def unmarshal(self, reader):

        data = codec.read_sized(reader, self.wire_type)

        try:
            self.value = data.decode()
        except UnicodeDecodeError as exc:
            raise Discarded(InvalidValue('string payload is not valid UTF-8')) from exc

        return self


# end of class String



@codec.register(WireType.BLOB)
class Blob(Value):
    """ A length-prefixed sequence of arbitrary bytes.
    """

    default = b''

    def marshal(self, writer):
        codec.write_sized(writer, self.wire_type, bytes(self.value))


    def unmarshal(self, reader):
        self.value = bytes(codec.read_sized(reader, self.wire_type))
        return self


# end of class Blob



@codec.register(WireType.JSON)
class Json(Value):
    """ Any JSON-serializable Python value, carried as a length-prefixed
        JSON document.
    """

    def marshal(self, writer):
        codec.write_sized(writer, self.wire_type, json.dumps(self.value))


    def unmarshal(self, reader):

        data = codec.read_sized(reader, self.wire_type)

        try:
            self.value = json.loads(data)
        except json.DecodeError as exc:
            raise Discarded(InvalidValue('invalid JSON payload: ' + str(exc))) from exc

        return self


# end of class Json



class _Integer(Value):
    """ Base class for the four integer wire types, which differ only in
        their prefix and permitted range.
    """

    default = 0
    minimum = None
    maximum = None

    def marshal(self, writer):

        value = int(self.value)

        if value < self.minimum or value > self.maximum:
            raise ValueError('%d is out of range for %s' % (value, self.wire_type.label))

        codec.write_scalar(writer, self.wire_type, b'%d' % (value))


    def unmarshal(self, reader):

        payload = codec.read_scalar(reader, self.wire_type)
        value = _parse_int(payload)

        if value < self.minimum or value > self.maximum:
            error = '%d is out of range for %s' % (value, self.wire_type.label)
            raise Discarded(InvalidValue(error))

        self.value = value
        return self


# end of class _Integer



@codec.register(WireType.SMALL_INT)
class SmallInt(_Integer):
    minimum = 0
    maximum = 0xFF


@codec.register(WireType.SMALL_INT_SIGNED)
class SmallIntSigned(_Integer):
    minimum = -0x80
    maximum = 0x7F


@codec.register(WireType.INT)
class Int(_Integer):
    minimum = 0
    maximum = 0xFFFFFFFFFFFFFFFF


@codec.register(WireType.INT_SIGNED)
class IntSigned(_Integer):
    minimum = -0x8000000000000000
    maximum = 0x7FFFFFFFFFFFFFFF



@codec.register(WireType.FLOAT)
class Float(Value):

    default = 0.0

    def marshal(self, writer):
        payload = repr(float(self.value)).encode()
        codec.write_scalar(writer, self.wire_type, payload)


    def unmarshal(self, reader):

        payload = codec.read_scalar(reader, self.wire_type)

        if _float_payload.fullmatch(payload) is None:
            raise Discarded(InvalidValue('invalid float payload: %r' % (payload,)))

        self.value = float(payload)

        return self


# end of class Float



@codec.register(WireType.RESPONSE)
class Response(Value):
    """ A response status; the *value* is a :class:`ResponseCode`.
    """

    default = ResponseCode.OKAY

    def marshal(self, writer):
        codec.write_scalar(writer, self.wire_type, b'%d' % (int(self.value)))


    def unmarshal(self, reader):

        payload = codec.read_scalar(reader, self.wire_type)
        code = _parse_int(payload)

        try:
            self.value = ResponseCode(code)
        except ValueError as exc:
            raise Discarded(InvalidValue('unknown response code: %d' % (code))) from exc

        return self


# end of class Response



@codec.register(WireType.ERROR)
class WireError(Discarded, codec.Marshaler, codec.Unmarshaler):
    """ An error message sent by the peer, as opposed to a network or
        parsing failure. The *text* is free-form; an empty *text* is a
        legitimate error with no description.

        A :class:`WireError` is its own discard marker: whenever one is
        raised the message has already been fully consumed, so catching
        :class:`Discarded` catches peer errors too.
    """

    def __init__(self, text=''):
        ProtocolError.__init__(self, text)
        self.text = text


    def __str__(self):
        return self.text


    def __eq__(self, other):
        return type(self) is type(other) and self.text == other.text


    def __hash__(self):
        return hash((WireError, self.text))


    def __repr__(self):
        return 'WireError(%r)' % (self.text)


    @property
    def error(self):
        return self


    @property
    def value(self):
        return self.text


    def marshal(self, writer):

        payload = self.text.encode() if self.text else b''

        if DELIMITER in payload:
            raise ValueError('error text cannot contain the message delimiter')

        codec.write_scalar(writer, self.wire_type, payload)


    def unmarshal(self, reader):

        payload = codec.read_scalar(reader, self.wire_type)
        self.text = payload.decode(errors='replace')
        self.args = (self.text,)
        return self


# end of class WireError



@codec.register(WireType.ANY_ARRAY)
class AnyArray(Value):
    """ An ordered sequence of strings. Unlike :class:`Array` the elements
        carry no prefix of their own; each is written as its ASCII decimal
        byte length, the delimiter, the bytes, and the delimiter again. This
        is the form a query uses to carry a command and its arguments.
    """

    def __init__(self, value=None):

        if value is None:
            value = list()

        self.value = list(value)


    def marshal(self, writer):

        with pool.scratch() as scratch:
            scratch += self.wire_type.value
            scratch += b'%d' % (len(self.value))
            scratch += DELIMITER

            for element in self.value:
                codec.append_body(scratch, _as_bytes(element))

            writer.write(scratch)


    def unmarshal(self, reader):

        count = codec.read_header(reader, self.wire_type)
        elements = [codec.read_body(reader) for _ in range(count)]

        try:
            self.value = [element.decode() for element in elements]
        except UnicodeDecodeError as exc:
            raise Discarded(InvalidValue('array element is not valid UTF-8')) from exc

        return self


# end of class AnyArray



class _Sequence(Value):
    """ Base class for sequences whose elements are complete, self-describing
        wire messages, which may be of any type, including other sequences.
    """

    def __init__(self, value=None):

        if value is None:
            value = list()

        self.value = [wrap(element) for element in value]


    def marshal(self, writer):

        codec.write_header(writer, self.wire_type, len(self.value))

        for element in self.value:
            element.marshal(writer)


    def unmarshal(self, reader):

        count = codec.read_header(reader, self.wire_type)
        elements = list()
        first_error = None

        # Keep going after a bad element: the whole sequence must come off
        # the stream before any error is raised.

        for _ in range(count):
            try:
                element = codec.decode(reader)
            except Discarded as exc:
                element = None
                if first_error is None:
                    first_error = exc

            elements.append(element)

        self.value = elements

        if first_error is not None:
            raise first_error

        return self


# end of class _Sequence



@codec.register(WireType.ARRAY)
class Array(_Sequence):
    """ A heterogeneous array; every element carries its own prefix.
    """


@codec.register(WireType.QUERY)
class Query(_Sequence):
    """ The outer envelope of a request or response. A simple query holds a
        single element, typically an :class:`AnyArray` with the command and
        its arguments::

            Query([AnyArray(['SET', 'xx', 'exo'])])

        which marshals to ``*1\\n~3\\n3\\nSET\\n2\\nxx\\n3\\nexo\\n``.
    """



def wrap(thing):
    """ Return a wire value for the native Python *thing*. Wire values are
        returned as-is. Strings become :class:`String`, bytes become
        :class:`Blob`, integers the unsigned or signed :class:`Int`, lists
        and tuples an :class:`Array`, dictionaries :class:`Json`.
    """

    if isinstance(thing, (codec.Marshaler, codec.Unmarshaler)):
        return thing

    if isinstance(thing, ResponseCode):
        return Response(thing)

    if isinstance(thing, bool):
        return SmallInt(int(thing))

    if isinstance(thing, int):
        if thing < 0:
            return IntSigned(thing)
        else:
            return Int(thing)

    if isinstance(thing, float):
        return Float(thing)

    if isinstance(thing, str):
        return String(thing)

    if isinstance(thing, (bytes, bytearray, memoryview)):
        return Blob(bytes(thing))

    if isinstance(thing, (list, tuple)):
        return Array(thing)

    if isinstance(thing, dict):
        return Json(thing)

    raise TypeError('no Skyhash wire type for %s' % (type(thing).__name__))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
