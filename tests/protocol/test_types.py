import io

import pytest

import skytable
from skytable.protocol import (
    AnyArray, Array, Blob, Discarded, Float, Int, IntSigned, InvalidValue,
    Json, Query, Response, ResponseCode, SmallInt, SmallIntSigned, String,
    WireError, wrap,
)


def marshaled(value):
    writer = io.BytesIO()
    value.marshal(writer)
    return writer.getvalue()


def round_trip(value, buffered):
    decoded = type(value)()
    decoded.unmarshal(buffered(marshaled(value)))
    return decoded


def test_string_encoding():

    assert marshaled(String('')) == b'+0\n\n'
    assert marshaled(String('x')) == b'+1\nx\n'
    assert marshaled(String('hello world')) == b'+11\nhello world\n'

    # The length is a byte count, not a character count.
    assert marshaled(String('é')) == b'+2\n\xc3\xa9\n'


@pytest.mark.parametrize('length', (0, 1, 9, 10, 128, 1000))
def test_string_round_trip(buffered, length):

    value = String('s' * length)
    encoded = marshaled(value)

    assert encoded.startswith(b'+%d\n' % (length))
    assert round_trip(value, buffered) == value


def test_string_with_delimiter(buffered):

    value = String('two\nlines')
    assert round_trip(value, buffered).value == 'two\nlines'


def test_invalid_utf8_is_discarded(buffered):

    reader = buffered(b'+2\n\xff\xfe\n:1\n')

    with pytest.raises(Discarded) as caught:
        String().unmarshal(reader)

    assert isinstance(caught.value.error, InvalidValue)
    assert reader.read() == b':1\n'


@pytest.mark.parametrize('text', ('', 'x', 'wrong password', 'err ' * 40))
def test_error_round_trip(buffered, text):

    error = WireError(text)
    encoded = marshaled(error)

    assert encoded == b'1' + text.encode() + b'\n'
    assert round_trip(error, buffered) == error


def test_error_rejects_delimiter():

    with pytest.raises(ValueError):
        marshaled(WireError('one\ntwo'))


def test_request_assembly():
    """ The simple query for SET xx exo, as documented for the protocol.
    """

    query = Query([AnyArray(['SET', 'xx', 'exo'])])
    assert marshaled(query) == b'*1\n~3\n3\nSET\n2\nxx\n3\nexo\n'


def test_any_array_round_trip(buffered):

    array = AnyArray(['', 'a', 'b\nc', 'x' * 300])
    assert round_trip(array, buffered) == array

    assert marshaled(AnyArray([b'raw', 'text'])) == b'~2\n3\nraw\n4\ntext\n'


def test_array_heterogeneous(buffered):

    array = Array(['key', 5, -5, 1.5, b'\x00\x01', [True, {'a': 1}]])

    assert array.value[0] == String('key')
    assert array.value[1] == Int(5)
    assert array.value[2] == IntSigned(-5)
    assert array.value[3] == Float(1.5)
    assert array.value[4] == Blob(b'\x00\x01')
    assert array.value[5] == Array([SmallInt(1), Json({'a': 1})])

    assert marshaled(Array(['a', 1])) == b'&2\n+1\na\n:1\n'
    assert round_trip(array, buffered) == array


def test_array_drains_bad_elements(buffered):
    """ A bad element is reported only after the rest of the array has been
        consumed, and the good elements are kept.
    """

    reader = buffered(b'&3\n+2\n\xff\xfe\n:4\n.999\n+1\nz\n')
    array = Array()

    with pytest.raises(Discarded):
        array.unmarshal(reader)

    assert array.value == [None, Int(4), None]
    assert reader.read() == b'+1\nz\n'


def test_integers(buffered):

    assert marshaled(SmallInt(255)) == b'.255\n'
    assert marshaled(SmallIntSigned(-128)) == b'--128\n'
    assert marshaled(Int(2 ** 64 - 1)) == b':18446744073709551615\n'
    assert marshaled(IntSigned(-2 ** 63)) == b';-9223372036854775808\n'

    for value in (SmallInt(0), SmallIntSigned(127), Int(12345), IntSigned(-1)):
        assert round_trip(value, buffered) == value


@pytest.mark.parametrize('value', (SmallInt(256), SmallInt(-1), SmallIntSigned(128), Int(-1), Int(2 ** 64), IntSigned(2 ** 63)))
def test_integer_range_marshal(value):

    writer = io.BytesIO()

    with pytest.raises(ValueError):
        value.marshal(writer)

    assert writer.getvalue() == b''


def test_integer_range_unmarshal(buffered):

    reader = buffered(b'.256\n. 1\n.1_0\n.3\n')

    for _ in range(3):
        with pytest.raises(Discarded) as caught:
            SmallInt().unmarshal(reader)
        assert isinstance(caught.value.error, InvalidValue)

    assert SmallInt().unmarshal(reader) == SmallInt(3)


def test_float(buffered):

    assert marshaled(Float(1.5)) == b'%1.5\n'
    assert marshaled(Float(1e16)) == b'%1e+16\n'

    for value in (Float(-0.125), Float(5e-324), Float(float('inf')), Float(float('-inf'))):
        assert round_trip(value, buffered) == value

    with pytest.raises(Discarded):
        Float().unmarshal(buffered(b'%abc\n'))


@pytest.mark.parametrize('payload', (b'1_0', b' 1.5', b'1.5 ', b'infinity', b'+1', b'1.', b'.5', b''))
def test_float_strict(buffered, payload):

    reader = buffered(b'%' + payload + b'\n.3\n')

    with pytest.raises(Discarded) as caught:
        Float().unmarshal(reader)

    assert isinstance(caught.value.error, InvalidValue)
    assert reader.read() == b'.3\n'


def test_integer_too_long(buffered):

    reader = buffered(b':' + b'9' * 5000 + b'\n:1\n')

    with pytest.raises(Discarded) as caught:
        Int().unmarshal(reader)

    assert isinstance(caught.value.error, InvalidValue)
    assert Int().unmarshal(reader) == Int(1)


@pytest.mark.parametrize('value', (5, 1.5, None, ['a']))
def test_string_rejects_other_types(value):

    writer = io.BytesIO()
    string = String()
    string.value = value

    with pytest.raises(TypeError):
        string.marshal(writer)

    with pytest.raises(TypeError):
        AnyArray(['ok', value]).marshal(writer)

    assert writer.getvalue() == b''


def test_blob(buffered):

    blob = Blob(b'\x00\n\xff')
    assert marshaled(blob) == b'?3\n\x00\n\xff\n'
    assert round_trip(blob, buffered) == blob


def test_json(buffered):

    document = {'list': [1, 2, 'a'], 'none': None, 'true': True}
    decoded = round_trip(Json(document), buffered)

    assert decoded.value == document

    reader = buffered(b'$3\n{{{\n:1\n')

    with pytest.raises(Discarded):
        Json().unmarshal(reader)

    assert reader.read() == b':1\n'


def test_response(buffered):

    assert marshaled(Response(ResponseCode.NOT_FOUND)) == b'!1\n'
    assert marshaled(Response()) == b'!0\n'
    assert round_trip(Response(ResponseCode.WRONG_TYPE), buffered).value is ResponseCode.WRONG_TYPE

    reader = buffered(b'!42\n!0\n')

    with pytest.raises(Discarded):
        Response().unmarshal(reader)

    assert Response().unmarshal(reader).value is ResponseCode.OKAY


def test_wrap():

    assert wrap('a') == String('a')
    assert wrap(b'a') == Blob(b'a')
    assert wrap(3) == Int(3)
    assert wrap(-3) == IntSigned(-3)
    assert wrap(False) == SmallInt(0)
    assert wrap(ResponseCode.OKAY) == Response(ResponseCode.OKAY)

    string = String('same')
    assert wrap(string) is string

    with pytest.raises(TypeError):
        wrap(None)

    with pytest.raises(TypeError):
        wrap(object())


def test_package_exports():

    assert skytable.protocol.String is String
    assert skytable.protocol.types.Query is Query


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
