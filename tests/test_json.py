import io

import pytest

import skytable
from skytable.protocol import Discarded, Json


def test_dumps_returns_bytes():

    encoded = skytable.json.dumps({'key': 'value', 'count': 3})

    assert isinstance(encoded, bytes)
    assert skytable.json.loads(encoded) == {'key': 'value', 'count': 3}


def test_integer_keys_become_strings():

    # A JSON object key is always a string; an integer key does not survive
    # the trip, and comes back as its decimal text.

    document = {'nested': {1: 'one', 'two': 2}, 'none': None, 'flags': [True, False]}
    decoded = skytable.json.loads(skytable.json.dumps(document))

    assert decoded != document
    assert decoded['nested'] == {'1': 'one', 'two': 2}
    assert decoded['none'] is None
    assert decoded['flags'] == [True, False]


def test_decode_error():

    with pytest.raises(skytable.json.DecodeError):
        skytable.json.loads(b'{"unterminated": ')


def test_wire_payload_is_byte_counted():

    document = {'name': 'café'}
    payload = skytable.json.dumps(document)

    writer = io.BytesIO()
    Json(document).marshal(writer)

    assert writer.getvalue() == b'$%d\n' % (len(payload)) + payload + b'\n'


def test_wire_decode_error_is_discarded(buffered):

    reader = buffered(b'$5\n[1, 2\n.1\n')

    with pytest.raises(Discarded):
        Json().unmarshal(reader)

    assert reader.read() == b'.1\n'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
