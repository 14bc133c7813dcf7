import io

import pytest

from skytable.protocol import Response, ResponseCode


def test_codes():

    assert int(ResponseCode.OKAY) == 0
    assert int(ResponseCode.ENCODING_ERROR) == 9
    assert len(ResponseCode) == 10


@pytest.mark.parametrize('code, label', (
    (ResponseCode.OKAY, 'Okay'),
    (ResponseCode.NOT_FOUND, 'Not Found'),
    (ResponseCode.OVERWRITE_ERROR, 'Overwrite Error'),
    (ResponseCode.ACTION_ERROR, 'Action Error'),
    (ResponseCode.PACKET_ERROR, 'Packet Error'),
    (ResponseCode.SERVER_ERROR, 'Server Error'),
    (ResponseCode.ERROR_STRING, 'Error String'),
    (ResponseCode.WRONG_TYPE, 'Wrong Type Error'),
    (ResponseCode.UNKNOWN_DATA_TYPE, 'Unknown Data Type Error'),
    (ResponseCode.ENCODING_ERROR, 'Encoding Error'),
))
def test_labels(code, label):
    assert code.label == label


def test_to_response():

    response = ResponseCode.NOT_FOUND.to_response()
    assert response == Response(ResponseCode.NOT_FOUND)

    writer = io.BytesIO()
    response.marshal(writer)
    assert writer.getvalue() == b'!1\n'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
