''' JSON encoding for the Skyhash JSON wire type (prefix ``$``). The payload
    of a JSON message is length-prefixed in bytes, so :func:`dumps` always
    returns bytes and :func:`loads` accepts them.

    msgspec is preferred, then orjson, then the standard library. Whichever
    is chosen, a malformed document raises :data:`DecodeError`.
'''

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    try:
        import orjson
    except ImportError:
        import json


if msgspec is not None:
    _encoder = msgspec.json.Encoder()
    _decoder = msgspec.json.Decoder()

    dumps = _encoder.encode
    loads = _decoder.decode
    DecodeError = msgspec.DecodeError

elif orjson is not None:
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError

else:
    def dumps(document):
        return json.dumps(document, separators=(',', ':')).encode()

    loads = json.loads
    DecodeError = json.JSONDecodeError


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
