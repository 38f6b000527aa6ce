''' Select the fastest JSON library available for encoding object values
    and parsing configuration files. The exported :func:`dumps` always
    returns bytes, regardless of which library is in use, since the
    result is stored directly as an object value.
'''

# msgspec is preferred, then orjson; the standard library module is only
# used if neither is installed.

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


def _stdlib_dumps(value):
    return json.dumps(value, separators=(',', ':')).encode('utf-8')


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
    dumps = _stdlib_dumps
    loads = json.loads
    DecodeError = json.JSONDecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
