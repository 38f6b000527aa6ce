from __future__ import annotations

import struct
from typing import Optional, Tuple

from ..errors import FramingError, InvalidRequest, StreamClosed


# Layout of a frame:
#
#   [4 bytes length, big-endian][1 byte message code][payload...]
#
# The length covers the code byte and the payload, never itself.

_header = struct.Struct('>I')
_max_length = 0xFFFFFFFF


def encode_frame(code: int, payload: bytes = b'') -> bytes:
    """
    Serialize (code, payload) -> bytes
    """

    if code < 0 or code > 0xFF:
        raise ValueError('message code out of range: %d' % (code))

    length = len(payload) + 1
    if length > _max_length:
        raise InvalidRequest('payload too large for one frame: %d bytes' % (len(payload)))

    return _header.pack(length) + bytes((code,)) + payload


def decode_frame(stream, max_size: Optional[int] = None) -> Tuple[int, bytes]:
    """
    Read exactly one frame from *stream* -> (code, payload)

    The *stream* must provide read(n), returning exactly n bytes or raising
    StreamClosed. A *max_size* caps the declared frame length; a larger frame
    is rejected before its body is read.
    """

    header = _read_exactly(stream, _header.size, 'length prefix')
    length = _header.unpack(header)[0]

    if length == 0:
        raise FramingError('frame length 0 leaves no room for a message code')

    if max_size is not None and length > max_size:
        raise FramingError('frame length %d exceeds the configured maximum of %d' % (length, max_size))

    body = _read_exactly(stream, length, 'frame body')
    return body[0], body[1:]


def unpack_frame(frame: bytes) -> Tuple[int, bytes]:
    """
    Deserialize one complete in-memory frame -> (code, payload)
    """

    if len(frame) < _header.size + 1:
        raise FramingError('frame too short: %d bytes' % (len(frame)))

    length = _header.unpack_from(frame)[0]
    actual = len(frame) - _header.size

    if length != actual:
        raise FramingError('frame declares %d bytes, carries %d' % (length, actual))

    return frame[_header.size], bytes(frame[_header.size + 1:])


def _read_exactly(stream, size: int, what: str) -> bytes:

    try:
        data = stream.read(size)
    except StreamClosed as e:
        raise FramingError('stream closed while reading %s (%d bytes expected)' % (what, size)) from e

    if len(data) != size:
        raise FramingError('short read on %s: %d of %d bytes' % (what, len(data), size))

    return data


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
