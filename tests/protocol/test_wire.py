import io
import pytest

from riakpb.errors import FramingError, StreamClosed
from riakpb.protocol import wire


class Reader:
    """ Minimal stream: read(n) returns exactly n bytes or raises StreamClosed.
    """

    def __init__(self, data):
        self.buffer = io.BytesIO(data)

    def read(self, size):
        data = self.buffer.read(size)
        if len(data) < size:
            raise StreamClosed()
        return data


def test_encode_frame():

    assert wire.encode_frame(2) == b'\x00\x00\x00\x01\x02'
    assert wire.encode_frame(1, b'') == b'\x00\x00\x00\x01\x01'
    assert wire.encode_frame(9, b'abc') == b'\x00\x00\x00\x04\x09abc'

    with pytest.raises(ValueError):
        wire.encode_frame(256, b'')


@pytest.mark.parametrize('payload', (b'', b'x', bytes(range(256)) * 64))
def test_frame_round_trip(payload):

    frame = wire.encode_frame(10, payload)
    assert len(frame) == 5 + len(payload)

    assert wire.decode_frame(Reader(frame)) == (10, payload)
    assert wire.unpack_frame(frame) == (10, payload)


def test_consecutive_frames():

    stream = Reader(wire.encode_frame(18, b'first') + wire.encode_frame(18, b'second'))

    assert wire.decode_frame(stream) == (18, b'first')
    assert wire.decode_frame(stream) == (18, b'second')

    with pytest.raises(FramingError):
        wire.decode_frame(stream)


def test_short_reads():

    with pytest.raises(FramingError):
        wire.decode_frame(Reader(b''))

    with pytest.raises(FramingError):
        wire.decode_frame(Reader(b'\x00\x00'))

    with pytest.raises(FramingError):
        wire.decode_frame(Reader(b'\x00\x00\x00\x05\x0a\x01'))


def test_zero_length():

    with pytest.raises(FramingError):
        wire.decode_frame(Reader(b'\x00\x00\x00\x00'))


def test_max_size():

    frame = wire.encode_frame(10, b'x' * 100)

    assert wire.decode_frame(Reader(frame), max_size=101) == (10, b'x' * 100)

    with pytest.raises(FramingError):
        wire.decode_frame(Reader(frame), max_size=100)


def test_unpack_mismatch():

    frame = wire.encode_frame(10, b'abc')

    with pytest.raises(FramingError):
        wire.unpack_frame(frame[:-1])

    with pytest.raises(FramingError):
        wire.unpack_frame(frame + b'\x00')

    with pytest.raises(FramingError):
        wire.unpack_frame(b'\x00\x00\x00')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
