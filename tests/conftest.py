import pytest

import riakpb
from riakpb.protocol import wire


class ScriptedTransport:
    """ An in-memory stand-in for a connection to a server. Frames queued
        with :func:`feed` are handed out by :func:`read`; everything the
        session writes is collected in :attr:`written`. Running out of
        queued bytes in the middle of a read behaves like the server
        closing the connection.
    """

    def __init__(self, incoming=b''):
        self.incoming = bytearray(incoming)
        self.written = bytearray()
        self.reads = 0
        self.writes = 0
        self.closed = False
        self.timeout = None


    def feed(self, code, payload=b''):
        if not isinstance(payload, bytes):
            payload = payload.SerializeToString()
        self.incoming += wire.encode_frame(code, payload)


    def feed_raw(self, data):
        self.incoming += data


    def read(self, size):
        self.reads += 1

        if len(self.incoming) < size:
            self.incoming.clear()
            raise riakpb.StreamClosed('scripted stream exhausted')

        data = bytes(self.incoming[:size])
        del self.incoming[:size]
        return data


    def write(self, data):
        self.writes += 1
        self.written += data


    def settimeout(self, timeout):
        self.timeout = timeout


    def close(self):
        self.closed = True


    def sent(self):
        """ Return the frames written so far as (code, payload) tuples.
        """

        frames = list()
        buffer = bytes(self.written)

        while buffer:
            length = int.from_bytes(buffer[:4], 'big')
            frames.append(wire.unpack_frame(buffer[:4 + length]))
            buffer = buffer[4 + length:]

        return frames


@pytest.fixture
def transport():
    return ScriptedTransport()


@pytest.fixture
def session(transport):
    return riakpb.Session(transport)


@pytest.fixture
def clean_environment(monkeypatch, tmp_path):
    for variable in riakpb.config.environment.values():
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv('RIAKPB_CONFIG', str(tmp_path / 'missing.json'))
    return tmp_path


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
