"""TCP socket transport."""

from __future__ import annotations

import logging
import socket
from typing import Optional

from ..errors import ConnectionError, StreamClosed
from .base import Transport


log = logging.getLogger(__name__)


class TcpTransport(Transport):
    """A blocking TCP connection to one server.

    The *timeout*, in seconds, applies to connecting and to every
    individual socket read or write; None blocks indefinitely.
    """

    def __init__(self, host: str, port: int, timeout: Optional[float] = None):
        self.host = host
        self.port = int(port)
        self.timeout = timeout

        try:
            self.socket = socket.create_connection((host, self.port), timeout)
        except OSError as e:
            raise ConnectionError(f"cannot connect to {host}:{self.port}: {e}") from e

        self.socket.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        self._open = True
        log.debug("connected to %s:%d", host, self.port)

    def __repr__(self) -> str:
        return f"TcpTransport({self.host!r}, {self.port})"

    def read(self, size: int) -> bytes:
        buffer = bytearray(size)
        view = memoryview(buffer)
        received = 0

        while received < size:
            try:
                count = self.socket.recv_into(view[received:], size - received)
            except socket.timeout as e:
                raise ConnectionError(f"read from {self.host}:{self.port} timed out") from e
            except OSError as e:
                raise ConnectionError(f"read from {self.host}:{self.port} failed: {e}") from e

            if count == 0:
                raise StreamClosed(f"connection to {self.host}:{self.port} closed after {received} of {size} bytes")
            received += count

        return bytes(buffer)

    def write(self, data: bytes) -> None:
        try:
            self.socket.sendall(data)
        except socket.timeout as e:
            raise ConnectionError(f"write to {self.host}:{self.port} timed out") from e
        except OSError as e:
            raise ConnectionError(f"write to {self.host}:{self.port} failed: {e}") from e

    def settimeout(self, timeout: Optional[float]) -> None:
        self.timeout = timeout
        self.socket.settimeout(timeout)

    def close(self) -> None:
        if not self._open:
            return

        self._open = False
        try:
            self.socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Already reset by the peer; close() below still releases it.
            pass
        self.socket.close()

    @property
    def is_open(self) -> bool:
        return self._open
