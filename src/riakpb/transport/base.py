"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`riakpb.protocol` so the protocol remains
transport-agnostic: the frame codec only ever calls :meth:`Transport.read`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class Transport(ABC):
    """Minimal contract for a blocking, bidirectional byte stream."""

    @abstractmethod
    def read(self, size: int) -> bytes:
        """Return exactly *size* bytes.

        Raises :class:`riakpb.errors.StreamClosed` if the stream ends first, and
        :class:`riakpb.errors.ConnectionError` on any other failure,
        including a read timeout.
        """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of *data*, or raise :class:`riakpb.errors.ConnectionError`."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection. Safe to call twice."""

    def settimeout(self, timeout: Optional[float]) -> None:
        """Set the timeout, in seconds, for each later read or write; None
        blocks indefinitely. Transports without a timeout raise
        NotImplementedError.
        """
        raise NotImplementedError(type(self).__name__ + " has no timeout")

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
