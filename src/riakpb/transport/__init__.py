"""Transport layer implementations."""

from .base import Transport
from .tcp import TcpTransport
