from . import codes
from . import message
from . import kv
from . import riak
from . import yokozuna
from . import registry
from . import wire

from .codes import MessageCode
from .registry import Operation


"""
riakpb Protocol Layer
=====================

This package defines the binary protocol spoken with a Riak node: how
frames are laid out, how each payload is encoded, and which message code
carries which payload.

The protocol layer MUST NOT depend on any transport implementation; the
frame reader only needs an object with a blocking read(n).

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Session (riakpb.session)
    One method per operation
    - ping(), get(), put(), delete(), ...
    - error frames become ServerError
    - streamed listings become iterators

    │
    ▼
Operation Registry (registry.py)
    Operation -> (request code, response code)
    Message code -> payload schema
    Plain lookup tables, no class hierarchy

    │
    ▼
Payload Schemas (kv.py, riak.py, yokozuna.py)
    One field table per payload
    - declared fields, explicit presence
    - required fields checked on encode and decode

    │
    ▼
Message Classes (message.py)
    Protocol buffer classes built from the field tables
    - google.protobuf runtime does the field encoding
    - unknown fields kept and written back

    │
    ▼
Framing (wire.py)
    [u32 length, big-endian][u8 code][payload]

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Transport (riakpb.transport)
    Moves bytes
    - read(n), write(data), close()
    - TCP socket

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
