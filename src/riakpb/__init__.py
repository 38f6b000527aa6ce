""" Python client for the Riak Protocol Buffers API. A
    :class:`riakpb.Session` speaks to exactly one node over one
    connection; pooling, failover and retries are left to the caller.

    Typical use::

        import riakpb

        session = riakpb.connect('10.0.0.2', 8087)
        session.ping()

        content = riakpb.ObjectContent(b'This is test data!')
        request = riakpb.PutRequest(bucket='testbucket', key='testkey')
        session.put(request, content)
"""

# Utility components.

from . import json
from . import config
from . import errors

# The wire protocol and the object model built on top of it.

from . import protocol
from . import transport

from .bucket import BucketProps
from .object import Link, ObjectContent, RiakObject
from .protocol.kv import DeleteRequest, GetRequest, IndexRequest, PutRequest, QueryType
from .protocol.kv import exact_query, range_query
from .protocol.yokozuna import SearchIndex

# Primary public-facing interfaces.

from .session import Session, State, connect
from .errors import (
    RiakError,
    ConnectionError,
    FramingError,
    SchemaError,
    StreamClosed,
    InvalidRequest,
    ServerError,
    SiblingsError,
)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
