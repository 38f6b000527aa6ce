""" The client session: one connection to one server, one request in flight
    at a time. Every public method performs a complete request/response
    exchange on the calling thread before returning; streamed listings
    return a :class:`riakpb.stream.ResponseStream` that reads one frame per
    iteration step.

    A session is not thread safe. Use one session per thread, or serialize
    access externally.
"""

import enum
import functools
import logging

from . import codec
from . import config
from .bucket import BucketProps
from .errors import ConnectionError, FramingError, InvalidRequest, SchemaError, ServerError
from .object import ObjectContent
from .protocol import kv
from .protocol import riak
from .protocol import registry
from .protocol import wire
from .protocol import yokozuna
from .protocol.codes import ERROR_RESP
from .protocol.message import build, copy, get
from .protocol.registry import Operation
from .stream import IndexPage, IndexStream, ResponseStream
from .transport import TcpTransport


log = logging.getLogger(__name__)


class State(enum.Enum):
    CONNECTED = 'connected'
    AWAITING = 'awaiting response'
    STREAMING = 'streaming'
    BROKEN = 'broken'
    CLOSED = 'closed'


class Session:
    """ Issue requests over a single *transport* and decode the responses.
        The *transport* provides blocking ``read(n)``, ``write(data)``, and
        ``close()``; see :class:`riakpb.transport.Transport`. If
        *max_frame_size* is set, any response frame declaring a larger
        length is treated as a framing error.

        Any transport failure or framing error moves the session to the
        :attr:`State.BROKEN` state: the stream has lost its frame boundary,
        and every later call fails with :class:`ConnectionError` without
        touching the transport. Server errors, schema errors and invalid
        requests leave the session usable.

        :ivar state: The current :class:`State`.
    """

    def __init__(self, transport, max_frame_size=None):

        self.transport = transport
        self.max_frame_size = max_frame_size
        self.state = State.CONNECTED
        self._stream = None


    def __repr__(self):
        return 'Session(%r, state=%s)' % (self.transport, self.state.value)


    def __enter__(self):
        return self


    def __exit__(self, *exc):
        self.close()


    @property
    def usable(self):
        return self.state is State.CONNECTED


    def close(self):
        """ Close the transport. Closing an open stream's session abandons
            the stream.
        """

        if self.state is State.CLOSED:
            return

        self.state = State.CLOSED
        self._stream = None
        self.transport.close()


    # Exchange mechanics.

    def _check_usable(self):

        state = self.state

        if state is State.CONNECTED:
            return
        if state is State.BROKEN:
            raise ConnectionError('session is broken by an earlier transport or framing error; open a new session')
        if state is State.CLOSED:
            raise ConnectionError('session is closed')
        if state is State.STREAMING:
            raise InvalidRequest('a streamed response is still being read; exhaust or close it first')

        raise ConnectionError('session is ' + state.value)


    def _break(self, reason):

        log.warning("session broken: %s", reason)
        self.state = State.BROKEN
        self._stream = None

        try:
            self.transport.close()
        except OSError as e:
            log.debug("error closing broken transport: %s", e)


    def _send(self, operation, request):
        """ Encode and write one request. Encoding happens before anything
            is written, so an invalid request has no side effects.
        """

        self._check_usable()

        code = operation.request_code
        payload = registry.encode_payload(code, request)
        frame = wire.encode_frame(code, payload)

        log.debug("%s: sending code %d, %d payload bytes", operation.name, code, len(payload))
        self.state = State.AWAITING

        try:
            self.transport.write(frame)
        except ConnectionError as e:
            self._break(str(e))
            raise
        except OSError as e:
            self._break(str(e))
            raise ConnectionError('write failed: %s' % (e)) from e


    def _receive(self, operation):
        """ Read one frame and decode it as the response to *operation*.
            An error frame raises :class:`ServerError`.
        """

        try:
            code, payload = wire.decode_frame(self.transport, self.max_frame_size)
        except (ConnectionError, FramingError) as e:
            self._break(str(e))
            raise
        except OSError as e:
            self._break(str(e))
            raise ConnectionError('read failed: %s' % (e)) from e

        log.debug("%s: received code %d, %d payload bytes", operation.name, code, len(payload))

        if code == ERROR_RESP:
            error = registry.decode_payload(ERROR_RESP, payload)
            raise ServerError(error.errcode, riak.error_message(error))

        if code != operation.response_code:
            reason = '%s expects response code %d, received %d' % (operation.name, operation.response_code, code)
            self._break(reason)
            raise FramingError(reason)

        return registry.decode_payload(code, payload)


    def _exchange(self, operation, request=None):

        self._send(operation, request)

        try:
            return self._receive(operation)
        finally:
            if self.state is State.AWAITING:
                self.state = State.CONNECTED


    def _open_stream(self, operation, request, entries, stream_class=ResponseStream):

        self._send(operation, request)

        stream = stream_class(self, operation, entries)
        self.state = State.STREAMING
        self._stream = stream
        return stream


    def _next_batch(self, stream):
        """ Read the next frame of the active *stream*.
        """

        if self._stream is not stream:
            stream.done = True
            raise ConnectionError('stream is no longer attached to its session (session %s)' % (self.state.value))

        try:
            response = self._receive(stream.operation)

        except ServerError:
            # The server ends the stream with the error frame.
            self._finish_stream(stream)
            raise

        except SchemaError as e:
            stream.done = True
            self._break('undecodable frame in %s stream: %s' % (stream.operation.name, e))
            raise

        except (ConnectionError, FramingError):
            stream.done = True
            raise

        if response.done:
            self._finish_stream(stream)

        return response


    def _finish_stream(self, stream):
        stream.done = True
        self._stream = None
        if self.state is State.STREAMING:
            self.state = State.CONNECTED


    def _abandon(self, stream):

        if self._stream is not stream:
            return

        self._break('%s stream closed before the final frame' % (stream.operation.name))


    # Operations.

    def ping(self):
        """ Round trip an empty request. Returns None, or raises.
        """

        self._exchange(Operation.PING)


    def server_info(self):
        """ Return a :class:`riakpb.protocol.riak.ServerInfoResponse` with
            the node name and server version.
        """

        return self._exchange(Operation.SERVER_INFO)


    def get(self, request):
        """ Fetch an object. The *request* is a
            :data:`riakpb.protocol.kv.GetRequest`. Returns a
            :class:`riakpb.object.RiakObject`; if the key does not exist the
            object is returned with ``exists`` set to False.
        """

        response = self._exchange(Operation.GET, request)
        return codec.object_from_response(request.bucket, request.key, get(request, 'bucket_type'), response)


    def put(self, request, content=None):
        """ Store an object. The *request* is a
            :data:`riakpb.protocol.kv.PutRequest`. The *content* to store,
            an :class:`riakpb.object.ObjectContent` or the wire-level
            :data:`riakpb.protocol.kv.Content`, may be given here instead
            of on the request; the caller's request is left unmodified.

            Returns a :class:`riakpb.object.RiakObject` holding the key,
            which is the server-assigned key if the request omitted one.
            The siblings and vclock are only populated if the request set
            ``return_body`` or ``return_head``.
        """

        if content is not None:
            if not isinstance(request, kv.PutRequest):
                raise InvalidRequest('put() takes a PutRequest, not ' + type(request).__name__)
            if isinstance(content, ObjectContent):
                content = codec.content_to_pb(content)
            request = copy(request)
            request.content.CopyFrom(content)

        response = self._exchange(Operation.PUT, request)
        return codec.object_from_response(request.bucket, get(request, 'key'), get(request, 'bucket_type'), response)


    def delete(self, request):
        """ Delete an object. The *request* is a
            :data:`riakpb.protocol.kv.DeleteRequest`; include the vclock
            from a previous fetch to avoid creating a sibling.
        """

        self._exchange(Operation.DELETE, request)


    def stream_buckets(self, bucket_type=None, timeout=None):
        """ Return a :class:`riakpb.stream.ResponseStream` of bucket names.
        """

        request = build(kv.ListBucketsRequest, stream=True, bucket_type=bucket_type, timeout=timeout)
        return self._open_stream(Operation.LIST_BUCKETS, request, kv.entries)


    def list_buckets(self, bucket_type=None, timeout=None):
        return self.stream_buckets(bucket_type, timeout).all()


    def stream_keys(self, bucket, bucket_type=None, timeout=None):
        """ Return a :class:`riakpb.stream.ResponseStream` of the keys in
            *bucket*. Listing keys walks every key on the cluster; avoid it
            in production traffic.
        """

        request = build(kv.ListKeysRequest, bucket=bucket, bucket_type=bucket_type, timeout=timeout)
        return self._open_stream(Operation.LIST_KEYS, request, kv.entries)


    def list_keys(self, bucket, bucket_type=None, timeout=None):
        return self.stream_keys(bucket, bucket_type, timeout).all()


    def get_bucket_props(self, bucket, bucket_type=None):
        """ Return the :class:`riakpb.bucket.BucketProps` of *bucket*.
        """

        request = build(riak.GetBucketRequest, bucket=bucket, bucket_type=bucket_type)
        response = self._exchange(Operation.GET_BUCKET_PROPS, request)
        return codec.props_from_pb(response.props)


    def set_bucket_props(self, bucket, props, bucket_type=None):
        """ Apply the properties in *props* to *bucket*. Properties absent
            from *props* are left unchanged on the server.
        """

        props = codec.props_to_pb(_as_props(props))
        request = build(riak.SetBucketRequest, bucket=bucket, props=props, bucket_type=bucket_type)
        self._exchange(Operation.SET_BUCKET_PROPS, request)


    def reset_bucket(self, bucket, bucket_type=None):
        """ Restore the default properties of *bucket*.
        """

        request = build(riak.ResetBucketRequest, bucket=bucket, bucket_type=bucket_type)
        self._exchange(Operation.RESET_BUCKET, request)


    def get_bucket_type_props(self, bucket_type):
        request = build(riak.GetBucketTypeRequest, bucket_type=bucket_type)
        response = self._exchange(Operation.GET_BUCKET_TYPE_PROPS, request)
        return codec.props_from_pb(response.props)


    def set_bucket_type_props(self, bucket_type, props):
        props = codec.props_to_pb(_as_props(props))
        request = build(riak.SetBucketTypeRequest, bucket_type=bucket_type, props=props)
        self._exchange(Operation.SET_BUCKET_TYPE_PROPS, request)


    def index_query(self, request):
        """ Run a secondary index query and return one
            :class:`riakpb.stream.IndexPage`. The *request* is a
            :data:`riakpb.protocol.kv.IndexRequest`, usually built with
            :func:`riakpb.protocol.kv.exact_query` or
            :func:`riakpb.protocol.kv.range_query`; to fetch the next page,
            repeat the query with ``continuation`` set from the previous
            page.
        """

        if isinstance(request, kv.IndexRequest) and request.stream:
            raise InvalidRequest('streamed index queries go through stream_index()')

        response = self._exchange(Operation.INDEX_QUERY, request)
        return IndexPage(kv.index_entries(response, request.index), get(response, 'continuation'))


    def stream_index(self, request):
        """ Run a secondary index query with the results streamed back in
            batches. Returns a :class:`riakpb.stream.IndexStream`.
        """

        if not isinstance(request, kv.IndexRequest):
            raise InvalidRequest('stream_index() takes an IndexRequest, not ' + type(request).__name__)

        request = copy(request)
        request.stream = True

        entries = functools.partial(kv.index_entries, index=request.index)
        return self._open_stream(Operation.INDEX_STREAM, request, entries, IndexStream)


    def get_preflist(self, bucket, key, bucket_type=None):
        """ Return the preference list for *key* as a list of
            :data:`riakpb.protocol.kv.PreflistItem`, each naming a
            partition, the node that owns it, and whether it is a primary.
        """

        request = build(kv.PreflistRequest, bucket=bucket, key=key, bucket_type=bucket_type)
        response = self._exchange(Operation.GET_PREFLIST, request)
        return list(response.preflist)


    def get_search_index(self, name=None):
        """ Return a list of :data:`riakpb.protocol.yokozuna.SearchIndex`:
            the named index, or every index if *name* is None.
        """

        request = build(yokozuna.IndexGetRequest, name=name)
        response = self._exchange(Operation.SEARCH_INDEX_GET, request)
        return list(response.index)


    def put_search_index(self, index, timeout=None):
        request = build(yokozuna.IndexPutRequest, index=index, timeout=timeout)
        self._exchange(Operation.SEARCH_INDEX_PUT, request)


    def delete_search_index(self, name):
        request = build(yokozuna.IndexDeleteRequest, name=name)
        self._exchange(Operation.SEARCH_INDEX_DELETE, request)


    def get_search_schema(self, name):
        """ Return the content of the named search schema, as bytes.
        """

        request = build(yokozuna.SchemaGetRequest, name=name)
        response = self._exchange(Operation.SEARCH_SCHEMA_GET, request)
        return get(response.schema, 'content')


    def put_search_schema(self, name, content):
        schema = build(yokozuna.SearchSchema, name=name, content=content)
        request = build(yokozuna.SchemaPutRequest, schema=schema)
        self._exchange(Operation.SEARCH_SCHEMA_PUT, request)


    def set_timeout(self, timeout):
        """ Change the transport timeout, in seconds, for every later read
            and write; None blocks indefinitely.
        """

        if self.state in (State.BROKEN, State.CLOSED):
            raise ConnectionError('session is ' + self.state.value)

        log.debug("timeout set to %s", timeout)
        self.transport.settimeout(timeout)


# end of class Session



def connect(host=None, port=None, timeout=None, max_frame_size=None):
    """ Open a TCP connection and return a new :class:`Session`. Any
        argument left as None is taken from :mod:`riakpb.config`. Raises
        :class:`riakpb.errors.ConnectionError` if the connection cannot be
        established.
    """

    settings = config.load()

    if host is None:
        host = settings['host']
    if port is None:
        port = settings['port']
    if timeout is None:
        timeout = settings['timeout']
    if max_frame_size is None:
        max_frame_size = settings['max_frame_size']

    transport = TcpTransport(host, port, timeout)
    return Session(transport, max_frame_size)


def _as_props(props):

    if isinstance(props, BucketProps):
        return props

    return BucketProps(props)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
