""" Lookup tables binding operations to message codes, and message codes
    to payload schemas. Shared response codes (the put and delete
    acknowledgements, the bucket property response) always map to the
    same schema, so a single table is enough in both directions.
"""

import enum

from ..errors import FramingError, InvalidRequest
from .codes import MessageCode
from .message import Empty
from . import message as _message
from . import kv
from . import riak
from . import yokozuna


class Operation(enum.Enum):
    """ Every operation the client can issue. Each member carries its
        request code, its response code, and whether the response arrives
        as a sequence of frames terminated by ``done``.
    """

    PING = (MessageCode.PING_REQ, MessageCode.PING_RESP, False)
    SERVER_INFO = (MessageCode.GET_SERVER_INFO_REQ, MessageCode.GET_SERVER_INFO_RESP, False)
    GET = (MessageCode.GET_REQ, MessageCode.GET_RESP, False)
    PUT = (MessageCode.PUT_REQ, MessageCode.PUT_RESP, False)
    DELETE = (MessageCode.DEL_REQ, MessageCode.DEL_RESP, False)
    LIST_BUCKETS = (MessageCode.LIST_BUCKETS_REQ, MessageCode.LIST_BUCKETS_RESP, True)
    LIST_KEYS = (MessageCode.LIST_KEYS_REQ, MessageCode.LIST_KEYS_RESP, True)
    GET_BUCKET_PROPS = (MessageCode.GET_BUCKET_REQ, MessageCode.GET_BUCKET_RESP, False)
    SET_BUCKET_PROPS = (MessageCode.SET_BUCKET_REQ, MessageCode.SET_BUCKET_RESP, False)
    RESET_BUCKET = (MessageCode.RESET_BUCKET_REQ, MessageCode.RESET_BUCKET_RESP, False)
    GET_BUCKET_TYPE_PROPS = (MessageCode.GET_BUCKET_TYPE_REQ, MessageCode.GET_BUCKET_RESP, False)
    SET_BUCKET_TYPE_PROPS = (MessageCode.SET_BUCKET_TYPE_REQ, MessageCode.SET_BUCKET_RESP, False)
    INDEX_QUERY = (MessageCode.INDEX_REQ, MessageCode.INDEX_RESP, False)
    INDEX_STREAM = (MessageCode.INDEX_REQ, MessageCode.INDEX_RESP, True)
    GET_PREFLIST = (MessageCode.GET_BUCKET_KEY_PREFLIST_REQ, MessageCode.GET_BUCKET_KEY_PREFLIST_RESP, False)
    SEARCH_INDEX_GET = (MessageCode.YOKOZUNA_INDEX_GET_REQ, MessageCode.YOKOZUNA_INDEX_GET_RESP, False)
    SEARCH_INDEX_PUT = (MessageCode.YOKOZUNA_INDEX_PUT_REQ, MessageCode.PUT_RESP, False)
    SEARCH_INDEX_DELETE = (MessageCode.YOKOZUNA_INDEX_DELETE_REQ, MessageCode.DEL_RESP, False)
    SEARCH_SCHEMA_GET = (MessageCode.YOKOZUNA_SCHEMA_GET_REQ, MessageCode.YOKOZUNA_SCHEMA_GET_RESP, False)
    SEARCH_SCHEMA_PUT = (MessageCode.YOKOZUNA_SCHEMA_PUT_REQ, MessageCode.PUT_RESP, False)

    def __init__(self, request_code, response_code, streaming):
        self.request_code = request_code
        self.response_code = response_code
        self.streaming = streaming


    @property
    def request_schema(self):
        return schemas[self.request_code]


    @property
    def response_schema(self):
        return schemas[self.response_code]


schemas = {
    MessageCode.ERROR_RESP: riak.ErrorResponse,
    MessageCode.PING_REQ: Empty,
    MessageCode.PING_RESP: Empty,
    MessageCode.GET_SERVER_INFO_REQ: Empty,
    MessageCode.GET_SERVER_INFO_RESP: riak.ServerInfoResponse,
    MessageCode.GET_REQ: kv.GetRequest,
    MessageCode.GET_RESP: kv.GetResponse,
    MessageCode.PUT_REQ: kv.PutRequest,
    MessageCode.PUT_RESP: kv.PutResponse,
    MessageCode.DEL_REQ: kv.DeleteRequest,
    MessageCode.DEL_RESP: Empty,
    MessageCode.LIST_BUCKETS_REQ: kv.ListBucketsRequest,
    MessageCode.LIST_BUCKETS_RESP: kv.ListBucketsResponse,
    MessageCode.LIST_KEYS_REQ: kv.ListKeysRequest,
    MessageCode.LIST_KEYS_RESP: kv.ListKeysResponse,
    MessageCode.GET_BUCKET_REQ: riak.GetBucketRequest,
    MessageCode.GET_BUCKET_RESP: riak.GetBucketResponse,
    MessageCode.SET_BUCKET_REQ: riak.SetBucketRequest,
    MessageCode.SET_BUCKET_RESP: Empty,
    MessageCode.INDEX_REQ: kv.IndexRequest,
    MessageCode.INDEX_RESP: kv.IndexResponse,
    MessageCode.RESET_BUCKET_REQ: riak.ResetBucketRequest,
    MessageCode.RESET_BUCKET_RESP: Empty,
    MessageCode.GET_BUCKET_TYPE_REQ: riak.GetBucketTypeRequest,
    MessageCode.SET_BUCKET_TYPE_REQ: riak.SetBucketTypeRequest,
    MessageCode.GET_BUCKET_KEY_PREFLIST_REQ: kv.PreflistRequest,
    MessageCode.GET_BUCKET_KEY_PREFLIST_RESP: kv.PreflistResponse,
    MessageCode.YOKOZUNA_INDEX_GET_REQ: yokozuna.IndexGetRequest,
    MessageCode.YOKOZUNA_INDEX_GET_RESP: yokozuna.IndexGetResponse,
    MessageCode.YOKOZUNA_INDEX_PUT_REQ: yokozuna.IndexPutRequest,
    MessageCode.YOKOZUNA_INDEX_DELETE_REQ: yokozuna.IndexDeleteRequest,
    MessageCode.YOKOZUNA_SCHEMA_GET_REQ: yokozuna.SchemaGetRequest,
    MessageCode.YOKOZUNA_SCHEMA_GET_RESP: yokozuna.SchemaGetResponse,
    MessageCode.YOKOZUNA_SCHEMA_PUT_REQ: yokozuna.SchemaPutRequest,
}


# Checks that span several fields of a request, run before it is encoded.

validators = {
    MessageCode.INDEX_REQ: kv.validate_index,
}


def encode_payload(code, message):
    """ Encode *message* as the payload for message *code*, after checking
        that it is an instance of the schema bound to that code. A None
        *message* stands for an empty instance of that schema.
    """

    try:
        schema = schemas[code]
    except KeyError:
        raise InvalidRequest('no schema for message code %d' % (code))

    if message is None:
        message = schema()
    elif not isinstance(message, schema):
        raise InvalidRequest('message code %d carries %s, not %s' % (code, type(message).__name__, schema.__name__))

    validator = validators.get(code)
    if validator is not None:
        validator(message)

    return _message.encode(message)


def decode_payload(code, payload):
    """ Decode *payload* according to the schema bound to message *code*.
    """

    try:
        schema = schemas[code]
    except KeyError:
        raise FramingError('unknown message code %d' % (code))

    return _message.decode(schema, payload)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
