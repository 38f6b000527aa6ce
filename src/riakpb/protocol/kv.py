""" Key/value payload schemas: fetch, store, delete, listings, secondary
    index queries, and preference lists.
"""

import enum

from ..errors import InvalidRequest, SchemaError
from .message import Field, build, enumeration, message
from .message import BOOL, BYTES, ENUM, INT64, MESSAGE, STRING, UINT32


package = 'riakpb.kv'


Pair = message(package, 'Pair',
    Field(1, 'key', BYTES, required=True),
    Field(2, 'value', BYTES),
)

Link = message(package, 'Link',
    Field(1, 'bucket', STRING),
    Field(2, 'key', STRING),
    Field(3, 'tag', STRING),
)

# One sibling of a stored object, as it appears on the wire.

Content = message(package, 'Content',
    Field(1, 'value', BYTES, required=True),
    Field(2, 'content_type', STRING),
    Field(3, 'charset', STRING),
    Field(4, 'content_encoding', STRING),
    Field(5, 'vtag', STRING),
    Field(6, 'links', MESSAGE, repeated=True, schema=Link),
    Field(7, 'last_mod', UINT32),
    Field(8, 'last_mod_usecs', UINT32),
    Field(9, 'usermeta', MESSAGE, repeated=True, schema=Pair),
    Field(10, 'indexes', MESSAGE, repeated=True, schema=Pair),
    Field(11, 'deleted', BOOL),
    Field(12, 'ttl', UINT32),
)

GetRequest = message(package, 'GetRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'key', STRING, required=True),
    Field(3, 'r', UINT32),
    Field(4, 'pr', UINT32),
    Field(5, 'basic_quorum', BOOL),
    Field(6, 'notfound_ok', BOOL),
    Field(7, 'if_modified', BYTES),
    Field(8, 'head', BOOL),
    Field(9, 'deletedvclock', BOOL),
    Field(10, 'timeout', UINT32),
    Field(11, 'sloppy_quorum', BOOL),
    Field(12, 'n_val', UINT32),
    Field(13, 'bucket_type', STRING),
)

GetResponse = message(package, 'GetResponse',
    Field(1, 'content', MESSAGE, repeated=True, schema=Content),
    Field(2, 'vclock', BYTES),
    Field(3, 'unchanged', BOOL),
)

PutRequest = message(package, 'PutRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'key', STRING),
    Field(3, 'vclock', BYTES),
    Field(4, 'content', MESSAGE, required=True, schema=Content),
    Field(5, 'w', UINT32),
    Field(6, 'dw', UINT32),
    Field(7, 'return_body', BOOL),
    Field(8, 'pw', UINT32),
    Field(9, 'if_not_modified', BOOL),
    Field(10, 'if_none_match', BOOL),
    Field(11, 'return_head', BOOL),
    Field(12, 'timeout', UINT32),
    Field(13, 'asis', BOOL),
    Field(14, 'sloppy_quorum', BOOL),
    Field(15, 'n_val', UINT32),
    Field(16, 'bucket_type', STRING),
)

PutResponse = message(package, 'PutResponse',
    Field(1, 'content', MESSAGE, repeated=True, schema=Content),
    Field(2, 'vclock', BYTES),
    Field(3, 'key', STRING),
)

DeleteRequest = message(package, 'DeleteRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'key', STRING, required=True),
    Field(3, 'rw', UINT32),
    Field(4, 'vclock', BYTES),
    Field(5, 'r', UINT32),
    Field(6, 'w', UINT32),
    Field(7, 'pr', UINT32),
    Field(8, 'pw', UINT32),
    Field(9, 'dw', UINT32),
    Field(10, 'timeout', UINT32),
    Field(11, 'sloppy_quorum', BOOL),
    Field(12, 'n_val', UINT32),
    Field(13, 'bucket_type', STRING),
)

ListBucketsRequest = message(package, 'ListBucketsRequest',
    Field(1, 'timeout', UINT32),
    Field(2, 'stream', BOOL),
    Field(3, 'bucket_type', STRING),
)

ListBucketsResponse = message(package, 'ListBucketsResponse',
    Field(1, 'buckets', STRING, repeated=True),
    Field(2, 'done', BOOL),
)

ListKeysRequest = message(package, 'ListKeysRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'timeout', UINT32),
    Field(3, 'bucket_type', STRING),
)

ListKeysResponse = message(package, 'ListKeysResponse',
    Field(1, 'keys', STRING, repeated=True),
    Field(2, 'done', BOOL),
)


class QueryType(enum.IntEnum):
    EQ = 0
    RANGE = 1


enumeration(package, QueryType)

# A secondary index query. An exact match sets *key*; a range query sets
# *range_min* and *range_max*. See exact_query() and range_query().

IndexRequest = message(package, 'IndexRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'index', STRING, required=True),
    Field(3, 'qtype', ENUM, required=True, schema=QueryType),
    Field(4, 'key', BYTES),
    Field(5, 'range_min', BYTES),
    Field(6, 'range_max', BYTES),
    Field(7, 'return_terms', BOOL),
    Field(8, 'stream', BOOL),
    Field(9, 'max_results', UINT32),
    Field(10, 'continuation', BYTES),
    Field(11, 'timeout', UINT32),
    Field(12, 'bucket_type', STRING),
    Field(13, 'term_regex', BYTES),
    Field(14, 'pagination_sort', BOOL),
    Field(15, 'cover_context', BYTES),
    Field(16, 'return_body', BOOL),
)

IndexResponse = message(package, 'IndexResponse',
    Field(1, 'keys', STRING, repeated=True),
    Field(2, 'results', MESSAGE, repeated=True, schema=Pair),
    Field(3, 'continuation', BYTES),
    Field(4, 'done', BOOL),
)

PreflistRequest = message(package, 'PreflistRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'key', STRING, required=True),
    Field(3, 'bucket_type', STRING),
)

PreflistItem = message(package, 'PreflistItem',
    Field(1, 'partition', INT64, required=True),
    Field(2, 'node', STRING, required=True),
    Field(3, 'primary', BOOL, required=True),
)

PreflistResponse = message(package, 'PreflistResponse',
    Field(1, 'preflist', MESSAGE, repeated=True, schema=PreflistItem),
)


def found(response):
    """ An empty get response (no content, no vclock) means the key was
        not found; a vclock with no content is a tombstone, which exists.
    """

    return response.HasField('vclock') or len(response.content) > 0


def exact_query(bucket, index, value, **kwargs):
    """ Return an :data:`IndexRequest` matching *value* exactly. Further
        keyword arguments set the optional request fields.
    """

    return build(IndexRequest, bucket=bucket, index=index, qtype=QueryType.EQ, key=_index_value(value), **kwargs)


def range_query(bucket, index, start, end, **kwargs):
    """ Return an :data:`IndexRequest` matching every term from *start* to
        *end*, inclusive.
    """

    return build(IndexRequest, bucket=bucket, index=index, qtype=QueryType.RANGE, range_min=_index_value(start), range_max=_index_value(end), **kwargs)


def validate_index(request):
    """ Check that the fields of an index *request* agree with its query
        type. Raises :class:`InvalidRequest`.
    """

    exact = request.HasField('key')
    ranged = request.HasField('range_min') or request.HasField('range_max')

    if request.qtype == QueryType.EQ:
        if not exact:
            raise InvalidRequest('an exact match index query requires a key')
        if ranged:
            raise InvalidRequest('an exact match index query cannot carry range bounds')

    elif request.qtype == QueryType.RANGE:
        if not (request.HasField('range_min') and request.HasField('range_max')):
            raise InvalidRequest('a range index query requires both range_min and range_max')
        if exact:
            raise InvalidRequest('a range index query cannot carry an exact match key')

    if request.HasField('max_results') and request.max_results == 0:
        raise InvalidRequest('max_results must be positive')


def entries(response):
    """ Return the bucket names or keys carried by one listing response.
    """

    if isinstance(response, ListBucketsResponse):
        return list(response.buckets)

    return list(response.keys)


def index_entries(response, index=None):
    """ Return the matches in one index response: plain keys, or (term,
        key) tuples when the query asked for terms. Terms are text; the
        terms of an integer index (a name ending in ``_int``) are ints.
    """

    if len(response.results) == 0:
        return list(response.keys)

    integer = index is not None and index.endswith('_int')
    matches = list()

    for pair in response.results:
        term = _text(pair.key, 'index term')
        if integer:
            try:
                term = int(term)
            except ValueError as e:
                raise SchemaError('integer index %s returned term %r' % (index, term)) from e
        matches.append((term, _text(pair.value, 'index result key')))

    return matches


def _index_value(value):
    """ Index terms travel as bytes; integer indexes (``*_int``) are sent
        as their decimal representation.
    """

    if isinstance(value, bytes):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value).encode()
    if isinstance(value, str):
        return value.encode('utf-8')

    raise InvalidRequest('index value must be bytes, str, or int, not ' + type(value).__name__)


def _text(value, what):

    try:
        return value.decode('utf-8')
    except UnicodeDecodeError as e:
        raise SchemaError('%s is not valid UTF-8' % (what)) from e


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
