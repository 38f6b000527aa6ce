import pytest

import riakpb
from riakpb.errors import InvalidRequest, SchemaError
from riakpb.protocol import kv
from riakpb.protocol import message
from riakpb.protocol import registry
from riakpb.protocol import riak
from riakpb.protocol import yokozuna
from riakpb.protocol.codes import MessageCode
from riakpb.protocol.message import Empty


def sample(field, minimal):

    kind = field.kind

    if kind == message.MESSAGE:
        return populate(field.schema, minimal)
    if kind == message.ENUM:
        return int(list(field.schema)[-1])
    if kind == message.BOOL:
        return True
    if kind == message.BYTES:
        return b'\x00\xff' + field.name.encode()
    if kind == message.STRING:
        return 'text for ' + field.name
    if kind == message.UINT32:
        return 4000000000 + field.number
    if kind == message.INT64:
        return -(1 << 40) - field.number

    raise ValueError(kind)


def populate(schema, minimal=False):
    """ Return a *schema* instance with every field set, or with only the
        required fields set if *minimal* is True.
    """

    instance = schema()

    for field in message.field_table(schema):
        if minimal and not field.required:
            continue

        value = sample(field, minimal)

        if field.repeated:
            getattr(instance, field.name).extend([value, value])
        elif field.kind == message.MESSAGE:
            getattr(instance, field.name).CopyFrom(value)
        else:
            setattr(instance, field.name, value)

    return instance


schemas = sorted(set(registry.schemas.values()), key=lambda schema: schema.DESCRIPTOR.full_name)
schema_names = [schema.DESCRIPTOR.full_name for schema in schemas]


@pytest.mark.parametrize('schema', schemas, ids=schema_names)
def test_populated_round_trip(schema):

    instance = populate(schema)
    decoded = message.decode(schema, message.encode(instance))

    assert decoded == instance

    for field in message.field_table(schema):
        if field.repeated:
            assert len(getattr(decoded, field.name)) == 2
        else:
            assert decoded.HasField(field.name)


@pytest.mark.parametrize('schema', schemas, ids=schema_names)
def test_minimal_round_trip(schema):

    instance = populate(schema, minimal=True)
    decoded = message.decode(schema, message.encode(instance))

    assert decoded == instance

    for field in message.field_table(schema):
        if field.repeated:
            assert message.get(decoded, field.name) == []
        elif not field.required:
            assert message.get(decoded, field.name) is None


def test_put_request_round_trip():

    content = kv.Content(
        value=b'This is a test!',
        content_type='text/plain',
        links=[kv.Link(bucket='other', key='k', tag='friend')],
        usermeta=[kv.Pair(key=b'owner', value=b'nobody')],
        indexes=[kv.Pair(key=b'age_int', value=b'42')],
    )

    request = kv.PutRequest(bucket='testbucket', key='testkey', vclock=b'\x6b\xce\x61', content=content, return_body=True, pw=0)
    decoded = message.decode(kv.PutRequest, message.encode(request))

    assert decoded == request
    assert decoded.content.links[0].tag == 'friend'
    assert decoded.content.usermeta[0].value == b'nobody'
    assert decoded.pw == 0
    assert decoded.HasField('pw')


def test_zero_values_are_present():

    request = message.build(kv.GetRequest, bucket='b', key='k', r=0, notfound_ok=False, pr=None)
    decoded = message.decode(kv.GetRequest, message.encode(request))

    assert message.get(decoded, 'r') == 0
    assert message.get(decoded, 'notfound_ok') is False
    assert message.get(decoded, 'pr') is None
    assert message.get(decoded, 'basic_quorum') is None


def test_found():

    assert not kv.found(kv.GetResponse())
    assert kv.found(kv.GetResponse(vclock=b''))
    assert kv.found(kv.GetResponse(content=[kv.Content(value=b'')]))


def test_unknown_fields_are_kept():

    payload = message.encode(kv.GetResponse(vclock=b'vc'))
    payload += b'\x98\x06\x01'
    payload += b'\xa2\x06\x13from a newer server'

    decoded = message.decode(kv.GetResponse, payload)

    assert decoded.vclock == b'vc'
    assert len(decoded.content) == 0

    # Fields 99 and 100 are written back unchanged.
    assert message.encode(decoded) == payload


def test_unknown_enum_value():

    payload = b'\xc0\x01\x09'
    decoded = message.decode(riak.Props, payload)

    assert message.get(decoded, 'repl') is None
    assert message.encode(decoded) == payload


def test_repeated_message_field_merges():

    first = message.encode(riak.GetBucketResponse(props=riak.Props(n_val=3, backend='bitcask')))
    second = message.encode(riak.GetBucketResponse(props=riak.Props(allow_mult=True, n_val=5)))

    decoded = message.decode(riak.GetBucketResponse, first + second)

    assert decoded.props.n_val == 5
    assert decoded.props.backend == 'bitcask'
    assert decoded.props.allow_mult is True


def test_decode_errors():

    with pytest.raises(SchemaError):
        message.decode(riak.ErrorResponse, b'')

    with pytest.raises(SchemaError):
        message.decode(riak.ErrorResponse, b'\x0a\x0cmessage only')

    # A content entry without its value.
    with pytest.raises(SchemaError):
        message.decode(kv.GetResponse, b'\x0a\x00')

    # Declares five bytes, carries two.
    with pytest.raises(SchemaError):
        message.decode(kv.GetResponse, b'\x12\x05ab')

    with pytest.raises(SchemaError):
        message.decode(kv.ListKeysResponse, b'\x0a\x02\xff\xfe')

    # The bucket sent as a varint does not count as the bucket.
    with pytest.raises(SchemaError):
        message.decode(kv.GetRequest, b'\x08\x05\x12\x01k')


def test_invalid_requests():

    with pytest.raises(InvalidRequest):
        message.encode(kv.GetRequest(bucket='b'))

    with pytest.raises(InvalidRequest):
        message.encode(kv.PutRequest(bucket='b'))

    with pytest.raises(InvalidRequest):
        message.encode(kv.PutRequest(bucket='b', content=kv.Content()))

    with pytest.raises(InvalidRequest):
        message.build(kv.GetRequest, bucket='b', key='k', r=-1)

    with pytest.raises(InvalidRequest):
        message.build(kv.GetRequest, bucket='b', key='k', head='yes')

    with pytest.raises(InvalidRequest):
        message.build(kv.GetRequest, bucket=5, key='k')

    with pytest.raises(InvalidRequest):
        message.build(kv.Content, value='text, not bytes')

    with pytest.raises(InvalidRequest):
        message.build(kv.GetRequest, bucket='b', key='k', nonsense=True)


def test_index_request_validation():

    exact = kv.exact_query('users', 'age_int', 42)
    assert exact.key == b'42'

    payload = registry.encode_payload(MessageCode.INDEX_REQ, exact)
    assert message.decode(kv.IndexRequest, payload) == exact

    ranged = kv.range_query('users', 'name_bin', 'a', 'm', max_results=10)
    assert ranged.range_min == b'a'

    decoded = message.decode(kv.IndexRequest, registry.encode_payload(MessageCode.INDEX_REQ, ranged))
    assert decoded.qtype == kv.QueryType.RANGE
    assert decoded.max_results == 10

    invalid = (
        kv.IndexRequest(bucket='users', index='age_int', qtype=kv.QueryType.EQ),
        kv.IndexRequest(bucket='users', index='age_int', qtype=kv.QueryType.RANGE, range_min=b'1'),
        kv.range_query('users', 'age_int', 1, 5, key=b'3'),
        kv.exact_query('users', 'age_int', 1, range_max=b'9'),
        kv.exact_query('users', 'age_int', 1, max_results=0),
    )

    for request in invalid:
        with pytest.raises(InvalidRequest):
            registry.encode_payload(MessageCode.INDEX_REQ, request)

    with pytest.raises(InvalidRequest):
        kv.exact_query('users', 'age_int', 1.5)


def test_index_entries():

    response = kv.IndexResponse(results=[kv.Pair(key=b'10', value=b'k1'), kv.Pair(key=b'12', value=b'k2')])

    assert kv.index_entries(response, 'age_int') == [(10, 'k1'), (12, 'k2')]
    assert kv.index_entries(response, 'code_bin') == [('10', 'k1'), ('12', 'k2')]
    assert kv.index_entries(kv.IndexResponse(keys=['k1', 'k2'])) == ['k1', 'k2']

    with pytest.raises(SchemaError):
        kv.index_entries(kv.IndexResponse(results=[kv.Pair(key=b'ten', value=b'k1')]), 'age_int')

    with pytest.raises(SchemaError):
        kv.index_entries(kv.IndexResponse(results=[kv.Pair(key=b'\xff', value=b'k1')]), 'code_bin')


def test_registry():

    assert registry.Operation.PING.request_code == MessageCode.PING_REQ
    assert registry.Operation.PING.response_code == 2
    assert registry.Operation.LIST_KEYS.streaming
    assert not registry.Operation.GET.streaming

    assert registry.Operation.PUT.request_schema is kv.PutRequest
    assert registry.Operation.SEARCH_INDEX_PUT.response_schema is kv.PutResponse
    assert registry.Operation.SEARCH_SCHEMA_GET.response_schema is yokozuna.SchemaGetResponse
    assert registry.Operation.DELETE.response_schema is Empty

    request_codes = [operation.request_code for operation in registry.Operation]
    assert MessageCode.ERROR_RESP not in request_codes

    for code in MessageCode:
        assert code in registry.schemas

    assert registry.encode_payload(MessageCode.PING_REQ, None) == b''
    assert registry.decode_payload(MessageCode.PING_RESP, b'') == Empty()

    with pytest.raises(InvalidRequest):
        registry.encode_payload(MessageCode.GET_REQ, kv.PutRequest(bucket='b', content=kv.Content(value=b'')))

    with pytest.raises(riakpb.FramingError):
        registry.decode_payload(200, b'')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
