""" Translation between the object model (:mod:`riakpb.object`,
    :mod:`riakpb.bucket`) and the payload schemas in
    :mod:`riakpb.protocol`.
"""

from __future__ import annotations

from typing import Optional

from .bucket import BucketProps
from .errors import InvalidRequest, SchemaError
from .object import Link, ObjectContent, RiakObject
from .protocol import kv
from .protocol import riak
from .protocol.message import DecodeError, ENUM, MESSAGE, build, field_table, get


def content_to_pb(content: ObjectContent) -> kv.Content:

    pb = build(kv.Content,
        value=content.value,
        content_type=content.content_type,
        charset=content.charset,
        content_encoding=content.content_encoding,
        ttl=content.ttl,
    )

    for key, value in content.usermeta.items():
        pb.usermeta.add(key=_to_bytes(key, 'usermeta key'), value=_to_bytes(value, 'usermeta value'))

    for link in content.links:
        pb.links.append(build(kv.Link, bucket=link.bucket, key=link.key, tag=link.tag))

    for name, term in content.indexes:
        pb.indexes.add(key=_to_bytes(name, 'index name'), value=_to_bytes(term, 'index term'))

    return pb


def content_from_pb(pb: kv.Content) -> ObjectContent:

    content = ObjectContent(pb.value, get(pb, 'content_type'), get(pb, 'charset'), get(pb, 'content_encoding'))
    content.vtag = get(pb, 'vtag')
    content.deleted = get(pb, 'deleted')
    content.ttl = get(pb, 'ttl')

    if pb.HasField('last_mod'):
        content.last_modified = pb.last_mod + pb.last_mod_usecs / 1000000.0

    for pair in pb.usermeta:
        content.usermeta[_to_text(pair.key)] = _to_text(pair.value)

    for link in pb.links:
        content.links.append(Link(get(link, 'bucket'), get(link, 'key'), get(link, 'tag')))

    for pair in pb.indexes:
        name = _to_text(pair.key)
        term = _to_text(pair.value)
        if name.endswith('_int'):
            try:
                term = int(term)
            except ValueError as e:
                raise SchemaError('integer index %s carries %r' % (name, term)) from e
        content.indexes.append((name, term))

    return content


def object_from_response(bucket: str, key: Optional[str], bucket_type: Optional[str], response) -> RiakObject:
    """ Build a :class:`RiakObject` from a get or put response. Siblings
        are kept exactly as the server sent them, in order.
    """

    siblings = [content_from_pb(pb) for pb in response.content]

    if isinstance(response, kv.GetResponse):
        exists = kv.found(response)
        unchanged = response.unchanged
    else:
        exists = True
        unchanged = False
        if response.HasField('key'):
            key = response.key

    return RiakObject(bucket, key, bucket_type, siblings, get(response, 'vclock'), exists, unchanged)


def props_to_pb(props: BucketProps) -> riak.Props:

    pb = riak.Props()

    try:
        pb.MergeFromString(props.opaque)
    except DecodeError as e:
        raise InvalidRequest('opaque bucket properties are not a valid encoding: %s' % (e)) from e

    for name, value in props.items():
        if value is None:
            continue

        if name in ('chash_keyfun', 'linkfun'):
            getattr(pb, name).CopyFrom(_modfun(name, value))
            continue

        if name in ('precommit', 'postcommit'):
            getattr(pb, name).extend([_hook(name, hook) for hook in value])
            continue

        try:
            setattr(pb, name, value)
        except (TypeError, ValueError) as e:
            raise InvalidRequest('bucket property %s: %s' % (name, e)) from e

    return pb


def props_from_pb(pb: riak.Props) -> BucketProps:

    props = BucketProps()
    remainder = riak.Props()
    remainder.CopyFrom(pb)

    for field in field_table(pb):
        value = get(pb, field.name)
        remainder.ClearField(field.name)

        if field.repeated:
            if len(value) == 0:
                continue
            value = [_unhook(hook) for hook in value]
        elif value is None:
            continue
        elif field.kind == MESSAGE:
            value = (value.module, value.function)
        elif field.kind == ENUM:
            value = field.schema(value)

        props[field.name] = value

    # Only the fields this client has no name for are left.
    props.opaque = remainder.SerializeToString()
    return props


def _modfun(name, value):

    try:
        module, function = value
    except (TypeError, ValueError):
        raise InvalidRequest('%s must be a (module, function) tuple' % (name))

    return build(riak.ModFun, module=module, function=function)


def _hook(name, hook):

    if isinstance(hook, str):
        return riak.CommitHook(name=hook)

    return riak.CommitHook(modfun=_modfun(name, hook))


def _unhook(hook):

    if hook.HasField('modfun'):
        return (hook.modfun.module, hook.modfun.function)

    return get(hook, 'name')


def _to_bytes(value, what):

    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value).encode()

    raise InvalidRequest('%s must be str, bytes, or int, not %s' % (what, type(value).__name__))


def _to_text(value):

    try:
        return value.decode('utf-8')
    except UnicodeDecodeError as e:
        raise SchemaError('metadata is not valid UTF-8: %r' % (value)) from e


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
