""" Construction of the payload classes, and the checked encode and decode
    calls the rest of the package goes through.

    Every payload type is a protocol buffer message class. The classes are
    assembled at import time from the field tables in :mod:`kv`,
    :mod:`riak` and :mod:`yokozuna`: each table becomes a proto2 file
    descriptor in a private descriptor pool, and the class is obtained from
    the protobuf message factory. Presence, required fields, merging of
    repeated occurrences, and retention of unknown fields are all handled
    by the protobuf runtime.
"""

import collections

from google.protobuf import descriptor_pb2
from google.protobuf import descriptor_pool
from google.protobuf import message as _message
from google.protobuf import message_factory

from ..errors import InvalidRequest, SchemaError


_proto = descriptor_pb2.FieldDescriptorProto

BOOL = _proto.TYPE_BOOL
BYTES = _proto.TYPE_BYTES
ENUM = _proto.TYPE_ENUM
INT64 = _proto.TYPE_INT64
MESSAGE = _proto.TYPE_MESSAGE
STRING = _proto.TYPE_STRING
UINT32 = _proto.TYPE_UINT32

DecodeError = _message.DecodeError

pool = descriptor_pool.DescriptorPool()

_enums = dict()
_fields = dict()


class Field(collections.namedtuple('Field', ('number', 'name', 'kind', 'required', 'repeated', 'schema'))):
    """ One entry in a message table.

        :ivar number: The field number used on the wire.
        :ivar name: The attribute name on message instances.
        :ivar kind: One of the kind constants defined in this module.
        :ivar required: True if the field must be present.
        :ivar repeated: True if the field holds a list of values.
        :ivar schema: The message class for MESSAGE fields, or the
                      :class:`enum.IntEnum` subclass for ENUM fields.
    """

    def __new__(cls, number, name, kind, required=False, repeated=False, schema=None):

        if required and repeated:
            raise ValueError('a repeated field cannot be required: ' + name)

        if kind in (MESSAGE, ENUM) and schema is None:
            raise ValueError('message and enum fields require a schema: ' + name)

        return super().__new__(cls, number, name, kind, required, repeated, schema)


    @property
    def label(self):
        if self.repeated:
            return _proto.LABEL_REPEATED
        if self.required:
            return _proto.LABEL_REQUIRED
        return _proto.LABEL_OPTIONAL


# end of class Field



def enumeration(package, values):
    """ Register the :class:`enum.IntEnum` subclass *values* as a protocol
        buffer enum in *package*, so that message fields can refer to it.
        Returns *values* unchanged.
    """

    name = values.__name__
    file = _new_file(package, name)

    proto = file.enum_type.add(name=name)
    for member in values:
        # Enum value names share the package scope.
        proto.value.add(name='%s_%s' % (name.upper(), member.name), number=member.value)

    pool.AddSerializedFile(file.SerializeToString())
    _enums[values] = pool.FindEnumTypeByName(package + '.' + name)

    return values


def message(package, name, *fields):
    """ Return a new message class *name* in *package* with the given
        :class:`Field` entries.
    """

    file = _new_file(package, name)
    proto = file.message_type.add(name=name)
    numbers = set()

    for field in fields:
        if field.number in numbers:
            raise ValueError('%s: duplicate field number %d' % (name, field.number))
        numbers.add(field.number)

        entry = proto.field.add(name=field.name, number=field.number, type=field.kind, label=field.label)

        if field.kind == MESSAGE:
            descriptor = field.schema.DESCRIPTOR
        elif field.kind == ENUM:
            descriptor = _enums[field.schema]
        else:
            continue

        entry.type_name = '.' + descriptor.full_name
        if descriptor.file.name not in file.dependency:
            file.dependency.append(descriptor.file.name)

    pool.AddSerializedFile(file.SerializeToString())
    descriptor = pool.FindMessageTypeByName(package + '.' + name)

    cls = message_factory.GetMessageClass(descriptor)
    _fields[descriptor.full_name] = fields
    return cls


def _new_file(package, name):
    filename = '%s/%s.proto' % (package.replace('.', '/'), name)
    return descriptor_pb2.FileDescriptorProto(name=filename, package=package, syntax='proto2')


def field_table(message):
    """ Return the :class:`Field` table of a message class or instance.
    """

    return _fields[message.DESCRIPTOR.full_name]


def build(cls, **values):
    """ Construct a *cls* instance from keyword arguments, leaving any
        field given as None unset. Type and range errors raise
        :class:`InvalidRequest`.
    """

    present = dict()
    for name, value in values.items():
        if value is not None:
            present[name] = value

    try:
        return cls(**present)
    except (TypeError, ValueError) as e:
        raise InvalidRequest('%s: %s' % (cls.DESCRIPTOR.name, e)) from e


def get(message, name):
    """ Return the value of field *name*, or None if the field is not set.
        Repeated fields are returned as lists.
    """

    value = getattr(message, name)

    for field in field_table(message):
        if field.name == name:
            if field.repeated:
                return list(value)
            break

    if message.HasField(name):
        return value

    return None


def copy(message):
    duplicate = type(message)()
    duplicate.CopyFrom(message)
    return duplicate


def encode(message):
    """ Return the serialized *message*. Raises :class:`InvalidRequest` if
        a required field is missing, before anything is produced.
    """

    if not message.IsInitialized():
        missing = ', '.join(message.FindInitializationErrors())
        raise InvalidRequest('%s is missing required fields: %s' % (message.DESCRIPTOR.name, missing))

    try:
        return message.SerializeToString()
    except _message.EncodeError as e:
        raise InvalidRequest('%s: %s' % (message.DESCRIPTOR.name, e)) from e


def decode(cls, data):
    """ Build a *cls* instance from the serialized *data*. Unknown fields
        are kept; a malformed payload, a missing required field, or text
        that is not valid UTF-8 raises :class:`SchemaError`.
    """

    name = cls.DESCRIPTOR.name
    instance = cls()

    try:
        instance.MergeFromString(data)
        _check_text(instance)
    except (DecodeError, UnicodeDecodeError) as e:
        raise SchemaError('%s: %s' % (name, e)) from e

    if not instance.IsInitialized():
        missing = ', '.join(instance.FindInitializationErrors())
        raise SchemaError('%s: required fields missing: %s' % (name, missing))

    return instance


def _check_text(instance):
    """ Read back every populated field. String fields are converted to
        text when read, which is where invalid UTF-8 surfaces.
    """

    for descriptor, value in instance.ListFields():
        if isinstance(value, _message.Message):
            _check_text(value)
        elif isinstance(value, (bytes, str, int, float)):
            continue
        else:
            for item in value:
                if isinstance(item, _message.Message):
                    _check_text(item)


# A payload with no fields: ping, server information requests, and the bare
# acknowledgements for delete and the bucket property updates.

Empty = message('riakpb', 'Empty')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
