""" Representation of stored values: the content and metadata of a single
    sibling, and the object that groups siblings under one vclock. Nothing
    here touches the network or the wire encoding.
"""

import collections

from . import json
from .errors import SiblingsError


Link = collections.namedtuple('Link', ('bucket', 'key', 'tag'))


class ObjectContent:
    """ The value and metadata of one sibling.

        :ivar value: The stored bytes.
        :ivar content_type: MIME type of the value, if known.
        :ivar charset: Character set of the value, if known.
        :ivar content_encoding: Content encoding of the value, if any.
        :ivar usermeta: A dictionary of user metadata, str to str.
        :ivar links: A list of :class:`Link` instances.
        :ivar indexes: A list of (index name, term) tuples.
        :ivar vtag: The server-assigned version tag; read only.
        :ivar last_modified: UNIX epoch time of the last write; read only.
        :ivar deleted: True if this sibling is a tombstone; read only.
        :ivar ttl: Per-object time to live in seconds, if any.
    """

    def __init__(self, value=b'', content_type=None, charset=None, content_encoding=None):

        if isinstance(value, str):
            raise TypeError('value must be bytes; encode text before storing it')

        self.value = bytes(value)
        self.content_type = content_type
        self.charset = charset
        self.content_encoding = content_encoding

        self.usermeta = dict()
        self.links = list()
        self.indexes = list()

        self.vtag = None
        self.last_modified = None
        self.deleted = None
        self.ttl = None


    def __repr__(self):
        return 'ObjectContent(%r, content_type=%r)' % (self.value, self.content_type)


    def __eq__(self, other):
        if not isinstance(other, ObjectContent):
            return NotImplemented
        return vars(self) == vars(other)


    @classmethod
    def from_json(cls, data):
        """ Serialize *data* as JSON and return a new instance holding it,
            with the content type set accordingly.
        """

        return cls(json.dumps(data), content_type='application/json', charset='UTF-8')


    def json(self):
        """ Parse the value as JSON.
        """

        return json.loads(self.value)


    def text(self):
        charset = self.charset or 'utf-8'
        return self.value.decode(charset)


    def set_content_type(self, content_type):
        self.content_type = content_type

    def set_charset(self, charset):
        self.charset = charset

    def set_content_encoding(self, content_encoding):
        self.content_encoding = content_encoding

    def set_usermeta(self, key, value):
        self.usermeta[key] = value

    def add_link(self, bucket, key, tag=None):
        self.links.append(Link(bucket, key, tag))

    def add_index(self, name, term):
        """ Tag this value with a secondary index entry. Index names must
            end in ``_bin`` (terms are strings or bytes) or ``_int`` (terms
            are integers).
        """

        if name.endswith('_int'):
            if isinstance(term, bool) or not isinstance(term, int):
                raise TypeError('integer index %s requires an int term' % (name))
        elif name.endswith('_bin'):
            if not isinstance(term, (str, bytes)):
                raise TypeError('binary index %s requires a str or bytes term' % (name))
        else:
            raise ValueError('index name must end in _bin or _int: ' + name)

        entry = (name, term)
        if entry not in self.indexes:
            self.indexes.append(entry)

    def remove_index(self, name, term=None):
        """ Remove every entry for index *name*, or only the one matching
            *term* if it is specified.
        """

        kept = list()
        for entry in self.indexes:
            if entry[0] == name and (term is None or entry[1] == term):
                continue
            kept.append(entry)

        self.indexes = kept


# end of class ObjectContent



class RiakObject:
    """ An object as returned by a fetch or a store with ``return_body``.
        An object with more than one entry in :attr:`siblings` holds values
        from concurrent writes that were never resolved; that is a normal
        state, and it is up to the caller to choose or merge a value and
        write it back with the same :attr:`vclock`.

        :ivar bucket: The bucket name.
        :ivar key: The key, which may have been assigned by the server.
        :ivar bucket_type: The bucket type, if not the default.
        :ivar siblings: A list of :class:`ObjectContent` instances.
        :ivar vclock: Opaque causal context bytes, or None.
        :ivar exists: False if the server reported the key as not found.
        :ivar unchanged: True if a conditional fetch found no change.
    """

    def __init__(self, bucket, key=None, bucket_type=None, siblings=None, vclock=None, exists=True, unchanged=False):

        if siblings is None:
            siblings = list()

        self.bucket = bucket
        self.key = key
        self.bucket_type = bucket_type
        self.siblings = list(siblings)
        self.vclock = vclock
        self.exists = exists
        self.unchanged = unchanged


    def __repr__(self):
        return 'RiakObject(%r, %r, siblings=%d)' % (self.bucket, self.key, len(self.siblings))


    def __bool__(self):
        return self.exists


    @property
    def has_siblings(self):
        return len(self.siblings) > 1


    @property
    def content(self):
        """ The only sibling, or None if there is no content. Raises
            :class:`SiblingsError` if there is more than one.
        """

        count = len(self.siblings)

        if count == 0:
            return None
        if count > 1:
            raise SiblingsError(count)

        return self.siblings[0]


    @property
    def value(self):
        content = self.content
        if content is None:
            return None
        return content.value


# end of class RiakObject


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
