""" Bucket and bucket type properties.
"""

import collections.abc

from .errors import InvalidRequest
from .protocol import riak
from .protocol.message import field_table


names = tuple(field.name for field in field_table(riak.Props))
ReplMode = riak.ReplMode


class BucketProps(collections.abc.MutableMapping):
    """ A mapping of property names to values, for example ``n_val`` to
        an integer or ``allow_mult`` to a boolean. Properties can also be
        read and written as attributes. A property that was not reported
        by the server, or not set locally, is absent from the mapping and
        reads as None via attribute access.

        Module/function properties (``chash_keyfun``, ``linkfun``) are
        (module, function) tuples. Commit hooks (``precommit``,
        ``postcommit``) are lists whose entries are either such a tuple
        or the name of a JavaScript function.

        Properties the server reported that this client has no name for
        are kept in :attr:`opaque` as their encoded bytes; they are sent
        back unchanged if this instance is used to set properties.
    """

    def __init__(self, *args, **kwargs):
        self.__dict__['_values'] = dict()
        self.__dict__['opaque'] = b''
        self.update(*args, **kwargs)


    def __getitem__(self, name):
        return self._values[name]


    def __setitem__(self, name, value):
        if name not in names:
            raise InvalidRequest('unknown bucket property: ' + repr(name))
        self._values[name] = value


    def __delitem__(self, name):
        del self._values[name]


    def __iter__(self):
        return iter(self._values)


    def __len__(self):
        return len(self._values)


    def __getattr__(self, name):
        if name in names:
            return self._values.get(name)
        raise AttributeError(name)


    def __setattr__(self, name, value):
        if name in names:
            self[name] = value
        else:
            object.__setattr__(self, name, value)


    def __repr__(self):
        return 'BucketProps(%r)' % (self._values)


# end of class BucketProps


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
