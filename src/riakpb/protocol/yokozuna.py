""" Payload schemas for search index and search schema administration.
"""

from .message import Field, message
from .message import BYTES, MESSAGE, STRING, UINT32


package = 'riakpb.yokozuna'


SearchIndex = message(package, 'SearchIndex',
    Field(1, 'name', STRING, required=True),
    Field(2, 'schema', STRING),
    Field(3, 'n_val', UINT32),
)

# Without a *name*, the server returns every index it knows about.

IndexGetRequest = message(package, 'IndexGetRequest',
    Field(1, 'name', STRING),
)

IndexGetResponse = message(package, 'IndexGetResponse',
    Field(1, 'index', MESSAGE, repeated=True, schema=SearchIndex),
)

IndexPutRequest = message(package, 'IndexPutRequest',
    Field(1, 'index', MESSAGE, required=True, schema=SearchIndex),
    Field(2, 'timeout', UINT32),
)

IndexDeleteRequest = message(package, 'IndexDeleteRequest',
    Field(1, 'name', STRING, required=True),
)

SearchSchema = message(package, 'SearchSchema',
    Field(1, 'name', STRING, required=True),
    Field(2, 'content', BYTES),
)

SchemaGetRequest = message(package, 'SchemaGetRequest',
    Field(1, 'name', STRING, required=True),
)

SchemaGetResponse = message(package, 'SchemaGetResponse',
    Field(1, 'schema', MESSAGE, required=True, schema=SearchSchema),
)

SchemaPutRequest = message(package, 'SchemaPutRequest',
    Field(1, 'schema', MESSAGE, required=True, schema=SearchSchema),
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
