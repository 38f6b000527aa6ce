""" Payload schemas shared across the server: the error response, server
    information, and bucket and bucket type properties.
"""

import enum

from .message import Field, enumeration, message
from .message import BOOL, BYTES, ENUM, MESSAGE, STRING, UINT32


package = 'riakpb.riak'


ErrorResponse = message(package, 'ErrorResponse',
    Field(1, 'errmsg', BYTES, required=True),
    Field(2, 'errcode', UINT32, required=True),
)

ServerInfoResponse = message(package, 'ServerInfoResponse',
    Field(1, 'node', STRING),
    Field(2, 'server_version', STRING),
)

ModFun = message(package, 'ModFun',
    Field(1, 'module', STRING, required=True),
    Field(2, 'function', STRING, required=True),
)

# A pre- or post-commit hook: either an Erlang module/function pair or the
# name of a JavaScript function.

CommitHook = message(package, 'CommitHook',
    Field(1, 'modfun', MESSAGE, schema=ModFun),
    Field(2, 'name', STRING),
)


class ReplMode(enum.IntEnum):
    FALSE = 0
    REALTIME = 1
    FULLSYNC = 2
    TRUE = 3


enumeration(package, ReplMode)

Props = message(package, 'Props',
    Field(1, 'n_val', UINT32),
    Field(2, 'allow_mult', BOOL),
    Field(3, 'last_write_wins', BOOL),
    Field(4, 'precommit', MESSAGE, repeated=True, schema=CommitHook),
    Field(5, 'has_precommit', BOOL),
    Field(6, 'postcommit', MESSAGE, repeated=True, schema=CommitHook),
    Field(7, 'has_postcommit', BOOL),
    Field(8, 'chash_keyfun', MESSAGE, schema=ModFun),
    Field(9, 'linkfun', MESSAGE, schema=ModFun),
    Field(10, 'old_vclock', UINT32),
    Field(11, 'young_vclock', UINT32),
    Field(12, 'big_vclock', UINT32),
    Field(13, 'small_vclock', UINT32),
    Field(14, 'pr', UINT32),
    Field(15, 'r', UINT32),
    Field(16, 'w', UINT32),
    Field(17, 'pw', UINT32),
    Field(18, 'dw', UINT32),
    Field(19, 'rw', UINT32),
    Field(20, 'basic_quorum', BOOL),
    Field(21, 'notfound_ok', BOOL),
    Field(22, 'backend', STRING),
    Field(23, 'search', BOOL),
    Field(24, 'repl', ENUM, schema=ReplMode),
    Field(25, 'search_index', STRING),
    Field(26, 'datatype', STRING),
    Field(27, 'consistent', BOOL),
    Field(28, 'write_once', BOOL),
    Field(29, 'hll_precision', UINT32),
    Field(30, 'ttl', UINT32),
)

GetBucketRequest = message(package, 'GetBucketRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'bucket_type', STRING),
)

GetBucketResponse = message(package, 'GetBucketResponse',
    Field(1, 'props', MESSAGE, required=True, schema=Props),
)

SetBucketRequest = message(package, 'SetBucketRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'props', MESSAGE, required=True, schema=Props),
    Field(3, 'bucket_type', STRING),
)

ResetBucketRequest = message(package, 'ResetBucketRequest',
    Field(1, 'bucket', STRING, required=True),
    Field(2, 'bucket_type', STRING),
)

GetBucketTypeRequest = message(package, 'GetBucketTypeRequest',
    Field(1, 'bucket_type', STRING, required=True),
)

SetBucketTypeRequest = message(package, 'SetBucketTypeRequest',
    Field(1, 'bucket_type', STRING, required=True),
    Field(2, 'props', MESSAGE, required=True, schema=Props),
)


def error_message(response):
    """ Return the text of an :data:`ErrorResponse`. The server does not
        promise UTF-8 here, so undecodable bytes are replaced.
    """

    return response.errmsg.decode('utf-8', errors='replace')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
