""" Message codes.

    Keep these in one place; the numbering is fixed by the server. Code 0
    is the error response shared by every operation and is never sent as
    a request.
"""

import enum


class MessageCode(enum.IntEnum):

    ERROR_RESP = 0
    PING_REQ = 1
    PING_RESP = 2
    GET_SERVER_INFO_REQ = 7
    GET_SERVER_INFO_RESP = 8
    GET_REQ = 9
    GET_RESP = 10
    PUT_REQ = 11
    PUT_RESP = 12
    DEL_REQ = 13
    DEL_RESP = 14
    LIST_BUCKETS_REQ = 15
    LIST_BUCKETS_RESP = 16
    LIST_KEYS_REQ = 17
    LIST_KEYS_RESP = 18
    GET_BUCKET_REQ = 19
    GET_BUCKET_RESP = 20
    SET_BUCKET_REQ = 21
    SET_BUCKET_RESP = 22
    INDEX_REQ = 25
    INDEX_RESP = 26
    RESET_BUCKET_REQ = 29
    RESET_BUCKET_RESP = 30
    GET_BUCKET_TYPE_REQ = 31
    SET_BUCKET_TYPE_REQ = 32
    GET_BUCKET_KEY_PREFLIST_REQ = 33
    GET_BUCKET_KEY_PREFLIST_RESP = 34
    YOKOZUNA_INDEX_GET_REQ = 54
    YOKOZUNA_INDEX_GET_RESP = 55
    YOKOZUNA_INDEX_PUT_REQ = 56
    YOKOZUNA_INDEX_DELETE_REQ = 57
    YOKOZUNA_SCHEMA_GET_REQ = 58
    YOKOZUNA_SCHEMA_GET_RESP = 59
    YOKOZUNA_SCHEMA_PUT_REQ = 60


ERROR_RESP = MessageCode.ERROR_RESP

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
