""" Exception classes raised by the client. Every exception raised on
    purpose by this package is a subclass of :class:`RiakError`.

    Only :class:`ConnectionError` and :class:`FramingError` are fatal to a
    :class:`riakpb.session.Session`; the others leave the session usable
    for a subsequent, corrected call.
"""


class RiakError(Exception):
    """ Base class for all client errors.
    """


class ConnectionError(RiakError):
    """ The byte stream to the server could not be established or used:
        refused, reset, timed out, or the session was already broken or
        closed when the call was made.
    """


class FramingError(RiakError):
    """ A frame was truncated, malformed, or carried a message code the
        pending operation did not expect. The byte stream can no longer be
        trusted once this is raised.
    """


class StreamClosed(RiakError, EOFError):
    """ Raised by a transport when the byte stream ends before a read is
        satisfied. The frame decoder reports it as a :class:`FramingError`.
    """


class SchemaError(RiakError):
    """ A well-framed payload did not satisfy its schema: a required field
        was missing, a value had the wrong wire type, or the field encoding
        itself was truncated.
    """


class InvalidRequest(RiakError, ValueError):
    """ A caller-supplied request violates a schema precondition. Always
        raised before any bytes are written.
    """


class ServerError(RiakError):
    """ The server answered with an error response.

        :ivar code: The numeric error code reported by the server.
        :ivar message: The error text reported by the server.
    """

    def __init__(self, code, message):
        RiakError.__init__(self, code, message)
        self.code = code
        self.message = message


    def __str__(self):
        return "server error %d: %s" % (self.code, self.message)


class SiblingsError(RiakError):
    """ A single value was requested from an object that holds more than
        one sibling. The caller has to pick or merge the siblings.
    """

    def __init__(self, count):
        RiakError.__init__(self, "object has %d siblings" % (count))
        self.count = count


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
