""" Lazy iteration over responses that arrive as several frames: bucket
    listings, key listings, and streamed secondary index queries.
"""


class ResponseStream:
    """ An iterator over the batches of a streamed response. Each batch is
        a list holding the entries of one frame, yielded as soon as that
        frame is read; empty batches are skipped. Iteration ends after the
        frame marked ``done``. The *entries* callable extracts
        the list of entries from one decoded response frame.

        A stream can only be consumed once. To list again, issue the
        request again. While a stream is open its session refuses other
        calls; closing a stream before it is exhausted leaves unread frames
        on the connection, and the session becomes unusable.
    """

    def __init__(self, session, operation, entries):
        self.session = session
        self.operation = operation
        self.entries = entries
        self.done = False


    def __iter__(self):
        return self


    def __next__(self):

        while not self.done:
            response = self.session._next_batch(self)
            batch = self._accept(response)
            if batch:
                return batch

        raise StopIteration


    def __enter__(self):
        return self


    def __exit__(self, *exc):
        self.close()


    def _accept(self, response):
        if response.done:
            self.done = True
        return self.entries(response)


    def all(self):
        """ Consume the remainder of the stream and return every entry in
            arrival order.
        """

        entries = list()
        for batch in self:
            entries.extend(batch)
        return entries


    def close(self):
        if self.done:
            return

        self.done = True
        self.session._abandon(self)


# end of class ResponseStream



class IndexStream(ResponseStream):
    """ A streamed secondary index query. When the query set
        ``max_results``, :attr:`continuation` holds the token for the next
        page once the stream is exhausted, or None if there are no more
        results.
    """

    def __init__(self, session, operation, entries):
        ResponseStream.__init__(self, session, operation, entries)
        self.continuation = None


    def _accept(self, response):
        if response.HasField('continuation'):
            self.continuation = response.continuation
        return ResponseStream._accept(self, response)


# end of class IndexStream



class IndexPage:
    """ One page of secondary index results.

        :ivar entries: Matching keys, or (term, key) tuples when the query
                       asked for terms.
        :ivar continuation: Opaque token for the next page, or None.
    """

    def __init__(self, entries, continuation=None):
        self.entries = entries
        self.continuation = continuation


    def __iter__(self):
        return iter(self.entries)


    def __len__(self):
        return len(self.entries)


    def __repr__(self):
        return 'IndexPage(%d entries, continuation=%r)' % (len(self.entries), self.continuation)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
