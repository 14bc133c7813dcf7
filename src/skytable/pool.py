""" Reusable scratch buffers for marshaling Skyhash messages. Every marshal
    call builds its message in a borrowed :class:`bytearray` and hands it
    back once the write completes, so that steady-state encoding does not
    allocate a fresh buffer per value.

    The module-level :func:`scratch` borrows from a single process-wide
    :class:`BufferPool`, :data:`default`; it is the only resource shared
    between connections.
"""

import contextlib
import threading


class BufferPool:
    """ A thread-safe free list of :class:`bytearray` instances. At most
        *size* idle buffers are retained; buffers that grew beyond *limit*
        bytes while in use are dropped rather than returned, so that one
        large message does not pin its memory forever.
    """

    def __init__(self, size=64, limit=65536):

        self.size = int(size)
        self.limit = int(limit)
        self._idle = list()
        self._lock = threading.Lock()


    def __len__(self):
        return len(self._idle)


    def get(self):
        """ Borrow an empty buffer, allocating a new one if none are idle.
        """

        with self._lock:
            try:
                return self._idle.pop()
            except IndexError:
                pass

        return bytearray()


    def put(self, buffer):
        """ Return a borrowed *buffer*. The caller must not touch the buffer
            again after this call.
        """

        if len(buffer) > self.limit:
            return

        buffer.clear()

        with self._lock:
            if len(self._idle) < self.size:
                self._idle.append(buffer)


    @contextlib.contextmanager
    def scratch(self):
        """ Context manager yielding a borrowed buffer, returned to the pool
            on exit whether or not the body raised.
        """

        buffer = self.get()
        try:
            yield buffer
        finally:
            self.put(buffer)


# end of class BufferPool


default = BufferPool()
scratch = default.scratch


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
