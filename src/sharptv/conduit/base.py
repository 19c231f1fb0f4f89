"""
A conduit is the pair of byte streams between the host and the television.
"""
from io import IOBase


class Conduit:
    """
    Input and output streams to one device, opened and closed together.
    """

    @property
    def target(self):
        """ what the conduit is connected to, such as the serial port. """
        raise NotImplementedError

    @property
    def input(self) -> IOBase:
        """ the stream replies are read from """
        raise NotImplementedError

    @property
    def output(self) -> IOBase:
        """ the stream command frames are written to """
        raise NotImplementedError

    @property
    def open(self) -> bool:
        raise NotImplementedError

    def close(self):
        raise NotImplementedError


class StreamConduit(Conduit):
    """
    A conduit over file-like streams that are already open.
    :param read: the input stream. Also used for output when write is not given, as with a serial port.
    :param write: the output stream
    """

    def __init__(self, read, write=None, target=None):
        self._read = read
        self._write = write if write is not None else read
        self._target = target
        self._closed = False

    @property
    def target(self):
        return self._target

    @property
    def input(self):
        return self._read

    @property
    def output(self):
        return self._write

    @property
    def open(self):
        return not self._closed

    def close(self):
        self._closed = True
        self._write.close()
        if self._read is not self._write:
            self._read.close()
