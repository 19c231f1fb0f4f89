"""
A line oriented transport over a conduit. Frames written to the device are raw bytes; everything the device sends
back is split on a delimiter and published as decoded lines to subscribers.
"""
import logging

from sharptv.conduit.base import Conduit
from sharptv.protocol.asyncloop import ReaderLoop, tobytes
from sharptv.support.events import EventSource

logger = logging.getLogger(__name__)

DELIMITER = b'\r'

# longer than any reply the television sends
MAX_LINE_LENGTH = 64


class LineDecoder:
    """
    Incrementally splits a byte stream into lines. Bytes following the last delimiter are
    kept until more data arrives, up to max_length bytes. Beyond that they are noise and are discarded.
    """

    def __init__(self, delimiter: bytes=DELIMITER, encoding='ascii', max_length=MAX_LINE_LENGTH):
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        self.delimiter = delimiter
        self.encoding = encoding
        self.max_length = max_length
        self._buffer = bytearray()

    @property
    def pending(self) -> bytes:
        """ the bytes received that are not yet terminated by a delimiter. """
        return bytes(self._buffer)

    def feed(self, data: bytes) -> list:
        """
        Adds data to the buffer.
        :return: the complete lines now available, excluding the delimiter, in the order received.
        """
        self._buffer.extend(data)
        lines = []
        while True:
            index = self._buffer.find(self.delimiter)
            if index < 0:
                break
            raw = bytes(self._buffer[:index])
            del self._buffer[:index + len(self.delimiter)]
            lines.append(raw.decode(self.encoding, errors='replace'))
        if len(self._buffer) > self.max_length:
            logger.warning("discarding %d bytes received without a line delimiter", len(self._buffer))
            self._buffer.clear()
        return lines

    def reset(self):
        self._buffer.clear()


class LineTransport:
    """
    Owns the conduit to the device. Writes command frames and reads the input stream on a background
    thread, notifying subscribers once per line.

    Every line is delivered, including lines nobody asked for. Deciding what to do with unsolicited
    lines is left to the subscribers.
    """

    def __init__(self, conduit: Conduit, decoder: LineDecoder=None, read_size=1):
        """
        :param conduit: the open conduit to the device
        :param decoder: splits the input into lines. Defaults to splitting on carriage return.
        :param read_size: the maximum number of bytes requested from the input per read.
        """
        self._conduit = conduit
        self._decoder = decoder or LineDecoder()
        self.line_handlers = EventSource()
        self.reader = ReaderLoop(conduit, self.data_received, read_size, name='sharptv-reader')

    @property
    def conduit(self) -> Conduit:
        return self._conduit

    @property
    def open(self) -> bool:
        return self._conduit.open

    def subscribe(self, handler):
        """ registers a callable that is invoked with each line read from the device. """
        self.line_handlers.add(handler)

    def unsubscribe(self, handler):
        self.line_handlers.remove(handler)

    def write(self, data):
        """
        Writes a frame to the device. Text is encoded as ASCII.
        Does not wait for a reply.
        :raises IOError: if the conduit is closed or the write fails.
        """
        if not self._conduit.open:
            raise IOError("cannot write to a closed conduit")
        data = tobytes(data)
        output = self._conduit.output
        output.write(data)
        output.flush()
        logger.debug("wrote %r", data)

    def start(self):
        """ starts reading lines on the background thread. """
        self.reader.start()

    def stop(self):
        self.reader.stop()

    def close(self):
        """ stops the reader and closes the conduit. """
        self.stop()
        if self._conduit.open:
            self._conduit.close()
        self._decoder.reset()

    def data_received(self, data: bytes):
        for line in self._decoder.feed(data):
            self.line_received(line)

    def line_received(self, line: str):
        logger.debug("received line %r", line)
        self.line_handlers.fire(line)
