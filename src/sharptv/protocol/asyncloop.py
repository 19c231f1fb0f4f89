"""
Background reading from the television and values that arrive later.
"""
import logging
import threading
from concurrent.futures import Future

from sharptv.conduit.base import Conduit

logger = logging.getLogger(__name__)


def tobytes(arg):
    """
    Converts a command frame given as text to bytes
    >>> tobytes("POWR????\\r")
    b'POWR????\\r'
    >>> tobytes(b"IAVD?   \\r")
    b'IAVD?   \\r'
    """
    if isinstance(arg, str):
        arg = bytes(arg, encoding='ascii')
    return arg


class FutureValue(Future):
    """ a value computed from a reply that has not yet arrived. Callers may wait for it with value(). """

    def set_result_or_exception(self, value):
        """sets the result, or the exception when value is an exception instance"""
        if isinstance(value, BaseException):
            self.set_exception(value)
        else:
            self.set_result(value)

    def value(self, timeout=None):
        """ waits for the value, raising the exception it was resolved with, if any. """
        return self.result(timeout)


class ReaderLoop:
    """
    Reads a conduit's input on a daemon thread and hands each chunk received to a callable.
    Reading ends when the loop is stopped, the conduit is closed or a read fails.
    """

    def __init__(self, conduit: Conduit, received, read_size=1, name=None):
        """
        :param received: called with each non-empty chunk of bytes read
        :param read_size: the maximum number of bytes requested per read
        """
        self.conduit = conduit
        self.received = received
        self.read_size = read_size
        self.name = name
        self.stop_event = threading.Event()
        self.background_thread = None

    def start(self):
        if self.background_thread is None:
            self.stop_event.clear()
            t = threading.Thread(target=self._run, name=self.name)
            t.daemon = True
            self.background_thread = t
            t.start()

    def running(self):
        return not self.stop_event.is_set()

    def stop(self):
        self.stop_event.set()
        thread = self.background_thread
        self.background_thread = None
        if thread and thread is not threading.current_thread():
            thread.join()

    def read_once(self) -> bool:
        """
        Reads the next chunk of input and hands it on. Errors raised by the receiver are logged.
        :return: False when the conduit is closed or the read failed.
        """
        if not self.conduit.open:
            logger.info("conduit closed, stopping reader")
            return False
        try:
            data = self.conduit.input.read(self.read_size)
        except Exception as e:
            logger.error("error reading from device: %s", e)
            return False
        if data:
            try:
                self.received(data)
            except Exception:
                logger.exception("failed to process %r", data)
        return True

    def _run(self):
        while self.running() and self.read_once():
            pass
        self.stop_event.set()
        logger.info("reader thread exiting")
