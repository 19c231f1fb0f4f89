"""
Correlates each command sent to the television with the line it answers.

The device has no request identifiers and answers every command with exactly one line, so the only way
to know which command a line belongs to is timing: the next line after a write belongs to that write.
The dispatcher therefore keeps at most one command in flight. Commands sent while another is in flight
wait in a FIFO queue and are written one at a time as each previous command is resolved.

A command is resolved exactly once, by one of:

- the next line read from the device (success)
- a failed write (CommandWriteError)
- no line arriving within the response timeout (StallError)
- the dispatcher being closed (DispatcherClosedError)

Queue and in-flight state are guarded by a single lock, and the transport is written to only while that
lock is held. Futures are completed after the lock is released and before the next command is written,
so completion callbacks run in submission order and may themselves send further commands.
"""
import enum
import logging
import threading
from collections import deque

from sharptv.protocol.asyncloop import FutureValue, tobytes

logger = logging.getLogger(__name__)

# seconds to wait for a response before giving up on a command
DEFAULT_RESPONSE_TIMEOUT = 2.0


class CommandError(IOError):
    """ A command could not be completed. """


class CommandWriteError(CommandError):
    """ The command frame could not be written to the device. """


class StallError(CommandError):
    """ The device did not respond to the command in time. """


class DispatcherClosedError(CommandError):
    """ The dispatcher was closed before the command was answered. """


class DispatcherState(enum.Enum):
    IDLE = 'idle'
    BUSY = 'busy'


class FutureResponse(FutureValue):
    """ The line the device sends in reply to a command. Commands cannot be withdrawn, so cancel() always fails. """

    def __init__(self, command):
        super().__init__()
        self._command = command

    @property
    def command(self):
        return self._command

    def cancel(self):
        return False


class Command:
    """ A command frame and the future that receives its response. """

    def __init__(self, payload):
        self.payload = tobytes(payload)
        self.future = FutureResponse(self)

    def __repr__(self):
        return 'Command(%r)' % self.payload


class CommandDispatcher:
    """
    Sends commands over a line transport one at a time, delivering each response line to the command
    that is owed it.

    :param transport: provides write(bytes) and subscribe(handler). Handlers are called with each line read.
    :param response_timeout: seconds to wait for a response before failing the command with StallError.
        None waits forever.
    :param timer_factory: creates the response timers. Called like threading.Timer.
    """

    def __init__(self, transport, response_timeout=DEFAULT_RESPONSE_TIMEOUT, timer_factory=threading.Timer):
        self._transport = transport
        self.response_timeout = response_timeout
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._queue = deque()
        self._current = None
        self._timer = None
        self._busy = False
        self._closed = False
        transport.subscribe(self.line_received)

    @property
    def state(self) -> DispatcherState:
        return DispatcherState.BUSY if self._busy else DispatcherState.IDLE

    @property
    def current(self):
        """ the command in flight, or None """
        return self._current

    @property
    def pending(self) -> int:
        """ the number of commands waiting to be written """
        return len(self._queue)

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, command, on_response=None) -> FutureResponse:
        """
        Queues a command for the device. Returns without waiting for the command to be written or answered.
        :param command: the command frame, as text or bytes, including the terminating carriage return.
        :param on_response: optional callable invoked exactly once with the completed future.
        :return: a future that resolves to the response line, or fails with a CommandError.
        """
        command = Command(command)
        future = command.future
        if on_response is not None:
            future.add_done_callback(on_response)

        with self._lock:
            closed = self._closed
            if not closed:
                self._queue.append(command)
                if self._busy:
                    logger.debug("queued %r, %d waiting", command.payload, len(self._queue))
                    return future
                self._busy = True

        if closed:
            future.set_exception(DispatcherClosedError("dispatcher is closed"))
        else:
            self._dispatch_next()
        return future

    def line_received(self, line: str):
        """
        Resolves the command in flight with the line and writes the next queued command.
        A line that arrives with no command in flight is discarded.
        """
        with self._lock:
            command = self._current
            if command is None:
                logger.debug("discarding unsolicited line %r", line)
                return
            self._current = None
            self._cancel_timer()

        logger.info("%r answered %r", command.payload, line)
        command.future.set_result(line)
        self._dispatch_next()

    def close(self):
        """
        Stops dispatching. The command in flight and all queued commands fail with DispatcherClosedError,
        as do commands sent afterwards.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._busy = False
            self._cancel_timer()
            abandoned = list(self._queue)
            self._queue.clear()
            if self._current is not None:
                abandoned.insert(0, self._current)
                self._current = None

        self._transport.unsubscribe(self.line_received)
        if abandoned:
            logger.warning("closing with %d command(s) unanswered", len(abandoned))
        for command in abandoned:
            command.future.set_exception(DispatcherClosedError("dispatcher closed before %r was answered" %
                                                               command.payload))

    def _dispatch_next(self):
        """
        Writes the next queued command. Commands that cannot be written are failed in turn until one is in
        flight or the queue is empty, at which point the dispatcher goes idle.
        """
        while True:
            with self._lock:
                if self._closed or not self._queue:
                    self._busy = False
                    return
                command = self._queue.popleft()
                self._current = command
                try:
                    self._start_timer(command)
                    self._transport.write(command.payload)
                except Exception as e:
                    self._current = None
                    self._cancel_timer()
                    failure = CommandWriteError("unable to write %r: %s" % (command.payload, e))
                    failure.__cause__ = e
                else:
                    logger.debug("sent %r", command.payload)
                    return

            logger.error("%s", failure)
            command.future.set_exception(failure)

    def _start_timer(self, command):
        if self.response_timeout is None:
            return
        timer = self._timer_factory(self.response_timeout, self._response_timed_out, args=(command,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_timer(self):
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()

    def _response_timed_out(self, command):
        with self._lock:
            if self._current is not command:
                # answered or abandoned while the timer was firing
                return
            self._current = None
            self._timer = None

        logger.warning("no response to %r after %s seconds", command.payload, self.response_timeout)
        command.future.set_exception(StallError("no response to %r within %s seconds" %
                                                (command.payload, self.response_timeout)))
        self._dispatch_next()
