"""
Wires a serial port, the line transport, the dispatcher and the television adapter together.
"""
import logging

from sharptv.conduit.base import Conduit
from sharptv.conduit.serial_conduit import open_serial_conduit
from sharptv.config.device import DeviceSettings
from sharptv.protocol.dispatcher import CommandDispatcher
from sharptv.protocol.lines import LineTransport
from sharptv.television import Television

logger = logging.getLogger(__name__)


class TelevisionConnection:
    """
    An open connection to one television. Starts reading from the conduit on construction.
    Use as a context manager, or call close() when done.
    """

    def __init__(self, conduit: Conduit, settings: DeviceSettings):
        self.settings = settings
        self.transport = LineTransport(conduit)
        self.dispatcher = CommandDispatcher(self.transport, settings.response_timeout)
        self.television = Television(self.dispatcher, settings)
        self.transport.start()

    def send(self, command, on_response=None):
        return self.dispatcher.send(command, on_response)

    def close(self):
        """ fails any unanswered commands, then stops reading and closes the conduit. """
        self.dispatcher.close()
        self.transport.close()
        logger.info("closed connection to %s", self.settings.path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def connect(settings: DeviceSettings, conduit_factory=open_serial_conduit) -> TelevisionConnection:
    """
    Opens the television's serial port.
    :param conduit_factory: called with the port path and baud rate to open the conduit.
    :raises ConnectionError: if the port cannot be opened.
    """
    conduit = conduit_factory(settings.path, settings.baud_rate)
    return TelevisionConnection(conduit, settings)
