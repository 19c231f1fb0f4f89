"""
Implements a conduit over a serial port.
"""

import logging

import serial

from sharptv.conduit.base import StreamConduit

logger = logging.getLogger(__name__)

DEFAULT_BAUD_RATE = 9600

# 8 data bits, no parity, 1 stop bit, no flow control
DEFAULT_FRAME = dict(
    bytesize=serial.EIGHTBITS,
    parity=serial.PARITY_NONE,
    stopbits=serial.STOPBITS_ONE,
    rtscts=False,
    xonxoff=False,
)

# seconds a read blocks before returning what has arrived so far
READ_TIMEOUT = 0.1


class SerialConduit(StreamConduit):
    """
    A conduit over an open serial port, which is both the input and the output stream.
    """

    def __init__(self, ser: serial.Serial):
        super().__init__(ser, target=ser)
        self.ser = ser
        # flush blocks forever once the adapter is unplugged
        ser.flush = self._no_flush

    def _no_flush(self, *args, **kwargs):
        pass

    @property
    def open(self) -> bool:
        return self.ser.is_open


def open_serial_conduit(path, baudrate=DEFAULT_BAUD_RATE, timeout=READ_TIMEOUT, **frame) -> SerialConduit:
    """
    Opens the serial port at the given path and wraps it in a conduit.
    :param path: the device path, such as /dev/ttyUSB0 or COM3
    :param baudrate: the line speed
    :param timeout: the read timeout in seconds
    :param frame: overrides for the framing settings in DEFAULT_FRAME
    :raises ConnectionError: if the port does not exist or is busy.
    """
    settings = dict(DEFAULT_FRAME)
    settings.update(frame)
    try:
        ser = serial.Serial(path, baudrate, timeout=timeout, **settings)
    except (serial.SerialException, ValueError) as e:
        logger.error("unable to open serial port %s: %s", path, e)
        raise ConnectionError("unable to open serial port %s: %s" % (path, e)) from e
    logger.info("opened serial port %s at %d baud", path, baudrate)
    return SerialConduit(ser)
