import unittest
from unittest.mock import Mock, patch

import serial
from hamcrest import assert_that, is_, calling, raises, instance_of

from sharptv.conduit.serial_conduit import SerialConduit, open_serial_conduit

invalid_port = "ABC___not_found"


class SerialConduitTest(unittest.TestCase):

    def test_streams_are_the_serial_port(self):
        ser = Mock()
        sut = SerialConduit(ser)
        assert_that(sut.target, is_(ser))
        assert_that(sut.input, is_(ser))
        assert_that(sut.output, is_(ser))

    def test_flush_is_disabled(self):
        ser = Mock()
        original_flush = ser.flush
        SerialConduit(ser)
        ser.flush()
        original_flush.assert_not_called()

    def test_open_reflects_port(self):
        ser = Mock()
        ser.is_open = True
        sut = SerialConduit(ser)
        assert_that(sut.open, is_(True))
        ser.is_open = False
        assert_that(sut.open, is_(False))

    def test_close_closes_port(self):
        ser = Mock()
        SerialConduit(ser).close()
        ser.close.assert_called_once()


class OpenSerialConduitTest(unittest.TestCase):

    @patch('sharptv.conduit.serial_conduit.serial.Serial')
    def test_opens_with_television_framing(self, serial_class):
        conduit = open_serial_conduit('/dev/ttyUSB0')
        serial_class.assert_called_once_with('/dev/ttyUSB0', 9600, timeout=0.1,
                                             bytesize=serial.EIGHTBITS, parity=serial.PARITY_NONE,
                                             stopbits=serial.STOPBITS_ONE, rtscts=False, xonxoff=False)
        assert_that(conduit, is_(instance_of(SerialConduit)))
        assert_that(conduit.target, is_(serial_class.return_value))

    @patch('sharptv.conduit.serial_conduit.serial.Serial')
    def test_baud_rate_and_frame_overrides(self, serial_class):
        open_serial_conduit('COM3', 19200, timeout=1, parity=serial.PARITY_EVEN)
        args, kwargs = serial_class.call_args
        assert_that(args, is_(('COM3', 19200)))
        assert_that(kwargs['parity'], is_(serial.PARITY_EVEN))
        assert_that(kwargs['timeout'], is_(1))

    @patch('sharptv.conduit.serial_conduit.serial.Serial')
    def test_serial_exception_is_converted_to_connection_error(self, serial_class):
        serial_class.side_effect = serial.SerialException("port busy")
        assert_that(calling(open_serial_conduit).with_args('/dev/ttyUSB0'),
                    raises(ConnectionError, "port busy"))

    def test_invalid_port_fails(self):
        assert_that(calling(open_serial_conduit).with_args(invalid_port), raises(ConnectionError))
