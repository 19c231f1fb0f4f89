import unittest
from io import BytesIO
from unittest.mock import Mock

import timeout_decorator
from hamcrest import assert_that, is_, calling, raises, instance_of

from sharptv.conduit.base import StreamConduit
from sharptv.config.device import DeviceSettings
from sharptv.facade import connect, TelevisionConnection
from sharptv.protocol.asyncloop_test import debug_timeout
from sharptv.protocol.dispatcher import DispatcherClosedError
from sharptv.protocol.lines_test import ChunkReader
from sharptv.television import Television


class ConnectTest(unittest.TestCase):

    def setUp(self):
        self.reader = ChunkReader()
        self.output = BytesIO()
        self.conduit = StreamConduit(self.reader, self.output)
        self.factory = Mock(return_value=self.conduit)
        self.settings = DeviceSettings(path='/dev/ttyUSB1', baud_rate=19200, response_timeout=2)

    @timeout_decorator.timeout(debug_timeout(5))
    def test_connect_opens_configured_port(self):
        with connect(self.settings, self.factory) as connection:
            self.factory.assert_called_once_with('/dev/ttyUSB1', 19200)
            assert_that(connection, is_(instance_of(TelevisionConnection)))
            assert_that(connection.television, is_(instance_of(Television)))
            assert_that(connection.dispatcher.response_timeout, is_(2))

    def test_connection_error_propagates(self):
        self.factory.side_effect = ConnectionError("busy")
        assert_that(calling(connect).with_args(self.settings, self.factory), raises(ConnectionError))

    @timeout_decorator.timeout(debug_timeout(5))
    def test_command_round_trip_over_conduit(self):
        with connect(self.settings, self.factory) as connection:
            result = connection.television.get_active()
            self.reader.chunks.put(b"1\r")
            assert_that(result.value(2), is_(True))
            assert_that(self.output.getvalue(), is_(b"POWR????\r"))

    @timeout_decorator.timeout(debug_timeout(5))
    def test_close_fails_pending_and_closes_conduit(self):
        connection = connect(self.settings, self.factory)
        pending = connection.send("POWR????\r")
        connection.close()
        assert_that(calling(pending.result).with_args(0), raises(DispatcherClosedError))
        assert_that(self.conduit.open, is_(False))
        assert_that(self.reader.closed, is_(True))
