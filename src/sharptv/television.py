"""
Exposes the television's power state and selected input as values a home automation host can get and set.

Each operation sends one command through the dispatcher and interprets the reply. Results are returned as
FutureValue instances: call value() to wait for the result, which raises if the command failed or the reply
could not be understood.
"""
import logging

from sharptv.config.device import DeviceSettings
from sharptv.protocol import commands
from sharptv.protocol.asyncloop import FutureValue
from sharptv.protocol.commands import ProtocolError

logger = logging.getLogger(__name__)


class Television:
    """
    :param dispatcher: sends commands to the device. Only its send() method is used.
    :param settings: the device description and its configured inputs. An input's identifier is its
        position in settings.inputs.
    """

    def __init__(self, dispatcher, settings: DeviceSettings):
        self._dispatcher = dispatcher
        self._settings = settings

    @property
    def name(self):
        return self._settings.name

    @property
    def information(self) -> dict:
        return {
            'name': self._settings.name,
            'manufacturer': self._settings.manufacturer,
            'model': self._settings.model,
            'serial_number': self._settings.serial,
        }

    @property
    def inputs(self) -> list:
        return self._settings.inputs

    def get_active(self) -> FutureValue:
        """ fetches whether the television is on. """
        return self._request(commands.power_query(), commands.parse_power, 'get active')

    def set_active(self, on) -> FutureValue:
        """ turns the television on or off. """
        return self._request(commands.power_set(on), commands.parse_ack, 'set active %s' % bool(on))

    def get_active_identifier(self) -> FutureValue:
        """ fetches the position in the input list of the input currently shown. """
        return self._request(commands.input_query(), self._input_index, 'get active identifier')

    def set_active_identifier(self, index) -> FutureValue:
        """
        switches to the input at the given position in the input list.
        :raises IndexError: if there is no input at that position.
        """
        inputs = self._settings.inputs
        if not 0 <= index < len(inputs):
            raise IndexError("no input %s, %d input(s) are configured" % (index, len(inputs)))
        source = inputs[index]
        return self._request(commands.input_select(source.id), commands.parse_ack,
                             'set active identifier %d (%s)' % (index, source.name))

    def get_input_id(self) -> FutureValue:
        """ fetches the device's identifier for the input currently shown, whether or not it is configured. """
        return self._request(commands.input_query(), commands.parse_input, 'get input id')

    def select_input_id(self, input_id: int) -> FutureValue:
        """
        switches to an input by the device's identifier.
        :raises ValueError: if the identifier is not one the device accepts.
        """
        return self._request(commands.input_select(input_id), commands.parse_ack, 'select input id %s' % input_id)

    def _input_index(self, line):
        input_id = commands.parse_input(line)
        for index, source in enumerate(self._settings.inputs):
            if source.id == input_id:
                return index
        raise ProtocolError("television is showing input %d which is not configured" % input_id, line)

    def _request(self, frame, interpret, description) -> FutureValue:
        result = FutureValue()

        def completed(future):
            try:
                value = interpret(future.result())
                logger.debug("%s -> %r", description, value)
            except Exception as e:
                logger.error("%s failed: %s", description, e)
                value = e
            result.set_result_or_exception(value)

        logger.debug(description)
        self._dispatcher.send(frame, completed)
        return result
