"""
The settings for one television: where it is connected, how it describes itself and the inputs it offers.
"""
import os

from sharptv.config.config import load_config, apply_conf, fetch_conf_path
from sharptv.conduit.serial_conduit import DEFAULT_BAUD_RATE
from sharptv.protocol.dispatcher import DEFAULT_RESPONSE_TIMEOUT
from sharptv.support.values import ValueObject

config_name = 'sharptv'
config_directory = os.path.dirname(__file__)


class InputSource(ValueObject):
    """
    An input on the television.
    :param id: the device's identifier for the input, as used in the input select command.
    :param name: the name displayed for the input.
    :param type: the input source type tag reported to the home automation host, such as 3 for HDMI.
    """

    def __init__(self, id: int, name: str, type: int=0):
        self.id = id
        self.name = name
        self.type = type


class DeviceSettings(ValueObject):

    def __init__(self, path='/dev/ttyUSB0', baud_rate=DEFAULT_BAUD_RATE, name='Sharp TV', manufacturer='Sharp',
                 model='Unknown', serial='Unknown', response_timeout=DEFAULT_RESPONSE_TIMEOUT, inputs=()):
        self.path = path
        self.baud_rate = baud_rate
        self.name = name
        self.manufacturer = manufacturer
        self.model = model
        self.serial = serial
        self.response_timeout = response_timeout
        self.inputs = list(inputs)


def settings_from_config(config) -> DeviceSettings:
    """
    Builds the device settings from a validated configuration.
    A response timeout of 0 disables the timeout.
    """
    settings = DeviceSettings()
    device = fetch_conf_path(config, ('device',))
    if device:
        apply_conf(device, settings)
    if not settings.response_timeout:
        settings.response_timeout = None
    inputs = fetch_conf_path(config, ('inputs',)) or {}
    settings.inputs = [InputSource(section['id'], name, section['type']) for name, section in inputs.items()]
    return settings


def load_settings(filename=None) -> DeviceSettings:
    """
    Loads the layered configuration files and converts them to device settings.
    :param filename: an optional configuration file that overrides the defaults.
    :raises ConfigObjError: if a file cannot be parsed or the configuration is invalid.
    """
    return settings_from_config(load_config(config_name, config_directory, filename))
