import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from configobj import ConfigObjError
from hamcrest import assert_that, is_, equal_to, calling, raises, empty

from sharptv.config.device import DeviceSettings, InputSource, load_settings

inputs_config = """
[device]
path = /dev/ttyUSB3
baud_rate = 19200
model = LC-60LE650U
response_timeout = 0.5

[inputs]
    [[HDMI 1]]
    id = 1
    type = 3

    [[Antenna]]
    id = 5
    type = 2

    [[Component]]
    id = 3
"""


class LoadSettingsTest(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.mkdtemp()
        self.home = patch('sharptv.config.config.user_config_file',
                          return_value=os.path.join(self.directory, 'no_such_user.cfg'))
        self.home.start()
        self.platform = patch('sharptv.config.config.os_name', return_value='linux')
        self.platform.start()

    def tearDown(self):
        self.platform.stop()
        self.home.stop()
        shutil.rmtree(self.directory)

    def write(self, content):
        file = os.path.join(self.directory, 'tv.cfg')
        with open(file, 'w') as f:
            f.write(content)
        return file

    def test_shipped_defaults(self):
        settings = load_settings()
        assert_that(settings, is_(equal_to(DeviceSettings())))
        assert_that(settings.path, is_('/dev/ttyUSB0'))
        assert_that(settings.baud_rate, is_(9600))
        assert_that(settings.name, is_('Sharp TV'))
        assert_that(settings.manufacturer, is_('Sharp'))
        assert_that(settings.model, is_('Unknown'))
        assert_that(settings.serial, is_('Unknown'))
        assert_that(settings.response_timeout, is_(2.0))
        assert_that(settings.inputs, is_(empty()))

    def test_windows_default_port(self):
        with patch('sharptv.config.config.os_name', return_value='windows'):
            assert_that(load_settings().path, is_('COM1'))

    def test_device_and_inputs_in_order(self):
        settings = load_settings(self.write(inputs_config))
        assert_that(settings.path, is_('/dev/ttyUSB3'))
        assert_that(settings.baud_rate, is_(19200))
        assert_that(settings.model, is_('LC-60LE650U'))
        assert_that(settings.response_timeout, is_(0.5))
        assert_that(settings.inputs, is_([InputSource(1, 'HDMI 1', 3),
                                          InputSource(5, 'Antenna', 2),
                                          InputSource(3, 'Component', 0)]))

    def test_zero_timeout_waits_forever(self):
        settings = load_settings(self.write("[device]\nresponse_timeout = 0\n"))
        assert_that(settings.response_timeout, is_(None))

    def test_input_id_out_of_range(self):
        file = self.write("[inputs]\n[[HDMI 9]]\nid = 9\n")
        assert_that(calling(load_settings).with_args(file), raises(ConfigObjError, "'id' in section 'inputs.HDMI 9'"))

    def test_input_id_required(self):
        file = self.write("[inputs]\n[[HDMI 1]]\ntype = 3\n")
        assert_that(calling(load_settings).with_args(file), raises(ConfigObjError, "'id'"))


class InputSourceTest(unittest.TestCase):

    def test_value_equality(self):
        assert_that(InputSource(1, 'HDMI 1', 3), is_(equal_to(InputSource(1, 'HDMI 1', 3))))
        assert_that(InputSource(1, 'HDMI 1', 3) == InputSource(2, 'HDMI 1', 3), is_(False))

    def test_repr(self):
        assert_that(repr(InputSource(1, 'HDMI 1', 3)), is_("InputSource(id=1, name='HDMI 1', type=3)"))
