import unittest
from unittest.mock import Mock, call

from hamcrest import assert_that, is_, calling, raises

from sharptv.support.events import EventSource


class EventSourceTest(unittest.TestCase):

    def test_no_handlers(self):
        EventSource().fire("OK")

    def test_add_and_remove(self):
        sut = EventSource()
        handler = Mock()
        sut.add(handler)
        assert_that(len(sut), is_(1))
        sut.remove(handler)
        assert_that(len(sut), is_(0))
        assert_that(calling(sut.remove).with_args(handler), raises(ValueError))

    def test_handlers_called_in_order_added(self):
        sut = EventSource()
        manager = Mock()
        sut.add(manager.dispatcher)
        sut.add(manager.monitor)
        sut.fire("0001")
        self.assertEqual(manager.mock_calls, [call.dispatcher("0001"), call.monitor("0001")])

    def test_failing_handler_does_not_stop_the_rest(self):
        sut = EventSource()
        after = Mock()
        sut.add(Mock(side_effect=ValueError("bad handler")))
        sut.add(after)
        with self.assertLogs('sharptv.support.events', 'ERROR'):
            sut.fire("ERR")
        after.assert_called_once_with("ERR")

    def test_handler_can_remove_itself_while_firing(self):
        sut = EventSource()
        other = Mock()

        def once(line):
            sut.remove(once)

        sut.add(once)
        sut.add(other)
        sut.fire("1")
        sut.fire("0")
        assert_that(len(sut), is_(1))
        self.assertEqual(other.mock_calls, [call("1"), call("0")])
