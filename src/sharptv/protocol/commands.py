"""
Command frames understood by the television and interpretation of its replies.

Each frame is a 4 character command, a parameter padded with spaces to a fixed width and a carriage return.
The device replies with a single line: OK or ERR for commands that change state, a status digit for the
power query and a 4 digit identifier for the input query.

>>> power_set(True)
b'POWR1   \\r'
>>> input_select(3)
b'IAVD0003   \\r'
>>> parse_input('0003')
3
"""
import re

from sharptv.protocol.lines import DELIMITER

POWER_QUERY = b'POWR????' + DELIMITER
POWER_ON = b'POWR1   ' + DELIMITER
POWER_OFF = b'POWR0   ' + DELIMITER
INPUT_QUERY = b'IAVD?   ' + DELIMITER

MIN_INPUT_ID = 1
MAX_INPUT_ID = 8

ACK = 'OK'
NACK = 'ERR'

_input_id = re.compile(r'^\d{4}$')


class ProtocolError(ValueError):
    """ The device replied with a line that does not answer the command sent. """

    def __init__(self, message, line=None):
        super().__init__(message)
        self.line = line


def power_query() -> bytes:
    return POWER_QUERY


def power_set(on) -> bytes:
    return POWER_ON if on else POWER_OFF


def input_query() -> bytes:
    return INPUT_QUERY


def input_select(input_id: int) -> bytes:
    """
    Builds the frame that switches to the given input.
    :param input_id: the device's identifier for the input, 1 to 8.
    """
    if not isinstance(input_id, int) or not MIN_INPUT_ID <= input_id <= MAX_INPUT_ID:
        raise ValueError("input id must be between %d and %d, not %r" % (MIN_INPUT_ID, MAX_INPUT_ID, input_id))
    return b'IAVD%04d   ' % input_id + DELIMITER


def parse_ack(line: str):
    """ checks that a command was acknowledged: the reply contains OK and not ERR. """
    if ACK not in line or NACK in line:
        raise ProtocolError("command returned %r" % line, line)


def parse_power(line: str) -> bool:
    """ interprets the reply to the power query. """
    if NACK in line:
        raise ProtocolError("power query returned %r" % line, line)
    if '1' in line:
        return True
    if '0' in line:
        return False
    raise ProtocolError("power query returned %r" % line, line)


def parse_input(line: str) -> int:
    """ interprets the reply to the input query as the device's input identifier. """
    value = line.strip()
    if not _input_id.match(value):
        raise ProtocolError("input query returned %r" % line, line)
    return int(value)
