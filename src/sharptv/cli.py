"""
Command line control of the television.

    sharptv power            prints on or off
    sharptv power on|off     turns the television on or off
    sharptv input            prints the input being shown
    sharptv input HDMI1      switches to a configured input by name, or by device id (1-8)
"""
import argparse
import logging
import sys

from configobj import ConfigObjError

from sharptv.config.device import load_settings
from sharptv.facade import connect
from sharptv.protocol.dispatcher import CommandError

logger = logging.getLogger(__name__)


def configure_logging(verbose):
    root = logging.getLogger('sharptv')
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
    root.addHandler(handler)


def build_parser():
    parser = argparse.ArgumentParser(prog='sharptv', description='Control a television over its serial port.')
    parser.add_argument('--config', help='configuration file overriding the defaults')
    parser.add_argument('--port', help='serial port the television is connected to')
    parser.add_argument('--baud', type=int, help='serial line speed')
    parser.add_argument('--timeout', type=float, help='seconds to wait for each response, 0 waits forever')
    parser.add_argument('-v', '--verbose', action='store_true', help='log commands and responses')
    subparsers = parser.add_subparsers(dest='command', required=True)

    power = subparsers.add_parser('power', help='query or set the power state')
    power.add_argument('state', nargs='?', choices=('on', 'off'))

    select = subparsers.add_parser('input', help='query or select the input')
    select.add_argument('input', nargs='?', help='input name from the configuration, or device input id')
    return parser


def power(connection, state):
    tv = connection.television
    if state is None:
        return 'on' if tv.get_active().value() else 'off'
    tv.set_active(state == 'on').value()
    return state


def select_input(connection, choice):
    tv = connection.television
    inputs = tv.inputs
    if choice is None:
        input_id = tv.get_input_id().value()
        names = [source.name for source in inputs if source.id == input_id]
        return names[0] if names else str(input_id)

    for index, source in enumerate(inputs):
        if source.name == choice:
            tv.set_active_identifier(index).value()
            return choice
    try:
        input_id = int(choice)
    except ValueError:
        raise ValueError("unknown input %r" % choice)
    tv.select_input_id(input_id).value()
    return choice


def run(args):
    settings = load_settings(args.config)
    if args.port:
        settings.path = args.port
    if args.baud:
        settings.baud_rate = args.baud
    if args.timeout is not None:
        settings.response_timeout = args.timeout or None

    with connect(settings) as connection:
        if args.command == 'power':
            return power(connection, args.state)
        return select_input(connection, args.input)


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        print(run(args))
    except (ConnectionError, CommandError, ConfigObjError, ValueError) as e:
        logger.debug("command failed", exc_info=True)
        print("error: %s" % e, file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':  # pragma no cover
    sys.exit(main())
