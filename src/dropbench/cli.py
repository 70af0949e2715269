#!/usr/bin/env python3
import argparse
import logging
import sys

from .codec import Encoding, get_codec
from .config import EmitterConfig
from .emitter import emit
from .errors import (
    ArgumentParseError,
    DecodeError,
    TargetConnectionError,
    UsageError,
    WriteError,
)
from .logsetup import LOG_LEVELS, setup_logging
from .record import DEFAULT_SOURCE, MessageRecord
from .sink import DEFAULT_PORT, Sink, listen
from .util import hexdump

logger = logging.getLogger()

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_BAD_ARGUMENT = 2
EXIT_CONNECT = 3
EXIT_WRITE = 4


class _UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--encoding", type=str, default=Encoding.MSGPACK.value,
                        choices=[e.value for e in Encoding],
                        help="Wire encoding (default: msgpack)")
    parser.add_argument("--log-level", type=str.upper, default="WARNING", choices=LOG_LEVELS,
                        help="Log level (default: WARNING)")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable colored log output")


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageErrorParser(
        prog="dropbench",
        description="Stream fixed-shape records to HOST:PORT as fast as possible."
    )
    parser.add_argument("host", metavar="HOST", help="Target host name or address")
    parser.add_argument("port", metavar="PORT", help="Target port number or service name")
    parser.add_argument("count", metavar="COUNT", nargs="?", default=None,
                        help="Number of messages to send (default: 1)")
    parser.add_argument("--source", type=str, default=DEFAULT_SOURCE,
                        help=f"Sender name put into every record (default: {DEFAULT_SOURCE})")
    parser.add_argument("--dump", action="store_true",
                        help="Hexdump the first encoded message and exit without connecting")
    _add_common_args(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as err:
        print(parser.format_usage().rstrip(), file=sys.stderr)
        print(f"{parser.prog}: error: {err}", file=sys.stderr)
        return EXIT_USAGE

    try:
        config = EmitterConfig.from_args(args)
    except ArgumentParseError as err:
        print(f"{parser.prog}: error: {err}", file=sys.stderr)
        return EXIT_BAD_ARGUMENT

    setup_logging(color=not args.no_color, level=args.log_level)

    if args.dump:
        frame = get_codec(config.encoding).pack(MessageRecord.for_index(0, config.source))
        print(hexdump(frame))
        return EXIT_OK

    try:
        emit(config)
    except TargetConnectionError as err:
        logger.error(str(err))
        return EXIT_CONNECT
    except WriteError as err:
        logger.error(f"{err} ({err.sent_messages} of {config.count} messages written)")
        return EXIT_WRITE
    return EXIT_OK


def sink_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dropbench-sink",
        description="Accept one dropbench connection, decode and count the records."
    )
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--expect", type=int, default=None,
                        help="Exit with status 1 unless exactly this many records arrive")
    _add_common_args(parser)
    args = parser.parse_args(argv)

    setup_logging(color=not args.no_color, level=args.log_level)
    sink = Sink(get_codec(args.encoding))

    try:
        listener = listen(args.host, args.port)
    except OSError as err:
        logger.error(f"Cannot listen on {args.host}:{args.port}: {err}")
        return EXIT_CONNECT

    try:
        with listener:
            stats = sink.serve_one(listener)
    except DecodeError as err:
        logger.error(str(err))
        return EXIT_BAD_ARGUMENT
    except OSError as err:
        logger.error(f"Receive failed: {err}")
        return EXIT_WRITE

    print(stats.records)
    if args.expect is not None and stats.records != args.expect:
        logger.error(f"Expected {args.expect} records, received {stats.records}")
        return EXIT_USAGE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
