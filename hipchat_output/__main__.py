#!/usr/bin/env python3
"""
Send lines read from stdin to a HipChat room, one message per line.

Settings come from HIPCHAT_* environment variables (or a .env file) and can
be overridden on the command line.

Usage:
    export HIPCHAT_AUTH_TOKEN=... HIPCHAT_ROOM_ID=ops
    tail -n 20 app.log | python -m hipchat_output --severity 3
"""

import argparse
import logging
import os
import socket
import sys
from typing import Iterable, Iterator, Optional, Sequence

from hipchat_output import Message
from hipchat_output.errors import ConfigurationError
from hipchat_output.plugins import PLUGIN_NAME, build_output
from hipchat_output.runner import StreamRunner


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hipchat-output", description=__doc__.splitlines()[1])
    parser.add_argument("--room-id", dest="room_id")
    parser.add_argument("--from", dest="from_", metavar="NAME")
    parser.add_argument("--notify", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument(
        "--full-message",
        action="store_true",
        help="send each message serialized as JSON instead of the bare line",
    )
    parser.add_argument("--severity", type=int, default=6)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def read_messages(lines: Iterable[str], severity: int) -> Iterator[Message]:
    """Turn each non-blank line into a message, reading only on demand."""
    hostname = socket.gethostname()
    pid = os.getpid()
    for line in lines:
        line = line.rstrip("\n")
        if not line.strip():
            continue
        yield Message(
            payload=line,
            severity=severity,
            type="stdin",
            logger="hipchat-output",
            hostname=hostname,
            pid=pid,
        )


def main(argv: Optional[Sequence[str]] = None, stdin: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    raw = {}
    if args.room_id is not None:
        raw["room_id"] = args.room_id
    if args.from_ is not None:
        raw["from"] = args.from_
    if args.notify is not None:
        raw["notify"] = args.notify
    if args.full_message:
        raw["payload_only"] = False

    try:
        output = build_output(PLUGIN_NAME, raw)
    except ConfigurationError as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 2

    runner = StreamRunner(read_messages(stdin or sys.stdin, args.severity), PLUGIN_NAME)

    with output:
        output.run(runner)

    return 1 if runner.errors else 0


if __name__ == "__main__":
    sys.exit(main())
