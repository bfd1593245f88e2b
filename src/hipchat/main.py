#!/usr/bin/env python3
"""
HipChat Command Line Client

Sends messages, lists rooms and prints room history from the shell.
Defaults come from HIPCHAT_* environment variables; command line options
override them.

Usage:
    hipchat send "Build finished" --room 42 --from CI --notify
    hipchat rooms
    hipchat history --room Development --date 2012-03-01 --raw
"""

import argparse
import logging
import sys
from datetime import datetime

from .errors import HipChatError
from .service import HipChatClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the hipchat command."""
    parser = argparse.ArgumentParser(
        prog="hipchat", description="HipChat API command line client"
    )
    parser.add_argument("--token", help="API token (default: $HIPCHAT_TOKEN)")
    parser.add_argument(
        "--format",
        choices=["json", "xml"],
        help="Response format requested from the service",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    send = commands.add_parser("send", help="Send a message to a room")
    send.add_argument("message", help="Message body")
    send.add_argument("--room", help="Room id or name")
    send.add_argument("--from", dest="sender", help="Sender name")
    send.add_argument(
        "--notify", action="store_true", default=None, help="Notify the room"
    )
    send.add_argument(
        "--color",
        choices=["yellow", "red", "green", "purple", "gray", "random"],
        help="Background color",
    )
    send.add_argument(
        "--text", action="store_true", help="Send the body as plain text"
    )

    rooms = commands.add_parser("rooms", help="List rooms")
    rooms.add_argument(
        "--raw", action="store_true", help="Print the raw response body"
    )

    history = commands.add_parser("history", help="Show room history")
    history.add_argument("--room", help="Room id or name")
    history.add_argument("--date", type=_parse_date, help="Day to show (YYYY-MM-DD)")
    history.add_argument(
        "--raw", action="store_true", help="Print the raw response body"
    )

    return parser


def _parse_date(value):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r}") from None


def _room_arg(value):
    if value is not None and value.isdigit():
        return int(value)
    return value


def run(args: argparse.Namespace, client: HipChatClient) -> None:
    """Execute a parsed command with the given client."""
    if args.token:
        client.token = args.token
    if args.format:
        client.format = args.format

    if args.command == "send":
        client.send_message(
            args.message,
            room=_room_arg(args.room),
            sender=args.sender,
            notify=args.notify,
            color=args.color,
            message_format="text" if args.text else None,
        )
        print("Message sent")

    elif args.command == "rooms":
        if args.raw:
            print(client.list_rooms())
            return
        for room in client.yield_rooms():
            print(f"{room.room_id}\t{room.name}\t{room.topic}")

    elif args.command == "history":
        room = _room_arg(args.room)
        if args.raw:
            print(client.room_history(args.date, room=room))
            return
        for message in client.room_history_typed(args.date, room=room):
            print(f"[{message.date:%Y-%m-%d %H:%M}] {message.sender}: {message.message}")


def main(argv=None):
    """Main entry point for the hipchat command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Running '{args.command}' command")

    try:
        with HipChatClient.from_env() as client:
            run(args, client)
    except HipChatError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)


if __name__ == "__main__":
    main()
