#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from dexsync.app import open_app
from dexsync.config import ConfigurationError, configure_logging
from dexsync.domain.errors import DexSyncError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from dexsync.app import DexSyncApp
    from dexsync.domain.model import OwnershipRecord


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track shared card ownership in Google Sheets")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("sign-in", help="Sign in and register or rename the current user")
    show = commands.add_parser("show", help="List ownership records")
    show.add_argument(
        "--all",
        action="store_true",
        help="Show records of every user instead of only your own",
    )

    not_owned = commands.add_parser("not-owned", help="Mark an item as not owned")
    not_owned.add_argument("item_id", help="Catalog item id")
    not_owned.add_argument(
        "--clear",
        action="store_true",
        help="Mark the item as owned again",
    )

    tradeable = commands.add_parser("tradeable", help="Offer an item for trade")
    tradeable.add_argument("item_id", help="Catalog item id")
    tradeable.add_argument(
        "--clear",
        action="store_true",
        help="Withdraw the trade offer",
    )

    commands.add_parser("sign-out", help="Revoke and forget the stored credential")
    return parser.parse_args(list(argv))


def _describe(record: OwnershipRecord) -> str:
    state = "not owned" if record.not_owned else "owned"
    if record.tradeable:
        state += ", tradeable"
    notes = f"  ({record.notes})" if record.notes else ""
    return f"{record.item_id}\t{record.user_id}\t{state}{notes}"


async def _run(args: argparse.Namespace) -> None:
    async with open_app() as app:
        if args.command == "sign-out":
            await app.sign_out()
            print("Signed out")
            return

        user = await app.sign_in()
        if args.command == "sign-in":
            print(f"Signed in as {user.display_name} <{user.email}> ({user.id})")
        elif args.command == "show":
            _print_records(app, show_all=args.all)
        elif args.command == "not-owned":
            print(_describe(await app.set_not_owned(args.item_id, not args.clear)))
        elif args.command == "tradeable":
            print(_describe(await app.set_tradeable(args.item_id, not args.clear)))


def _print_records(app: DexSyncApp, *, show_all: bool) -> None:
    cache = app.all_cache if show_all else app.user_cache
    records = sorted(cache, key=lambda record: (record.user_id, record.item_id))
    if not records:
        print("No records: every item counts as owned and not tradeable")
        return
    for record in records:
        print(_describe(record))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        asyncio.run(_run(args))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except DexSyncError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
