"""
Sleeper Draftbot CLI

Runs the server or a single job without the HTTP surface, e.g. from
cron or a container task.
"""

import argparse
import asyncio
import sys

from sleeper_draftbot.config import get_settings
from sleeper_draftbot.logging_config import configure_logging
from sleeper_draftbot.models import SlackMessage
from sleeper_draftbot.runtime import BotRuntime


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sleeper-draftbot",
        description="Slack draft announcements and lineup checks for Sleeper leagues",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the HTTP server (Slack events and task endpoints)
  sleeper-draftbot serve

  # Post new picks for every registered draft once
  sleeper-draftbot check-drafts

  # Audit the lineups of every registered league
  sleeper-draftbot check-rosters

  # Print what "last pick" would answer in a channel
  sleeper-draftbot last-pick C0123456789
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Run the API server")
    subparsers.add_parser("check-drafts", help="Announce new picks for registered drafts")
    subparsers.add_parser("check-rosters", help="Audit lineups for registered leagues")

    last_pick_parser = subparsers.add_parser(
        "last-pick", help="Show the latest pick(s) for a channel's draft"
    )
    last_pick_parser.add_argument("channel_id", help="Slack channel ID")

    return parser


async def run_command(args: argparse.Namespace, runtime: BotRuntime) -> None:
    if args.command == "check-drafts":
        await runtime.tracker.check_draft_for_updates()

    elif args.command == "check-rosters":
        await runtime.roster_audit.check_all_channels(runtime.store, runtime.messenger)

    elif args.command == "last-pick":

        async def emit(message: SlackMessage) -> None:
            print(message.text)

        await runtime.tracker.handle_last_pick_command(args.channel_id, emit)


async def cli_main(args: argparse.Namespace) -> None:
    async with BotRuntime() as runtime:
        await run_command(args, runtime)


def main(argv: list[str] | None = None) -> None:
    """Entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        from sleeper_draftbot.main import run

        run()
        return

    configure_logging(get_settings())
    asyncio.run(cli_main(args))


if __name__ == "__main__":
    main()
