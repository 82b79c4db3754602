"""CLI entry point for discord_pins.archive.

Usage:
    python -m discord_pins.archive -t TOKEN pins 123            # Archive pins
    python -m discord_pins.archive -t TOKEN pins 123 --delete   # Archive, then unpin
    python -m discord_pins.archive -t TOKEN -v pins 123         # Show more details
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from discord_pins.archive.logger import ArchiveLogger
from discord_pins.archive.run import run_archive
from discord_pins.config.settings import ArchiveSettings
from discord_pins.utils.logging import setup_logging


VERSION = "0.1.0"

EPILOG = """
********************************************************
Any tool that automates actions on user accounts,
including this one, could result in account termination.
********************************************************

Obtaining a Discord token:
  1. Login to Discord on Chrome.
  2. Open the Network tab in the inspector tools.
  3. Send a message in Discord.
  4. Find the request in the Network tab, and find the "Authorization" header
     in the request section. The value of this header is your token.

Obtaining a channel ID:
  1. Go to Discord settings.
  2. Open the "Advanced" tab under "App Settings".
  3. Enable "Developer Mode".
  4. Right click any chat/channel and copy the ID.

Examples:
  python -m discord_pins.archive -t TOKEN pins 987654321
      Archive pins and attachments into ./json and ./static

  python -m discord_pins.archive -t TOKEN pins 987654321 --delete
      Archive, then unpin every archived message

  DISCORD_TOKEN=... python -m discord_pins.archive --config pins.json pins 987654321
      Take the token from the environment and other settings from a file
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="discord-pins",
        description="CLI Discord archiving tool, currently only able to archive pins",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "-t",
        "--token",
        type=str,
        help="Discord token (required unless DISCORD_TOKEN is set)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Use verbose logging",
    )
    parser.add_argument(
        "-A",
        "--user-agent",
        type=str,
        help="Set a custom user agent when making Discord API requests",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Optional JSON settings file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with third-party library logs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Optional file to write logs to",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    pins = subparsers.add_parser(
        "pins",
        help="Archive pinned messages from a channel",
        description="Archive pinned messages from a channel",
    )
    pins.add_argument("channel", type=str, help="Discord channel ID to archive")
    pins.add_argument(
        "-D",
        "--delete",
        action="store_true",
        help="Delete pinned message after archive",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = ArchiveSettings.from_json(
        args.config,
        token=args.token,
        user_agent=args.user_agent,
    )
    if not settings.token:
        parser.error("the following arguments are required: -t/--token")

    verbose = args.verbose or args.debug
    setup_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        log_file=args.log_file,
        debug_third_party=args.debug,
    )
    logger = ArchiveLogger(verbose=verbose)

    try:
        asyncio.run(
            run_archive(
                settings,
                channel_id=args.channel,
                delete=args.delete,
                logger=logger,
            )
        )
        logger.success("Archive complete!")
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
