#!/usr/bin/env python3
"""
Dedust Trade Tracker

Watches the TON/OPEN pool on Dedust and posts every new trade with the
current price to a Telegram channel.

Usage:
    python main.py [BOT_TOKEN] [--chat-id ID] [--dry-run] [-v]

The token can also be set in the TG_BOT_TOKEN environment variable (or a
.env file); the command line argument wins.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from config.settings import BOT_TOKEN_ENV, Settings
from tracker.api import DedustClient
from tracker.monitor import TradeMonitor
from tracker.notify import LogSink, TelegramSink, TradeWriter

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Post Dedust pool trades to Telegram")
    parser.add_argument("token", nargs="?", help=f"Telegram bot token (defaults to ${BOT_TOKEN_ENV})")
    parser.add_argument("--chat-id", type=int, help="Chat or channel id to post to")
    parser.add_argument("--dry-run", action="store_true", help="Log messages instead of sending them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_writer(settings: Settings) -> TradeWriter:
    return TradeWriter(
        asset_symbol=settings.asset_symbol,
        asset_address=settings.asset_address,
        asset_decimals=settings.asset_decimals,
        explorer_url=settings.explorer_url,
        native_symbol=settings.native_symbol,
    )


async def run(settings: Settings, dry_run: bool) -> None:
    writer = build_writer(settings)
    async with DedustClient(base_url=settings.api_url, timeout=settings.request_timeout) as client:
        if dry_run:
            await TradeMonitor(client, LogSink(writer), settings).run()
            return
        sink = TelegramSink.with_links(
            settings.telegram_token, settings.chat_id, writer, settings.buy_url, settings.chart_url
        )
        async with sink:
            await TradeMonitor(client, sink, settings).run()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    settings = Settings.from_env(telegram_token=args.token, chat_id=args.chat_id)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not settings.telegram_token and not args.dry_run:
        print(
            f"Set telegram bot token to environment variable \"{BOT_TOKEN_ENV}\" "
            "or provide it as first argument (argument has priority)",
            file=sys.stderr,
        )
        return 2

    try:
        asyncio.run(run(settings, args.dry_run))
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
