#!/usr/bin/env python3
"""
Command-line entry point: connect to a bridge and log channel traffic.
"""

import asyncio
import logging
import sys

from .client import WsIrcClient
from .config import load_config
from .config.loader import load_channels
from .errors.handling import log_error
from .errors.internal import ConfigurationError
from .logging_config import LoggerConfigurator
from .logs.logger import logger


def build_client(channels: list[str] | None = None) -> WsIrcClient:
    """Create a client from the environment that joins ``channels`` once registered."""
    config = load_config()
    client = WsIrcClient(config)
    channels = load_channels() if channels is None else channels

    async def on_connect() -> None:
        for channel in channels:
            await client.join(channel)

    def on_message(sender: str, text: str) -> None:
        logger.log_event(
            "irc", "privmsg", nick=client.nickname, sender=sender, text=text
        )

    def on_nick_in_use() -> None:
        logger.log_event(
            "irc", "nick_in_use", level=logging.WARNING, nick=client.nickname
        )

    client.handle().on_connect(on_connect).on_message(on_message).on_nick_in_use(
        on_nick_in_use
    )
    return client


async def main() -> None:
    client = build_client()
    logger.log_event("app", "start", nick=client.nickname)
    try:
        await client.connect()
    except asyncio.CancelledError:
        await client.close()
        raise
    finally:
        logger.log_event("app", "shutdown")


def run() -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: On configuration errors or unexpected failures.
    """
    configurator = LoggerConfigurator()
    configurator.configure()
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        sys.exit(0)
    except ConfigurationError as e:
        log_error("Invalid configuration", e)
        sys.exit(2)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
