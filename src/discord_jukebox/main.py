#!/usr/bin/env python3
"""Main entry point for the jukebox bot."""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from discord_jukebox.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.warning(LogTemplates.LOGGING_CONFIG_FALLBACK, _LOGGING_CONFIG_PATH)
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger().setLevel(resolved_level)


def _log_startup_summary(settings: Settings, logger: logging.Logger) -> None:
    """Log which song sources and command surfaces this run will serve."""
    if settings.spotify.is_configured:
        logger.info(
            LogTemplates.BOT_CATALOG_ENABLED,
            settings.queue.default_playlist_limit,
            settings.queue.catalog_lookup_concurrency,
        )
    else:
        logger.warning(LogTemplates.BOT_CATALOG_DISABLED)
    logger.info(LogTemplates.BOT_COMMAND_PREFIX, settings.discord.command_prefix)


def main() -> int:
    from discord_jukebox.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)

    token_value = settings.discord.token.get_secret_value()
    if not token_value:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    logger.info(LogTemplates.BOT_STARTING.format(environment=settings.environment))
    _log_startup_summary(settings, logger)

    from discord_jukebox.config.container import create_container
    from discord_jukebox.infrastructure.discord.bot import create_bot

    container = create_container(settings)
    bot = create_bot(container, settings)

    try:
        logger.info(LogTemplates.BOT_STARTING_RUN)
        bot.run_with_graceful_shutdown(token_value)
        logger.info(LogTemplates.BOT_STOPPED)
        return 0
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
