"""Logging setup for entry points."""

import logging

from src.config.configuration import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from the logging section of the config."""
    level = logging.getLevelName(config.level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=config.format)
