"""Logging setup for command-line use."""

import logging

from content_l10n.config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Apply the configured level and format to the root logger.

    Args:
        config: LoggingConfig with level name and format string.
    """
    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=config.format,
        force=True,
    )
