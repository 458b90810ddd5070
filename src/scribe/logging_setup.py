"""Logging configuration for the scribe package."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from .settings import Settings, settings as default_settings

_LOGGER_NAME = "scribe"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach file and stderr handlers to the package logger.

    Calling this more than once is harmless; handlers are only added the
    first time.

    Args:
        settings: Settings to read paths and levels from. Defaults to the
            module-level settings.

    Returns:
        The configured package logger.
    """
    settings = settings or default_settings
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())

    if getattr(logger, "_scribe_configured", False):
        return logger

    formatter = logging.Formatter(_FORMAT)

    if settings.log_to_file:
        settings.log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_path,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logger._scribe_configured = True  # type: ignore[attr-defined]
    return logger
