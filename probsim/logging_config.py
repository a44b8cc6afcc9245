"""Centralized logging configuration."""

import logging
import os
from typing import Iterable, Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    *,
    level: Optional[str] = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    extra_loggers: Optional[Iterable[str]] = None,
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Explicit log level. Falls back to PROBSIM_LOG_LEVEL, then INFO.
        format: Log format string
        datefmt: Date format string
        extra_loggers: Additional logger names to align with the level

    Returns:
        The package logger ("probsim")
    """
    raw_level = level if level is not None else os.getenv("PROBSIM_LOG_LEVEL")
    resolved_level = (raw_level or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    app_logger = logging.getLogger("probsim")
    app_logger.setLevel(resolved_level)

    for logger_name in extra_loggers or ():
        logging.getLogger(logger_name).setLevel(resolved_level)

    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
