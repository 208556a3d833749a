"""Logging setup shared by the API and the CLI entrypoint."""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import Settings

LOGGER_NAME = "inventory_dashboard"


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Configure the package logger with a console handler and, when
    ``settings.log_file`` is set, a rotating file handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)

    # create_app may run several times in one process (tests)
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"  # 5 MB
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
