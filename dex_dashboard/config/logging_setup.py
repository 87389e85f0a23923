# dex_dashboard/config/logging_setup.py
from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "dex_dashboard"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Attach a single stdout handler to the package logger.

    Safe to call more than once (e.g. uvicorn --reload re-imports main).
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
