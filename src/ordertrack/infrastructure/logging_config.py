"""Logging setup for ordertrack.

Modules log through ``logging.getLogger(__name__)``; their loggers all
live under the ``ordertrack`` namespace configured here.  Every record
carries the name of the thread that produced it, which is how watcher
output (thread ``order-file-watcher``) is told apart from the main thread:

    2026-10-19 10:15:30 [INFO    ] [MainThread] ordertrack.infrastructure.ingestion.scanner - Scanned uploads: 2 new order(s)
    2026-10-19 10:15:31 [INFO    ] [order-file-watcher] ordertrack.infrastructure.ingestion.watcher - Discovered 1 order(s) in a.json
"""

from __future__ import annotations

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER_NAME = "ordertrack"

LOG_FORMAT = "%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ThreadContextFilter(logging.Filter):
    """Adds ``thread_name`` to each record; never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        return True


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure the ``ordertrack`` logger: stderr always, a rotating file optionally.

    Safe to call more than once; earlier handlers are replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    thread_filter = ThreadContextFilter()

    # stderr, so command output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(thread_filter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(thread_filter)
        logger.addHandler(file_handler)
        logger.debug("File logging enabled: %s", log_file)

    return logger
