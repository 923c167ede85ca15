# === FILE: link_scout/logger.py ===
"""Logging for LinkScout.

Everything logs to the ``LinkScout`` logger::

    from link_scout.logger import logger
    logger.info("Checking links")

Console records go through :func:`tqdm.write`, so a warning printed while a
check is running lands above the progress bar instead of tearing it. The CLI
calls :func:`configure` once per invocation.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, TextIO, Union

from tqdm import tqdm

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "LinkScout"

#: rotate the log file at 5 MiB, keep 3 old files
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3


class TqdmHandler(logging.StreamHandler):
    """Console handler that prints around any active tqdm bar."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream if stream is not None else sys.stdout)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
        except Exception:
            self.handleError(record)


def configure(
    *,
    level: Union[int, str] = "WARNING",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Replace the handlers of the LinkScout logger.

    Console output always; a rotating *log_file* in addition when given.
    """
    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [TqdmHandler(stream)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    lg = logging.getLogger(LOGGER_NAME)
    for old in list(lg.handlers):
        lg.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)
    lg.setLevel(level)
    lg.propagate = False
    return lg


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "TqdmHandler", "DEFAULT_FORMAT", "LOGGER_NAME"]
