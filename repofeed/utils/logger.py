import logging
import sys
from logging.handlers import RotatingFileHandler, SysLogHandler
from typing import List

from repofeed.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


class LevelFilter(logging.Filter):
    """Pass only records whose level lies in [min_level, max_level]."""

    def __init__(self, min_level, max_level):
        super().__init__()
        self.min_level = min_level
        self.max_level = max_level

    def filter(self, record):
        return self.min_level <= record.levelno <= self.max_level


logger = logging.getLogger("repofeed")
logger.setLevel(logging.DEBUG)


def _console_handlers() -> List[logging.Handler]:
    # DEBUG and INFO go to stdout, WARNING and above to stderr.
    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.addFilter(LevelFilter(logging.DEBUG, logging.INFO))

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.addFilter(LevelFilter(logging.WARNING, logging.CRITICAL))
    return [stdout_handler, stderr_handler]


def _file_handlers() -> List[logging.Handler]:
    return [
        RotatingFileHandler(
            settings.LOG_FILE, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS
        )
    ]


def _syslog_handlers() -> List[logging.Handler]:
    return [SysLogHandler()]


LOG_DRIVERS = {
    "console": _console_handlers,
    "file": _file_handlers,
    "syslog": _syslog_handlers,
}


def setup_logger() -> logging.Logger:
    """
    Attach the handlers of the configured LOG_DRIVER to the shared logger.

    Earlier handlers are removed first, so calling this again after the
    driver setting changes reconfigures logging instead of duplicating output.

    Raises:
        ValueError: LOG_DRIVER names no known driver.
    """
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    log_driver = settings.LOG_DRIVER
    build_handlers = LOG_DRIVERS.get(log_driver)
    if build_handlers is None:
        raise ValueError(
            f"Invalid LOG_DRIVER: {log_driver}. Must be one of {sorted(LOG_DRIVERS)}"
        )

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in build_handlers():
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
