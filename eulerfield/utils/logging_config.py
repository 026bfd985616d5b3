"""
Logging setup for the eulerfield command-line tool.

stdout carries the rendered table or picture, so every handler here
writes somewhere else: stderr, and optionally a log file.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> None:
    """
    Attach stderr (and optional file) handlers to the 'eulerfield' logger.

    Args:
        level: Threshold for the logger and its handlers, e.g. logging.DEBUG
        log_file: Path of a log file to overwrite, or None
    """
    package_logger = logging.getLogger("eulerfield")
    package_logger.setLevel(level)

    # main() may run repeatedly in one process (tests)
    package_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.debug("Logging to %d handler(s) at %s", len(handlers), logging.getLevelName(level))
