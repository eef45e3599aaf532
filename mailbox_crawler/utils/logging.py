"""
Logging configuration for Mailbox Crawler.

All package loggers live under the ``mailbox_crawler`` namespace, so the
handlers attached by ``setup_logging`` also receive records from modules
that call ``logging.getLogger(__name__)``. The log file is written next to
the CSV output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "mailbox_crawler"
LOG_FILE_NAME = "crawler.log"

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the crawler logger, or one of its children when ``name`` is given."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(output_dir: Path, verbose: bool = False) -> Path:
    """
    Send crawler logs to stdout and to ``crawler.log`` in ``output_dir``.

    Handlers from an earlier call are closed first, so repeated runs in one
    process do not write every line twice.

    Args:
        output_dir: Directory of the CSV output, created if missing
        verbose: If True, show debug messages on the console too

    Returns:
        Path of the log file
    """
    close_logging()

    logger = get_logger()
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(formatter)

    output_dir.mkdir(parents=True, exist_ok=True)
    log_file = output_dir / LOG_FILE_NAME
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    logger.setLevel(logging.DEBUG)
    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    logger.debug(f"Logging to {log_file}")
    return log_file


def close_logging():
    """Detach and close the handlers added by ``setup_logging``."""
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
