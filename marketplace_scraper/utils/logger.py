"""
Logging setup for the marketplace scraper.

Every module of the scraper asks for its logger with get_logger(__name__).
Records go to the console and, unless LOG_FILE is set to an empty string,
to a rotating file under LOGS_DIR. Loggers keep propagating to the root
logger, so pytest's caplog sees the pipeline's skip and failure records.

The run summary (descriptor count and report location) is printed by
main.run and does not depend on LOG_LEVEL.

Attributes:
    LOG_FILE_MAX_BYTES: Size at which the log file is rotated.
    LOG_FILE_BACKUPS: Number of rotated log files kept.

Functions:
    get_logger: Returns the configured logger for a scraper module.
"""

import logging
import logging.handlers

from marketplace_scraper.config.settings import (
    LOG_DATE_FORMAT,
    LOG_FILE,
    LOG_FORMAT,
    LOG_LEVEL,
    LOGS_DIR,
)

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_FILE_BACKUPS = 5


def _file_handler(formatter: logging.Formatter) -> logging.Handler:
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=LOGS_DIR / LOG_FILE,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def get_logger(name: str) -> logging.Logger:
    """
    Returns the configured logger for a scraper module.

    Handlers are attached on the first call only, later calls for the same
    name return the logger as is.

    Args:
        name (str): Module name, usually passed as __name__.

    Returns:
        logging.Logger: Logger at LOG_LEVEL with console and optional file output.

    Examples:
        >>> logger = get_logger("marketplace_scraper.scraper.marketplace")
        >>> logger.info("Found 42 listings, fetching component pages")
        >>> logger.warning("Skipping acme-addon: no category on component page")

        Console only, e.g. in CI:

        $ LOG_FILE= LOG_LEVEL=WARNING marketplace-scraper --target-version 7.1
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(LOG_LEVEL)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if LOG_FILE:
        logger.addHandler(_file_handler(formatter))

    return logger
