"""
longpass logging.

Core modules log through get_logger(); the CLI turns output on with
-v/--verbose and can mirror it to a file with --log-file. Passphrases go to
stdout via print() and never reach a log record.
"""

import logging
import os
from typing import Optional

ROOT_LOGGER = 'longpass'
LOG_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Child of the 'longpass' logger."""
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the 'longpass' logger.

    Safe to call more than once: a stderr handler is added only the first
    time, and a file handler only once per path.

    Args:
        level: Logging level (default WARNING)
        log_file: Optional path that also receives every record

    Returns:
        The configured 'longpass' logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT)

    streams = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    if not streams:
        handler = logging.StreamHandler()
        handler.setFormatter(fmt)
        logger.addHandler(handler)

    if log_file:
        target = os.path.abspath(log_file)
        files = [h for h in logger.handlers
                 if isinstance(h, logging.FileHandler) and h.baseFilename == target]
        if not files:
            fh = logging.FileHandler(target)
            fh.setFormatter(fmt)
            logger.addHandler(fh)

    return logger
