# logging_config.py

"""
Logger setup for the dashboard. The level and an optional log file can be
chosen with UMATRIX_LOG_LEVEL and UMATRIX_LOG_FILE, so `bokeh serve` runs can
be made verbose without touching main.py.
"""

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "umatrix_dashboard"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get("UMATRIX_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    # getLevelName returns 'Level X' for names it does not know
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'umatrix_dashboard' logger.

    Parameters:
        level: logging level; UMATRIX_LOG_LEVEL (e.g. 'DEBUG') or INFO when omitted.
        log_file: path to also write the log to; UMATRIX_LOG_FILE when omitted.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = _level_from_env()
    if log_file is None:
        log_file = os.environ.get("UMATRIX_LOG_FILE") or None

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # bokeh serve re-executes main.py for every session
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging at {logging.getLevelName(level)}" + (f", writing to {log_file}" if log_file else ""))
    return logger
