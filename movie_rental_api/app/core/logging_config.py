"""
Logging configuration for the movie rental API.

Every module logs under the ``movie_rental_api`` hierarchy (services
use ``logging.getLogger(__name__)``).  ``setup_logging`` sets the level
of that API logger from ``LOG_LEVEL`` and attaches a console handler
(plus a file handler when ``LOG_FILE`` is set) to the root logger, so
uvicorn's own loggers share the same output.
"""

import logging
from pathlib import Path
from typing import Optional


API_LOGGER_NAME = "movie_rental_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure logging and return the API logger.

    The API logger's level is applied on every call.  Handlers are only
    attached when the root logger has none yet, since ``create_app``
    may run several times in one process.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a log file.  If omitted, only the console is used.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    api_logger = logging.getLogger(API_LOGGER_NAME)
    api_logger.setLevel(numeric_level)

    root = logging.getLogger()
    if root.handlers:
        return api_logger

    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    api_logger.debug("Logging configured at %s", logging.getLevelName(numeric_level))
    return api_logger
