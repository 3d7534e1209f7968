"""
Logging setup for the editor.

The terminal is owned by curses while the editor runs, so log records only
ever go to a file.
"""

import logging
from typing import Final, Optional

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGER: Final[str] = "termedit"


def setup_logging(path: Optional[str], level: int = logging.INFO) -> logging.Logger:
    """
    Attach a file handler to the package logger.

    Args:
        path: Log file to append to, or None to keep logging silent
        level: Minimum level written to the file

    Returns:
        The package logger
    """

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if not path:
        package_logger.addHandler(logging.NullHandler())
        return package_logger

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)

    return package_logger
