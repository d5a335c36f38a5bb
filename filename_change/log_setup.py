"""
log_setup.py - Logging Configuration

Level comes from the FILENAME_CHANGE_LOG environment variable
(DEBUG, INFO, WARNING...), default WARNING.
"""

import logging
import os

LOG_ENV_VAR = "FILENAME_CHANGE_LOG"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(verbose: bool = False) -> int:
    """Pick the log level from flags and environment"""
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_ENV_VAR, "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for the application"""
    logging.basicConfig(level=resolve_level(verbose), format=LOG_FORMAT)
