import logging
import os
from typing import Optional

TRACE = 5

logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "oneormany"
LEVEL_ENV_VAR = "ONEORMANY_LOGGING_LEVEL"
DEV_LOGGER_ENV_VAR = "ONEORMANY_USE_DEV_LOGGER"

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "%(levelname)s [%(name)s:%(lineno)d] - %(message)s"

_installed: Optional[logging.Handler] = None


def get_level() -> str:
    return os.getenv(LEVEL_ENV_VAR, DEFAULT_LEVEL)


def use_dev_logger() -> bool:
    return os.getenv(DEV_LOGGER_ENV_VAR, "").lower() == "true"


def get_handler(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Handler:
    """Return a stderr handler if the dev logger is enabled, otherwise a handler
    which discards every record."""
    handler = logging.StreamHandler() if use_dev_logger() else logging.NullHandler()
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level or get_level())
    return handler


def configure_root_logger(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """Configure the package logger from the environment and return it.

    Calling this again replaces the handler installed by the previous call, so
    records are never emitted twice."""
    global _installed

    level = level or get_level()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if _installed is not None:
        logger.removeHandler(_installed)
    _installed = get_handler(level=level, fmt=fmt)
    logger.addHandler(_installed)
    return logger
