import logging
import os
from typing import Optional

LOGGER_NAME = "ordhash"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] - %(message)s"


def get_level() -> str:
    """Get the logging level for ordhash from ``ORDHASH_LOGGING_LEVEL``,
    defaulting to ``WARNING``."""
    return os.getenv("ORDHASH_LOGGING_LEVEL", "WARNING")


def get_handler(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Handler:
    """Get a handler for ordhash log records.

    Records are written to stderr only when ``ORDHASH_USE_DEV_LOGGER=true``;
    otherwise ordhash stays silent, as a library should."""
    if os.getenv("ORDHASH_USE_DEV_LOGGER", "").lower() == "true":
        handler: logging.Handler = logging.StreamHandler()
    else:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level or get_level())
    return handler


def configure_root_logger(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Handler:
    """Set the level of the ``ordhash`` logger and attach a new handler to it.

    The installed handler is returned so the caller can detach it later."""
    level = level or get_level()
    handler = get_handler(level=level, fmt=fmt)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
