import logging
import threading
from typing import Optional

from ordhash import logconfig

_INIT_LOCK = threading.Lock()
_is_initialized = False
_handler: Optional[logging.Handler] = None


def init(level: Optional[str] = None, force_reload: bool = False) -> None:
    """
    Initialize ordhash for the current Python process.

    This only configures the ``ordhash`` logger (see :py:mod:`ordhash.logconfig`),
    so calling it is optional; containers work without it. ``init()`` may be
    called more than once. Only the first invocation takes effect unless
    ``force_reload=True``, in which case the previously installed handler is
    replaced rather than stacked.
    """
    global _is_initialized, _handler

    with _INIT_LOCK:
        if _is_initialized and not force_reload:
            return

        if _handler is not None:
            logging.getLogger(logconfig.LOGGER_NAME).removeHandler(_handler)

        _handler = logconfig.configure_root_logger(level=level)
        _is_initialized = True
