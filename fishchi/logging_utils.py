"""
fishchi/logging_utils.py

Package-wide logging setup.

Every module logs through a child of the "fishchi" logger, e.g.
get_logger('renderer') -> "fishchi.renderer". Messages carry a bracketed
tag for the subsystem ("[Render] ...", "[Crossref DOI] ...").
"""

import logging
import sys
from typing import Optional

from .config import LOG_LEVEL

_LOGGER_NAME = "fishchi"


def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for a fishchi module.

    The package logger gets its stdout handler and level (FISHCHI_LOG_LEVEL)
    on first use; module loggers inherit both.
    """
    root = logging.getLogger(_LOGGER_NAME)
    if not root.handlers:
        root.addHandler(_build_handler())
        root.setLevel(LOG_LEVEL)
        root.propagate = False
    if not name:
        return root
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def set_log_level(level: Optional[str]) -> None:
    get_logger().setLevel((level or "INFO").upper())


def log_exception(context: str, exc: BaseException, logger: Optional[logging.Logger] = None) -> None:
    """
    Log an exception with its detail.

    Inside an except block the traceback is included; otherwise only the
    message is logged at ERROR.
    """
    active_logger = logger or get_logger()
    detail = getattr(exc, "detail", None)
    args = (context, exc.__class__.__name__, exc, detail)
    if sys.exc_info()[0] is not None:
        active_logger.exception("%s | %s: %s | detail=%s", *args)
    else:
        active_logger.error("%s | %s: %s | detail=%s", *args)
