# spotfinder/utils/logger.py
"""
Centralised logging for the API and the setup scripts.
Console output plus a size-rotated file under LOG_DIR (defaults to <repo>/logs).
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from spotfinder.config import settings

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")

# Third-party loggers that flood INFO with per-statement/per-request noise
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")

_configured = False


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    log_dir = settings.LOG_DIR or _DEFAULT_LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    handlers = [logging.StreamHandler()]
    # 10 × 5MB files; location/report audit trail survives restarts
    handlers.append(RotatingFileHandler(
        filename=os.path.join(log_dir, settings.LOG_FILE),
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    ))

    root = logging.getLogger()
    root.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(fmt)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
