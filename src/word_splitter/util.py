from __future__ import annotations
import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_LEVEL_ENV = "WSPLIT_LOG_LEVEL"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure stdlib logging once.

    Respects env var WSPLIT_LOG_LEVEL if `level` is None.
    """
    lvl = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logging.basicConfig(level=getattr(logging, lvl, logging.WARNING), format=_DEFAULT_FORMAT)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
